"""Inline image output for graphics-capable terminals.

Supports the kitty graphics protocol and the iTerm2 inline image protocol.
Both carry a base64 encoded PNG inside an escape sequence.
"""

import base64
import io
import os
from collections.abc import Mapping
from enum import Enum
from typing import TextIO

from PIL import Image

from wfiv.exceptions import TerminalUnsupported

KITTY_CHUNK_SIZE = 4096

ITERM_PROGRAMS = ("iTerm.app", "WezTerm", "mintty", "rio", "Tabby")


class GraphicsProtocol(str, Enum):
    """Terminal inline graphics protocol."""

    KITTY = "kitty"
    ITERM = "iterm"


def detect_protocol(env: Mapping[str, str] | None = None) -> GraphicsProtocol | None:
    """Detect the inline graphics protocol supported by the terminal.

    Args:
        env: Environment to inspect (defaults to os.environ)

    Returns:
        Detected protocol, or None if the terminal has no known support
    """
    env = os.environ if env is None else env
    forced = env.get("WFIV_GRAPHICS", "").lower()
    if forced:
        try:
            return GraphicsProtocol(forced)
        except ValueError:
            return None

    term = env.get("TERM", "").lower()
    program = env.get("TERM_PROGRAM", "")
    if "kitty" in term or "ghostty" in term or env.get("KITTY_WINDOW_ID"):
        return GraphicsProtocol.KITTY
    if program.lower() == "ghostty":
        return GraphicsProtocol.KITTY
    if program in ITERM_PROGRAMS or env.get("LC_TERMINAL") == "iTerm2":
        return GraphicsProtocol.ITERM
    return None


def available(env: Mapping[str, str] | None = None) -> bool:
    """Whether the terminal can display inline images."""
    return detect_protocol(env) is not None


def require_graphics(env: Mapping[str, str] | None = None) -> GraphicsProtocol:
    """Return the terminal's graphics protocol.

    Raises:
        TerminalUnsupported: If the terminal cannot display inline images
    """
    protocol = detect_protocol(env)
    if protocol is None:
        raise TerminalUnsupported()
    return protocol


def _png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


class TerminalEncoder:
    """Writes images to a text stream as terminal escape sequences.

    Example:
        encoder = TerminalEncoder(GraphicsProtocol.KITTY)
        encoder.encode(sys.stdout, image)
    """

    def __init__(self, protocol: GraphicsProtocol) -> None:
        self.protocol = protocol

    def encode(self, sink: TextIO, image: Image.Image) -> None:
        """Write the image to the sink, followed by a newline."""
        png = _png_bytes(image)
        data = base64.standard_b64encode(png).decode("ascii")
        if self.protocol is GraphicsProtocol.KITTY:
            sink.write(self._kitty(data))
        else:
            sink.write(self._iterm(data, len(png), image.size))
        sink.write("\n")

    def _kitty(self, data: str) -> str:
        chunks = [
            data[i : i + KITTY_CHUNK_SIZE] for i in range(0, len(data), KITTY_CHUNK_SIZE)
        ] or [""]
        out = []
        for i, chunk in enumerate(chunks):
            more = 1 if i < len(chunks) - 1 else 0
            if i == 0:
                out.append(f"\x1b_Ga=T,f=100,q=2,m={more};{chunk}\x1b\\")
            else:
                out.append(f"\x1b_Gm={more};{chunk}\x1b\\")
        return "".join(out)

    def _iterm(self, data: str, size: int, dims: tuple[int, int]) -> str:
        width, height = dims
        return (
            f"\x1b]1337;File=inline=1;size={size};width={width}px;height={height}px;"
            f"preserveAspectRatio=1:{data}\x07"
        )
