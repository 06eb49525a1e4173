"""Font preview rasterization.

This module turns font data into a preview image. fontTools decodes the
WOFF2 container into plain sfnt data and Pillow draws the sample text.

Styles that the downloaded face does not provide are synthesized: heavier
weights by stroking the glyph outlines and italics by shearing the image.

Key functions/classes:
- rasterize: Render font data into a preview image
- RasterizerAdapter: Contains rasterization failures to one family
"""

import io
from collections.abc import Callable
from typing import Any

from fontTools.ttLib import TTFont
from PIL import Image, ImageDraw, ImageFont

from wfiv.config import FontVariant, RenderConfig
from wfiv.exceptions import RasterizeFailed
from wfiv.utils.logging import null_logger

SAMPLE_LINES = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
    "0123456789 !\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~",
)

ITALIC_SHEAR = 0.2
LINE_SPACING = 1.15
SMALL_CAPS_SCALE = 0.75
SCRIPT_SCALE = 0.6

Engine = Callable[..., Image.Image]


def decode_font(data: bytes) -> tuple[bytes, str]:
    """Decode WOFF/WOFF2 or sfnt data into sfnt data.

    Args:
        data: Raw font data

    Returns:
        Tuple of (sfnt data, family name from the name table)
    """
    font = TTFont(io.BytesIO(data))
    try:
        name = ""
        if "name" in font:
            name = font["name"].getBestFamilyName() or ""
        if font.flavor is None:
            return data, name
        font.flavor = None
        out = io.BytesIO()
        font.save(out)
        return out.getvalue(), name
    finally:
        font.close()


def _runs(
    line: str,
    variant: FontVariant,
    font: ImageFont.FreeTypeFont,
    small: ImageFont.FreeTypeFont,
    px: int,
) -> list[tuple[str, ImageFont.FreeTypeFont, int]]:
    """Split a line into (text, font, baseline offset) runs."""
    if variant is FontVariant.SMALL_CAPS:
        runs: list[tuple[str, ImageFont.FreeTypeFont, int]] = []
        for ch in line:
            lower = ch.islower()
            text = ch.upper() if lower else ch
            face = small if lower else font
            if runs and runs[-1][1] is face:
                runs[-1] = (runs[-1][0] + text, face, 0)
            else:
                runs.append((text, face, 0))
        return runs
    if variant is FontVariant.SUBSCRIPT:
        return [(line, small, round(px * 0.2))]
    if variant is FontVariant.SUPERSCRIPT:
        return [(line, small, -round(px * 0.4))]
    return [(line, font, 0)]


def rasterize(data: bytes, config: RenderConfig, title: str = "") -> Image.Image:
    """Render a font preview.

    The preview shows the title (or the face's family name), the alphabet
    in both cases, digits and ASCII punctuation, unless ``config.text``
    overrides the sample text.

    Args:
        data: WOFF2, WOFF, TTF or OTF font data
        config: Render configuration
        title: First line of the sample text

    Returns:
        RGBA preview image
    """
    sfnt, family_name = decode_font(data)
    px = config.pixel_size
    margin = config.pixel_margin
    fg = config.fg_rgba
    bg = config.bg_rgba

    font = ImageFont.truetype(io.BytesIO(sfnt), size=px)
    small_scale = SMALL_CAPS_SCALE if config.variant is FontVariant.SMALL_CAPS else SCRIPT_SCALE
    small = ImageFont.truetype(io.BytesIO(sfnt), size=max(1, round(px * small_scale)))

    if config.text is not None:
        lines = config.text.splitlines() or [""]
    else:
        lines = [title or family_name, *SAMPLE_LINES]

    stroke = 0
    if config.style.weight > 400:
        stroke = max(1, round(px * (config.style.weight - 400) / 300 * 0.04))

    ascent, descent = font.getmetrics()
    line_height = round((ascent + descent) * LINE_SPACING)
    layout = [_runs(line, config.variant, font, small, px) for line in lines]
    widths = [
        sum(face.getlength(text) for text, face, _ in runs) for runs in layout
    ]

    width = max(1, round(max(widths, default=0)) + 2 * (margin + stroke))
    height = max(1, line_height * len(lines) + 2 * (margin + stroke))
    img = Image.new("RGBA", (width, height), bg)
    draw = ImageDraw.Draw(img)

    baseline = margin + stroke + ascent
    for runs in layout:
        x = float(margin + stroke)
        for text, face, dy in runs:
            draw.text(
                (x, baseline + dy),
                text,
                font=face,
                fill=fg,
                anchor="ls",
                stroke_width=stroke,
                stroke_fill=fg,
            )
            x += face.getlength(text)
        baseline += line_height

    if config.style.italic:
        offset = round(ITALIC_SHEAR * height)
        img = img.transform(
            (width + offset, height),
            Image.Transform.AFFINE,
            (1, ITALIC_SHEAR, -offset, 0, 1, 0),
            resample=Image.Resampling.BICUBIC,
            fillcolor=bg,
        )
    return img


class RasterizerAdapter:
    """Renders font data, containing any engine failure to one family.

    Example:
        adapter = RasterizerAdapter(RenderConfig(size=32))
        image = adapter.render("Roboto", data)
    """

    def __init__(
        self,
        config: RenderConfig,
        engine: Engine = rasterize,
        logger: Any | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Render configuration shared by the run
            engine: Rasterization engine taking (data, config, title)
            logger: Structured logger
        """
        self.config = config
        self.engine = engine
        self._logger = logger if logger is not None else null_logger()

    def render(self, family: str, data: bytes) -> Image.Image:
        """Render a family's font data.

        Args:
            family: Family name (used as the preview title)
            data: Font data

        Returns:
            The engine's image, unmodified

        Raises:
            RasterizeFailed: If the engine raises anything
        """
        try:
            return self.engine(data, self.config, family)
        except Exception as e:
            self._logger.debug(
                "Rasterization failed", family=family, error=repr(e), exc_info=True
            )
            raise RasterizeFailed(family, f"caught {type(e).__name__}: {e}") from e
