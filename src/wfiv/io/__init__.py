"""I/O layer for wfiv.

This module talks to the outside world: the HTTP cache, the Google
Webfonts APIs, and the terminal.

Key classes:
- DiskCache: TTL'd on-disk response store
- CachingAdapter: requests transport adapter backed by DiskCache
- WebfontsClient: Family catalog and WOFF2 face resolution
- TerminalEncoder: Inline image output for kitty and iTerm2 terminals
"""

from wfiv.io.cache import CachedResponse, CachingAdapter, DiskCache, build_session
from wfiv.io.terminal import (
    GraphicsProtocol,
    TerminalEncoder,
    available,
    detect_protocol,
    require_graphics,
)
from wfiv.io.webfonts import WebfontsClient, parse_font_faces, pick_face

__all__ = [
    "CachedResponse",
    "CachingAdapter",
    "DiskCache",
    "GraphicsProtocol",
    "TerminalEncoder",
    "WebfontsClient",
    "available",
    "build_session",
    "detect_protocol",
    "parse_font_faces",
    "pick_face",
    "require_graphics",
]
