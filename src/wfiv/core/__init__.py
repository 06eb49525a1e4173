"""Core retrieval-and-render pipeline for wfiv.

This module contains:

- Family selection by glob patterns
- Font data retrieval with strict response validation
- Rasterization with failure containment
- The sequential render loop

Key functions:
- compile_glob / compile_patterns: Compile user glob patterns
- select_families: Build the ordered selection from the catalog
- rasterize: Render font data into a preview image

Key classes:
- FontFetcher: Downloads and validates WOFF2 face data
- RasterizerAdapter: Converts engine failures into RasterizeFailed
- FontPreviewer: Renders a selection family by family
"""

from wfiv.core.fetcher import FaceResolver, FontFetcher
from wfiv.core.matcher import GlobPattern, compile_glob, compile_patterns, select_families
from wfiv.core.pipeline import FontPreviewer, ImageEncoder
from wfiv.core.rasterizer import RasterizerAdapter, decode_font, rasterize

__all__ = [
    "FaceResolver",
    "FontFetcher",
    "FontPreviewer",
    "GlobPattern",
    "ImageEncoder",
    "RasterizerAdapter",
    "compile_glob",
    "compile_patterns",
    "decode_font",
    "rasterize",
    "select_families",
]
