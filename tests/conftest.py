"""Shared fixtures for wfiv tests."""

import io

import pytest
import requests
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from requests.structures import CaseInsensitiveDict

from wfiv.domain import FamilyDescriptor


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((450, 700))
    pen.lineTo((450, 0))
    pen.closePath()
    return pen.glyph()


def build_font(family: str = "Test Sans", flavor: str | None = None) -> bytes:
    """Build a small TrueType font where every printable ASCII char is a box."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "space", "box"])
    cmap = {ord(" "): "space"}
    for code in range(0x21, 0x7F):
        cmap[code] = "box"
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(
        {
            ".notdef": _box_glyph(),
            "space": TTGlyphPen(None).glyph(),
            "box": _box_glyph(),
        }
    )
    fb.setupHorizontalMetrics({".notdef": (500, 50), "space": (250, 0), "box": (500, 50)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    if flavor:
        fb.font.flavor = flavor
    buf = io.BytesIO()
    fb.save(buf)
    return buf.getvalue()


def make_response(
    status: int = 200,
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    url: str = "https://example.com/",
) -> requests.Response:
    """Build a requests Response backed by an in-memory body."""
    res = requests.Response()
    res.status_code = status
    res.reason = "OK" if status == 200 else "Error"
    res.headers = CaseInsensitiveDict(headers or {})
    res.raw = io.BytesIO(body)
    res.url = url
    return res


@pytest.fixture(scope="session")
def ttf_data() -> bytes:
    """TrueType font data."""
    return build_font()


@pytest.fixture(scope="session")
def woff2_data() -> bytes:
    """WOFF2 font data."""
    return build_font(flavor="woff2")


@pytest.fixture
def catalog() -> list[FamilyDescriptor]:
    """A small catalog in API order."""
    return [
        FamilyDescriptor(family="Roboto", category="sans-serif"),
        FamilyDescriptor(family="Open Sans", category="sans-serif"),
        FamilyDescriptor(family="Oswald", category="sans-serif"),
    ]


@pytest.fixture
def response_factory():
    """Factory for in-memory requests Responses."""
    return make_response


@pytest.fixture
def font_factory():
    """Factory for test font data."""
    return build_font
