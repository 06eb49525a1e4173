"""Tests for domain models to verify they work correctly."""

import dataclasses

import pytest
from PIL import Image

from wfiv.domain import WOFF2_CONTENT_TYPE, FamilyDescriptor, FontFaceReference, RenderResult
from wfiv.exceptions import MissingFaceSource


class TestFamilyDescriptor:
    """Tests for FamilyDescriptor class."""

    def test_from_api(self) -> None:
        """Test creation from a Webfonts API item."""
        item = {
            "family": "Open Sans",
            "variants": ["300", "regular", "italic"],
            "subsets": ["latin", "greek"],
            "version": "v40",
            "lastModified": "2024-05-02",
            "files": {"regular": "https://fonts.gstatic.com/s/opensans/v40/x.ttf"},
            "category": "sans-serif",
            "kind": "webfonts#webfont",
        }
        family = FamilyDescriptor.from_api(item)
        assert family.family == "Open Sans"
        assert family.category == "sans-serif"
        assert family.variants == ("300", "regular", "italic")
        assert family.subsets == ("latin", "greek")
        assert family.version == "v40"
        assert family.last_modified == "2024-05-02"
        assert family.files["regular"].endswith("x.ttf")

    def test_from_api_minimal(self) -> None:
        """Test only the family name is required."""
        family = FamilyDescriptor.from_api({"family": "Abel"})
        assert family == FamilyDescriptor(family="Abel")
        assert family.variants == ()

    def test_from_api_missing_family(self) -> None:
        """Test items without a family name are rejected."""
        with pytest.raises(KeyError):
            FamilyDescriptor.from_api({"category": "serif"})

    def test_immutable(self) -> None:
        """Test descriptors cannot be modified."""
        family = FamilyDescriptor(family="Roboto")
        with pytest.raises(dataclasses.FrozenInstanceError):
            family.family = "Oswald"  # type: ignore[misc]

    def test_hashable_despite_files(self) -> None:
        """Test descriptors hash by value, ignoring the files mapping."""
        a = FamilyDescriptor(family="Roboto", files={"regular": "a"})
        b = FamilyDescriptor(family="Roboto", files={"regular": "b"})
        assert a == b
        assert len({a, b}) == 1


class TestFontFaceReference:
    """Tests for FontFaceReference class."""

    def test_defaults(self) -> None:
        """Test default face attributes."""
        face = FontFaceReference(family="Roboto", src="https://x/r.woff2")
        assert face.content_type == WOFF2_CONTENT_TYPE
        assert face.style == "normal"
        assert face.weight == "400"
        assert face.subset == ""


class TestRenderResult:
    """Tests for RenderResult class."""

    def test_image_result(self) -> None:
        """Test a successful result."""
        result = RenderResult(family=FamilyDescriptor("Roboto"), image=Image.new("RGBA", (1, 1)))
        assert result.ok

    def test_error_result(self) -> None:
        """Test a failed result."""
        result = RenderResult(family=FamilyDescriptor("Roboto"), error=MissingFaceSource("Roboto"))
        assert not result.ok
        assert str(result.error) == "missing face src"

    def test_requires_exactly_one_outcome(self) -> None:
        """Test a result holds either an image or an error."""
        with pytest.raises(ValueError):
            RenderResult(family=FamilyDescriptor("Roboto"))
        with pytest.raises(ValueError):
            RenderResult(
                family=FamilyDescriptor("Roboto"),
                image=Image.new("RGBA", (1, 1)),
                error=MissingFaceSource("Roboto"),
            )
