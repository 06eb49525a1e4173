"""Font family and face representations.

This module defines the catalog entry for a font family and the resolved
reference to one of its downloadable faces.
"""

from dataclasses import dataclass, field
from typing import Any

WOFF2_CONTENT_TYPE = "font/woff2"


@dataclass(frozen=True)
class FamilyDescriptor:
    """A font family offered by the catalog.

    Only ``family`` is interpreted by wfiv; the remaining fields are
    carried through from the catalog for display.

    Attributes:
        family: Family name, unique within a catalog snapshot
        category: Catalog category (e.g., "sans-serif", "display")
        variants: Available variants (e.g., "regular", "700italic")
        subsets: Supported subsets (e.g., "latin", "cyrillic")
        version: Catalog version string
        last_modified: Date of the last catalog update
        files: Mapping of variant to font file URL
    """

    family: str
    category: str = ""
    variants: tuple[str, ...] = ()
    subsets: tuple[str, ...] = ()
    version: str = ""
    last_modified: str = ""
    files: dict[str, str] = field(default_factory=dict, hash=False, compare=False)

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "FamilyDescriptor":
        """Build a descriptor from a Webfonts API item.

        Args:
            item: One element of the API response ``items`` list

        Returns:
            FamilyDescriptor instance

        Raises:
            KeyError: If the item has no ``family`` key
        """
        return cls(
            family=item["family"],
            category=item.get("category", ""),
            variants=tuple(item.get("variants", ())),
            subsets=tuple(item.get("subsets", ())),
            version=item.get("version", ""),
            last_modified=item.get("lastModified", ""),
            files=dict(item.get("files", {})),
        )


@dataclass(frozen=True)
class FontFaceReference:
    """A resolved, downloadable face of a family.

    Attributes:
        family: Family name the face belongs to
        src: Source URL of the face data (may be empty)
        content_type: MIME type the source must be served with
        style: CSS font-style of the face
        weight: CSS font-weight of the face
        unicode_range: CSS unicode-range of the face
        subset: Subset label from the stylesheet (e.g., "latin")
    """

    family: str
    src: str
    content_type: str = WOFF2_CONTENT_TYPE
    style: str = "normal"
    weight: str = "400"
    unicode_range: str = ""
    subset: str = ""
