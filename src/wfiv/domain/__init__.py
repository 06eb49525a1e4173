"""Domain models for wfiv.

Key classes:
- FamilyDescriptor: A font family offered by the catalog
- FontFaceReference: A resolved, downloadable face of a family
- RenderResult: Image or error produced for one family
"""

from wfiv.domain.family import WOFF2_CONTENT_TYPE, FamilyDescriptor, FontFaceReference
from wfiv.domain.render import RenderResult

__all__: list[str] = [
    "WOFF2_CONTENT_TYPE",
    "FamilyDescriptor",
    "FontFaceReference",
    "RenderResult",
]
