"""Per-family render outcome."""

from dataclasses import dataclass

from PIL import Image

from wfiv.domain.family import FamilyDescriptor
from wfiv.exceptions import FamilyError


@dataclass
class RenderResult:
    """Outcome of rendering one family: an image or an error.

    Attributes:
        family: The family that was rendered
        image: Rendered preview on success
        error: Failure on error
        duration_ms: Time spent fetching and rasterizing
    """

    family: FamilyDescriptor
    image: Image.Image | None = None
    error: FamilyError | None = None
    duration_ms: float = 0.0

    def __post_init__(self) -> None:
        if (self.image is None) == (self.error is None):
            raise ValueError("RenderResult needs exactly one of image or error")

    @property
    def ok(self) -> bool:
        """Whether rendering succeeded."""
        return self.error is None
