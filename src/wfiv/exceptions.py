"""Exception hierarchy for wfiv."""


class WfivError(Exception):
    """Base exception for all wfiv errors."""

    pass


class InvalidPattern(WfivError):
    """A family glob pattern could not be compiled."""

    def __init__(self, pattern: str, index: int, reason: str) -> None:
        self.pattern = pattern
        self.index = index
        self.reason = reason
        super().__init__(f"bad arg {pattern!r} ({index}): {reason}")


class MissingCredential(WfivError):
    """A required credential was not provided."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"must provide --{name}")


class TerminalUnsupported(WfivError):
    """The terminal cannot display inline graphics."""

    def __init__(self, reason: str = "terminal graphics not available") -> None:
        self.reason = reason
        super().__init__(reason)


class CatalogError(WfivError):
    """The font family catalog could not be retrieved."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"unable to retrieve font families: {reason}")


class Canceled(WfivError):
    """The run was cancelled before all families were rendered."""

    def __init__(self, processed_count: int = 0, pending_count: int = 0) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"canceled: {processed_count} rendered, {pending_count} pending"
        )


class FamilyError(WfivError):
    """Errors scoped to a single font family.

    These never abort a run; the render loop reports them inline.
    """

    def __init__(self, family: str, message: str) -> None:
        self.family = family
        super().__init__(message)


class FaceResolutionFailed(FamilyError):
    """The family could not be resolved to a WOFF2 face."""

    def __init__(self, family: str, reason: str) -> None:
        self.reason = reason
        super().__init__(family, f"unable to retrieve woff2 font face: {reason}")


class MissingFaceSource(FamilyError):
    """The resolved face has no source URL."""

    def __init__(self, family: str) -> None:
        super().__init__(family, "missing face src")


class FetchFailed(FamilyError):
    """The font data request failed at the transport level."""

    def __init__(self, family: str, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(family, f"unable to retrieve woff2: {reason}")


class InvalidResponse(FamilyError):
    """The font data response had an unexpected status or content type."""

    def __init__(self, family: str, status: int, content_type: str) -> None:
        self.status = status
        self.content_type = content_type
        super().__init__(
            family,
            f"bad woff2 data, status: {status}, content-type: {content_type!r}",
        )


class BodyReadFailed(FamilyError):
    """The font data response body could not be read."""

    def __init__(self, family: str, reason: str) -> None:
        self.reason = reason
        super().__init__(family, f"unable to read font: {reason}")


class RasterizeFailed(FamilyError):
    """The rasterization engine failed on the font data."""

    def __init__(self, family: str, reason: str) -> None:
        self.reason = reason
        super().__init__(family, f"unable to rasterize font: {reason}")


class EncodeFailed(FamilyError):
    """The rendered image could not be written to the terminal."""

    def __init__(self, family: str, reason: str) -> None:
        self.reason = reason
        super().__init__(family, f"unable to encode image: {reason}")
