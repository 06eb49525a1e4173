"""Font data retrieval with strict response validation.

The fetcher resolves a family to its WOFF2 face, downloads the face through
the shared (caching) session and returns the raw bytes. Every failure is
reported as a FamilyError subclass so callers can contain it to one family.
"""

from typing import Any, Protocol

import requests

from wfiv.domain import WOFF2_CONTENT_TYPE, FontFaceReference
from wfiv.exceptions import (
    BodyReadFailed,
    FaceResolutionFailed,
    FetchFailed,
    InvalidResponse,
    MissingFaceSource,
)
from wfiv.utils.cancel import CancelToken
from wfiv.utils.logging import null_logger


class FaceResolver(Protocol):
    """Resolves a family name to a downloadable face."""

    def resolve_woff2(self, family: str) -> FontFaceReference: ...


class FontFetcher:
    """Downloads and validates WOFF2 face data.

    Example:
        fetcher = FontFetcher(session, WebfontsClient(session))
        data = fetcher.fetch("Roboto")
    """

    def __init__(
        self,
        session: requests.Session,
        resolver: FaceResolver,
        timeout: float = 30.0,
        logger: Any | None = None,
        chunk_size: int = 64 * 1024,
    ) -> None:
        """Initialize the fetcher.

        Args:
            session: Shared HTTP session (normally backed by the disk cache)
            resolver: Family to face resolver
            timeout: HTTP timeout in seconds
            logger: Structured logger
            chunk_size: Body read size between cancellation checks
        """
        self.session = session
        self.resolver = resolver
        self.timeout = timeout
        self.chunk_size = chunk_size
        self._logger = logger if logger is not None else null_logger()

    def resolve(self, family: str) -> FontFaceReference:
        """Resolve a family to its face.

        Raises:
            FaceResolutionFailed: If resolution fails for any reason
            MissingFaceSource: If the face has no source URL
        """
        try:
            face = self.resolver.resolve_woff2(family)
        except FaceResolutionFailed:
            raise
        except Exception as e:
            raise FaceResolutionFailed(family, str(e)) from e
        if not face.src:
            raise MissingFaceSource(family)
        return face

    def fetch(self, family: str, token: CancelToken | None = None) -> bytes:
        """Return the WOFF2 data for a family.

        Args:
            family: Family name
            token: Cancellation token for the run

        Returns:
            The response body, exactly as served

        Raises:
            FaceResolutionFailed: If the family cannot be resolved
            MissingFaceSource: If the resolved face has no source URL
            FetchFailed: If the request fails at the transport level
            InvalidResponse: If the status is not 200 or the content type
                is not font/woff2
            BodyReadFailed: If the body cannot be read in full
            Canceled: If the token is cancelled while reading
        """
        token = token or CancelToken()
        face = self.resolve(family)
        expected = face.content_type or WOFF2_CONTENT_TYPE

        self._logger.info("retrieving", family=family, src=face.src)
        token.raise_if_cancelled()
        try:
            res = self.session.get(face.src, stream=True, timeout=self.timeout)
        except (requests.RequestException, OSError) as e:
            raise FetchFailed(family, face.src, str(e)) from e

        with res:
            content_type = res.headers.get("Content-Type", "")
            if res.status_code != 200 or content_type != expected:
                raise InvalidResponse(family, res.status_code, content_type)

            buf = bytearray()
            try:
                for chunk in res.iter_content(chunk_size=self.chunk_size):
                    token.raise_if_cancelled()
                    buf.extend(chunk)
            except (requests.RequestException, OSError) as e:
                raise BodyReadFailed(family, str(e)) from e

        self._logger.debug("retrieved", family=family, bytes=len(buf))
        return bytes(buf)
