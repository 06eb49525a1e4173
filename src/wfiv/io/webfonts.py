"""Google Webfonts catalog and face resolution.

The catalog comes from the Webfonts developer API. Faces are resolved
through the CSS API, which answers with ``@font-face`` rules whose sources
are WOFF2 files when the request looks like it comes from a modern browser.
"""

import re
from typing import Any

import requests

from wfiv.domain import WOFF2_CONTENT_TYPE, FamilyDescriptor, FontFaceReference
from wfiv.exceptions import CatalogError, FaceResolutionFailed
from wfiv.utils.logging import null_logger

WEBFONTS_API_URL = "https://www.googleapis.com/webfonts/v1/webfonts"
CSS_API_URL = "https://fonts.googleapis.com/css2"

FONT_FACE_RE = re.compile(
    r"(?:/\*\s*(?P<subset>[\w\-\[\]\.]+)\s*\*/\s*)?@font-face\s*\{(?P<body>[^}]*)\}",
    re.S,
)
URL_RE = re.compile(r"url\(\s*[\"']?(.*?)[\"']?\s*\)", re.I)
FORMAT_RE = re.compile(r"format\(\s*[\"']?(.*?)[\"']?\s*\)", re.I)


def parse_font_faces(family: str, css: str) -> list[FontFaceReference]:
    """Parse ``@font-face`` rules from a stylesheet.

    Args:
        family: Family the stylesheet was requested for
        css: Stylesheet text

    Returns:
        One reference per rule, in stylesheet order
    """
    faces: list[FontFaceReference] = []
    for match in FONT_FACE_RE.finditer(css):
        decls: dict[str, str] = {}
        for decl in match.group("body").split(";"):
            name, sep, value = decl.partition(":")
            if sep:
                decls[name.strip().lower()] = value.strip()

        src = ""
        for candidate in decls.get("src", "").split(","):
            url = URL_RE.search(candidate)
            if not url:
                continue
            fmt = FORMAT_RE.search(candidate)
            if fmt is None or fmt.group(1).lower() == "woff2":
                src = url.group(1)
                break

        faces.append(
            FontFaceReference(
                family=decls.get("font-family", family).strip("'\""),
                src=src,
                content_type=WOFF2_CONTENT_TYPE,
                style=decls.get("font-style", "normal"),
                weight=decls.get("font-weight", "400"),
                unicode_range=decls.get("unicode-range", ""),
                subset=match.group("subset") or "",
            )
        )
    return faces


def pick_face(faces: list[FontFaceReference]) -> FontFaceReference | None:
    """Pick the face to preview: the latin subset, else the last face."""
    for face in faces:
        if face.subset == "latin":
            return face
    return faces[-1] if faces else None


class WebfontsClient:
    """Client for the Webfonts catalog and CSS APIs.

    All requests go through the given session, so a caching session makes
    repeated runs cheap.

    Example:
        client = WebfontsClient(session, key="...")
        for family in client.families():
            print(family.family)
    """

    def __init__(
        self,
        session: requests.Session,
        key: str | None = None,
        timeout: float = 30.0,
        logger: Any | None = None,
    ) -> None:
        self.session = session
        self.key = key
        self.timeout = timeout
        self._logger = logger if logger is not None else null_logger()

    def families(self, sort: str = "alpha") -> list[FamilyDescriptor]:
        """Retrieve the available font families.

        Args:
            sort: Catalog sort order (alpha, date, popularity, style, trending)

        Returns:
            Family descriptors in catalog order

        Raises:
            CatalogError: If the catalog cannot be retrieved or decoded
        """
        params = {"sort": sort}
        if self.key:
            params["key"] = self.key
        self._logger.debug("Retrieving font families", sort=sort)
        try:
            res = self.session.get(WEBFONTS_API_URL, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise CatalogError(str(e)) from e

        with res:
            if res.status_code != 200:
                raise CatalogError(_api_error(res))
            try:
                items = res.json().get("items", [])
                families = [FamilyDescriptor.from_api(item) for item in items]
            except (ValueError, AttributeError, KeyError, TypeError) as e:
                raise CatalogError(f"invalid catalog response: {e}") from e

        self._logger.debug("Retrieved font families", count=len(families))
        return families

    def resolve_woff2(self, family: str) -> FontFaceReference:
        """Resolve a family to its WOFF2 face.

        Args:
            family: Family name

        Returns:
            Reference to the face (``src`` may be empty)

        Raises:
            FaceResolutionFailed: If the stylesheet cannot be retrieved or
                declares no faces
        """
        try:
            res = self.session.get(CSS_API_URL, params={"family": family}, timeout=self.timeout)
        except requests.RequestException as e:
            raise FaceResolutionFailed(family, str(e)) from e

        with res:
            if res.status_code != 200:
                raise FaceResolutionFailed(family, f"status: {res.status_code}")
            css = res.text

        face = pick_face(parse_font_faces(family, css))
        if face is None:
            raise FaceResolutionFailed(family, "no font faces declared")
        self._logger.debug("Resolved face", family=family, src=face.src, subset=face.subset)
        return face


def _api_error(res: requests.Response) -> str:
    try:
        message = res.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"status: {res.status_code}"
    return f"status: {res.status_code}: {message}"
