"""On-disk HTTP cache and the requests transport adapter built on it.

Entries are keyed by request method and URL and expire after a fixed TTL.
Only whitelisted response headers are stored, error responses can be kept
without their body, and entries are gzip compressed by default.

Key classes:
- DiskCache: TTL'd response store under a cache directory
- CachingAdapter: requests transport adapter serving GETs from DiskCache
"""

import gzip
import hashlib
import io
import json
import os
import tempfile
import time
import zlib
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from wfiv.config import ApiConfig, CacheConfig
from wfiv.utils.logging import null_logger


@dataclass
class CachedResponse:
    """A response as stored in the disk cache.

    Attributes:
        url: Request URL the response belongs to
        status: HTTP status code
        reason: HTTP reason phrase
        headers: Whitelisted response headers
        body: Response body (empty for truncated error responses)
        stored_at: Unix time the entry was written
    """

    url: str
    status: int
    reason: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    stored_at: float = 0.0


class DiskCache:
    """TTL'd response store on disk.

    Example:
        cache = DiskCache(Path("~/.cache/wfiv").expanduser())
        cache.put("GET", url, 200, "OK", {"Content-Type": "font/woff2"}, data)
        entry = cache.get("GET", url)
    """

    def __init__(
        self,
        root: Path,
        ttl: float = 14 * 24 * 60 * 60,
        compress: bool = True,
        header_whitelist: tuple[str, ...] | None = None,
        truncate_errors: bool = True,
        logger: Any | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            root: Directory holding cache entries (created on first write)
            ttl: Time-to-live of entries in seconds
            compress: Whether entries are gzip compressed
            header_whitelist: Header names to keep (None keeps all)
            truncate_errors: Drop the body of responses with status >= 400
            logger: Structured logger
        """
        self.root = root
        self.ttl = ttl
        self.compress = compress
        self.header_whitelist = (
            {name.lower() for name in header_whitelist}
            if header_whitelist is not None
            else None
        )
        self.truncate_errors = truncate_errors
        self._logger = logger if logger is not None else null_logger()

    @classmethod
    def from_config(cls, config: CacheConfig, logger: Any | None = None) -> "DiskCache":
        """Create a cache from configuration."""
        return cls(
            root=config.cache_dir,
            ttl=config.ttl_seconds,
            compress=config.compress,
            header_whitelist=config.header_whitelist,
            truncate_errors=config.truncate_errors,
            logger=logger,
        )

    def key(self, method: str, url: str) -> str:
        """Return the cache key for a request."""
        return hashlib.sha256(f"{method.upper()} {url}".encode()).hexdigest()

    def path_for(self, method: str, url: str) -> Path:
        """Return the entry path for a request."""
        suffix = ".gz" if self.compress else ".bin"
        return self.root / f"{self.key(method, url)}{suffix}"

    def get(self, method: str, url: str) -> CachedResponse | None:
        """Return a fresh entry for the request, or None.

        Expired and unreadable entries are removed.
        """
        path = self.path_for(method, url)
        if not path.is_file():
            return None
        try:
            data = path.read_bytes()
            if self.compress:
                data = gzip.decompress(data)
            header, _, body = data.partition(b"\n")
            meta = json.loads(header)
            entry = CachedResponse(
                url=meta["url"],
                status=int(meta["status"]),
                reason=meta.get("reason", ""),
                headers=dict(meta.get("headers", {})),
                body=body,
                stored_at=float(meta["stored_at"]),
            )
        except (OSError, EOFError, zlib.error, ValueError, KeyError, TypeError) as e:
            self._logger.debug("Discarding unreadable cache entry", path=str(path), error=str(e))
            path.unlink(missing_ok=True)
            return None

        if time.time() - entry.stored_at > self.ttl:
            self._logger.debug("Discarding expired cache entry", url=url)
            path.unlink(missing_ok=True)
            return None
        return entry

    def put(
        self,
        method: str,
        url: str,
        status: int,
        reason: str,
        headers: dict[str, str],
        body: bytes,
    ) -> CachedResponse:
        """Store a response and return the stored entry."""
        if self.header_whitelist is not None:
            headers = {k: v for k, v in headers.items() if k.lower() in self.header_whitelist}
        if self.truncate_errors and status >= 400:
            body = b""
        entry = CachedResponse(
            url=url,
            status=status,
            reason=reason,
            headers=dict(headers),
            body=body,
            stored_at=time.time(),
        )
        meta = {
            "url": entry.url,
            "status": entry.status,
            "reason": entry.reason,
            "headers": entry.headers,
            "stored_at": entry.stored_at,
        }
        data = json.dumps(meta).encode() + b"\n" + entry.body
        if self.compress:
            data = gzip.compress(data)

        self.root.mkdir(parents=True, exist_ok=True)
        path = self.path_for(method, url)
        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return entry

    def purge(self) -> int:
        """Remove every entry and return how many were removed."""
        if not self.root.is_dir():
            return 0
        count = 0
        for path in self.root.iterdir():
            if path.is_file() and path.suffix in (".gz", ".bin"):
                path.unlink(missing_ok=True)
                count += 1
        return count


class CachingBody:
    """Response body that is stored in the cache once read to the end.

    Chunks are passed through to the reader as they arrive. A body that is
    cut off or abandoned part way is never stored.
    """

    def __init__(self, raw: Any, on_complete: Callable[[bytes], None]) -> None:
        self._raw = raw
        self._on_complete = on_complete
        self._buf = bytearray()
        self._done = False

    def stream(self, amt: int = 64 * 1024, decode_content: bool | None = None) -> Iterator[bytes]:
        """Yield the body in chunks, storing it after the last one."""
        if hasattr(self._raw, "stream"):
            chunks = self._raw.stream(amt, decode_content=decode_content)
        else:
            chunks = iter(lambda: self._raw.read(amt), b"")
        for chunk in chunks:
            self._buf.extend(chunk)
            yield chunk
        if not self._done:
            self._done = True
            self._on_complete(bytes(self._buf))

    def close(self) -> None:
        self._raw.close()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._raw, name)


class CachingAdapter(HTTPAdapter):
    """Transport adapter serving GET requests from a DiskCache.

    Cache misses are fetched by the regular urllib3 adapter and returned
    with a body that is stored once the caller has read all of it. Other
    methods bypass the cache. The cache is best effort: disk errors are
    logged and the request is served from the network.
    """

    def __init__(self, cache: DiskCache, logger: Any | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.cache = cache
        self._logger = logger if logger is not None else null_logger()

    def send(
        self,
        request: requests.PreparedRequest,
        stream: bool = False,
        timeout: Any = None,
        verify: Any = True,
        cert: Any = None,
        proxies: Any = None,
    ) -> requests.Response:
        """Send a request, consulting the cache for GETs."""
        url = request.url or ""
        method = request.method or "GET"
        if method.upper() != "GET":
            return super().send(
                request, stream=stream, timeout=timeout, verify=verify, cert=cert, proxies=proxies
            )

        try:
            cached = self.cache.get(method, url)
        except OSError as e:
            self._logger.warning("HTTP cache read failed", url=url, error=str(e))
            cached = None
        if cached is not None:
            self._logger.debug("HTTP cache hit", method=method, url=url, status=cached.status)
            return self.build_cached_response(request, cached)

        start = time.time()
        response = super().send(
            request, stream=stream, timeout=timeout, verify=verify, cert=cert, proxies=proxies
        )
        self._logger.debug(
            "HTTP cache miss",
            method=method,
            url=url,
            status=response.status_code,
            duration_ms=round((time.time() - start) * 1000, 2),
        )
        status = response.status_code
        reason = response.reason or ""
        headers = dict(response.headers)

        def store(body: bytes) -> None:
            self._store(method, url, status, reason, headers, body)

        if self.cache.truncate_errors and status >= 400:
            store(b"")
        else:
            response.raw = CachingBody(response.raw, store)
        response.from_cache = False  # type: ignore[attr-defined]
        return response

    def _store(
        self,
        method: str,
        url: str,
        status: int,
        reason: str,
        headers: dict[str, str],
        body: bytes,
    ) -> None:
        try:
            self.cache.put(method, url, status, reason, headers, body)
        except OSError as e:
            self._logger.warning("HTTP cache write failed", url=url, error=str(e))
            return
        self._logger.debug("HTTP response cached", url=url, status=status, bytes=len(body))

    def build_cached_response(
        self, request: requests.PreparedRequest, cached: CachedResponse
    ) -> requests.Response:
        """Build a requests Response from a cache entry."""
        response = requests.Response()
        response.status_code = cached.status
        response.reason = cached.reason
        response.headers = CaseInsensitiveDict(cached.headers)
        response.raw = io.BytesIO(cached.body)
        response.url = request.url or cached.url
        response.request = request
        response.encoding = get_encoding_from_headers(response.headers)
        response.connection = self
        response.from_cache = True  # type: ignore[attr-defined]
        return response


def build_session(
    cache_config: CacheConfig | None = None,
    api_config: ApiConfig | None = None,
    logger: Any | None = None,
) -> requests.Session:
    """Create the HTTP session shared by a run.

    Args:
        cache_config: Disk cache settings (defaults if None)
        api_config: API settings providing the User-Agent (defaults if None)
        logger: Structured logger for HTTP traffic

    Returns:
        Session with the caching adapter mounted for http and https
    """
    cache_config = cache_config or CacheConfig()
    api_config = api_config or ApiConfig()

    session = requests.Session()
    session.headers["User-Agent"] = api_config.user_agent
    if cache_config.enabled:
        adapter: HTTPAdapter = CachingAdapter(DiskCache.from_config(cache_config, logger), logger)
    else:
        adapter = HTTPAdapter()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session
