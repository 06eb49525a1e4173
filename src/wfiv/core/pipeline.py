"""Sequential preview rendering for selected families.

Families are rendered one at a time, in selection order, and every result
is written to the sink as soon as it is available. A failure for one family
is reported inline and never stops the run; only cancellation does.

Key classes:
- FontPreviewer: Fetch, rasterize and emit previews for a selection
"""

import time
from collections.abc import Sequence
from typing import Any, Protocol, TextIO

from PIL import Image

from wfiv.core.fetcher import FontFetcher
from wfiv.core.rasterizer import RasterizerAdapter
from wfiv.domain import FamilyDescriptor, RenderResult
from wfiv.exceptions import Canceled, EncodeFailed, FamilyError
from wfiv.utils.cancel import CancelToken
from wfiv.utils.logging import RenderLogger, RenderStats


class ImageEncoder(Protocol):
    """Writes an image to a text sink."""

    def encode(self, sink: TextIO, image: Image.Image) -> None: ...


class FontPreviewer:
    """Renders previews for a family selection.

    Manages the per-family workflow:
    1. Write a header line naming the family
    2. Fetch the family's WOFF2 data
    3. Rasterize the data into an image
    4. Encode the image to the sink, or write an error line

    Example:
        previewer = FontPreviewer(fetcher, RasterizerAdapter(config), encoder)
        stats = previewer.run(selection, sys.stdout)
    """

    def __init__(
        self,
        fetcher: FontFetcher,
        rasterizer: RasterizerAdapter,
        encoder: ImageEncoder,
        logger: Any | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.rasterizer = rasterizer
        self.encoder = encoder
        self.logger = logger

    def render_family(
        self, family: FamilyDescriptor, token: CancelToken | None = None
    ) -> RenderResult:
        """Fetch and rasterize one family.

        Per-family failures are captured in the result.

        Raises:
            Canceled: If the token is cancelled during the fetch
        """
        start = time.time()
        try:
            data = self.fetcher.fetch(family.family, token)
            image = self.rasterizer.render(family.family, data)
        except FamilyError as e:
            return RenderResult(family=family, error=e, duration_ms=(time.time() - start) * 1000)
        return RenderResult(family=family, image=image, duration_ms=(time.time() - start) * 1000)

    def emit(self, result: RenderResult, sink: TextIO) -> FamilyError | None:
        """Write a result's image or error line to the sink.

        Returns:
            The family's error, including encoder failures, or None
        """
        error = result.error
        if result.image is not None:
            try:
                self.encoder.encode(sink, result.image)
            except Exception as e:
                error = EncodeFailed(result.family.family, str(e))
        if error is not None:
            sink.write(f"error: {error}\n")
        return error

    def run(
        self,
        selection: Sequence[FamilyDescriptor],
        sink: TextIO,
        token: CancelToken | None = None,
    ) -> RenderStats:
        """Render every selected family to the sink, in order.

        Args:
            selection: Families to render
            sink: Text stream receiving headers, images and error lines
            token: Cancellation token for the run

        Returns:
            Run statistics

        Raises:
            Canceled: If the token is cancelled or the run is interrupted
        """
        token = token or CancelToken()
        tracker = RenderLogger(self.logger)
        stats = tracker.stats
        stats.start_time = time.time()
        total = len(selection)

        try:
            for family in selection:
                token.raise_if_cancelled(stats.total_count, total - stats.total_count)
                tracker.log_family_start(family.family)
                sink.write(f"{family.family}:\n")
                result = self.render_family(family, token)
                error = self.emit(result, sink)
                sink.flush()
                if error is None:
                    tracker.log_family_complete(
                        family.family, result.duration_ms, result.image.size  # type: ignore[union-attr]
                    )
                else:
                    tracker.log_family_error(family.family, error, result.duration_ms)
        except KeyboardInterrupt:
            token.cancel()
            raise Canceled(stats.total_count, total - stats.total_count) from None
        except Canceled as e:
            raise Canceled(stats.total_count, total - stats.total_count) from e
        finally:
            stats.end_time = time.time()

        return stats
