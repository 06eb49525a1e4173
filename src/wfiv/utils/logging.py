"""Logging utilities for wfiv."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog


@dataclass
class RenderStats:
    """Statistics from a render run."""

    rendered_count: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    family_times_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def total_count(self) -> int:
        """Number of families that produced an output block."""
        return self.rendered_count + self.error_count

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_family_time_ms(self) -> float | None:
        """Average time spent per family."""
        if not self.family_times_ms:
            return None
        return sum(self.family_times_ms) / len(self.family_times_ms)


def _drop_event(_logger: Any, _method: str, _event: Any) -> Any:
    raise structlog.DropEvent


def null_logger() -> Any:
    """Return a logger that discards every event."""
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[_drop_event],
        wrapper_class=structlog.BoundLogger,
    )


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to stderr and an optional file.

    Stdout is reserved for family names and preview images, so console
    logging always goes to stderr.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    base_logger = logging.getLogger("wfiv")
    base_logger.setLevel(logging.DEBUG)
    base_logger.propagate = False
    for handler in list(base_logger.handlers):
        base_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        base_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        base_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(
                key_order=["timestamp", "level", "event"], drop_missing=True
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logger = structlog.get_logger("wfiv")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking render progress and statistics."""

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger if logger is not None else null_logger()
        self._stats = RenderStats()

    def log_family_start(self, family: str) -> None:
        """Log start of family rendering."""
        self._logger.debug("Rendering family", family=family)

    def log_family_complete(self, family: str, duration_ms: float, size: tuple[int, int]) -> None:
        """Log successful family rendering."""
        self._logger.info(
            "Family rendered",
            family=family,
            width=size[0],
            height=size[1],
            duration_ms=round(duration_ms, 2),
        )
        self._stats.rendered_count += 1
        self._stats.family_times_ms.append(duration_ms)

    def log_family_error(self, family: str, error: Exception, duration_ms: float = 0.0) -> None:
        """Log family rendering error."""
        self._logger.warning(
            "Family failed",
            family=family,
            error=str(error),
            error_type=type(error).__name__,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.error_count += 1
        self._stats.errors.append((family, str(error)))
        self._stats.family_times_ms.append(duration_ms)

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats
