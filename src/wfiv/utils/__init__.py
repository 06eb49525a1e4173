"""Utility functions for wfiv.

This module provides utility functions including:

- Logging setup and configuration
- Run statistics
- Cooperative cancellation
"""

from wfiv.utils.cancel import CancelToken
from wfiv.utils.logging import (
    RenderLogger,
    RenderStats,
    configure_logging,
    null_logger,
)

__all__ = [
    "CancelToken",
    "RenderLogger",
    "RenderStats",
    "configure_logging",
    "null_logger",
]
