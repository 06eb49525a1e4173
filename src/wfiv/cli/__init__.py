"""Command-line interface for wfiv.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- `list` prints every catalog family
- `show` renders previews of families selected by glob patterns
- `cache clear` empties the on-disk HTTP cache
"""

from wfiv.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
