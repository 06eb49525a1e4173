"""Rich console output helpers for the CLI.

Stdout carries family names and preview images, so every human-facing
message goes to stderr.
"""

from rich.console import Console
from rich.markup import escape

from wfiv.utils.logging import RenderStats

console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_selection(selected: int, total: int) -> None:
    """Print how many catalog families were selected.

    Args:
        selected: Number of families selected for rendering
        total: Number of families in the catalog
    """
    console.print(f"[dim]{selected} of {total:,} families selected[/dim]")


def print_summary(stats: RenderStats) -> None:
    """Print a summary of a render run.

    Args:
        stats: Statistics of the finished run
    """
    error_style = "red" if stats.error_count > 0 else "green"
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(stats.duration_seconds)}"
    )
    console.print(
        f"  {stats.rendered_count} rendered {SYM_DOT} "
        f"[{error_style}]{stats.error_count} errors[/{error_style}]"
    )
    if stats.avg_family_time_ms is not None:
        console.print(f"  {stats.avg_family_time_ms:.1f}ms avg per family")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}", highlight=False, soft_wrap=True)
    if details:
        console.print(f"  {escape(details)}", highlight=False, soft_wrap=True)


def print_cancellation_summary(rendered: int, pending: int) -> None:
    """Print cancellation summary.

    Args:
        rendered: Number of families emitted before cancellation
        pending: Number of families that were not attempted
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {rendered} families rendered {SYM_DOT} {pending} skipped")


def print_cache_cleared(count: int, path: str) -> None:
    """Print the result of clearing the cache."""
    console.print(f"[bold green]{SYM_OK}[/bold green] Removed {count} cached responses from {path}")
