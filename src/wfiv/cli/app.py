"""CLI application entry point for wfiv.

This module provides the main CLI interface using Typer.
"""

import sys
from pathlib import Path
from typing import Annotated, Any

import requests
import typer
from pydantic import ValidationError

from wfiv import __version__
from wfiv.cli.output import (
    console,
    print_cache_cleared,
    print_cancellation_summary,
    print_error,
    print_selection,
    print_summary,
)
from wfiv.config import (
    ApiConfig,
    CacheConfig,
    FontStyle,
    FontVariant,
    LoggingConfig,
    RenderConfig,
    WfivSettings,
)
from wfiv.core import (
    FontFetcher,
    FontPreviewer,
    RasterizerAdapter,
    compile_patterns,
    select_families,
)
from wfiv.exceptions import Canceled, MissingCredential, WfivError
from wfiv.io import DiskCache, TerminalEncoder, WebfontsClient, build_session, require_graphics
from wfiv.utils import CancelToken, configure_logging

# Create the Typer app
app = typer.Typer(
    name="wfiv",
    help="A command-line Google webfonts viewer.",
    add_completion=False,
    no_args_is_help=True,
)

cache_app = typer.Typer(
    help="Manage the on-disk HTTP cache.",
    no_args_is_help=True,
)
app.add_typer(cache_app, name="cache")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]wfiv[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    key: Annotated[
        str | None,
        typer.Option(
            "--key",
            "-k",
            envvar="WFIV_KEY",
            help="Webfonts API key",
            show_default=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging (HTTP traffic, per-family progress)",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    cache_dir: Annotated[
        Path | None,
        typer.Option(
            "--cache-dir",
            help="Cache directory (default: $XDG_CACHE_HOME/wfiv)",
        ),
    ] = None,
    no_cache: Annotated[
        bool,
        typer.Option(
            "--no-cache",
            help="Bypass the on-disk HTTP cache",
        ),
    ] = False,
    timeout: Annotated[
        float,
        typer.Option(
            "--timeout",
            help="HTTP timeout in seconds",
            min=0.1,
        ),
    ] = 30.0,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """A command-line Google webfonts viewer."""
    cache = CacheConfig(enabled=not no_cache)
    if cache_dir is not None:
        cache = CacheConfig(enabled=not no_cache, cache_dir=cache_dir)
    ctx.obj = WfivSettings(
        api=ApiConfig(key=key, timeout=timeout),
        cache=cache,
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else "WARNING",
            verbose=verbose,
        ),
    )


def _settings(ctx: typer.Context) -> WfivSettings:
    if isinstance(ctx.obj, WfivSettings):
        return ctx.obj
    return WfivSettings()


def _init(settings: WfivSettings) -> tuple[Any, requests.Session]:
    """Check credentials, set up logging and the shared HTTP session.

    Raises:
        MissingCredential: If no API key was given
    """
    if not settings.api.key:
        raise MissingCredential("key")
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
    )
    http_logger = logger if settings.logging.verbose or settings.logging.log_file else None
    session = build_session(settings.cache, settings.api, http_logger)
    return logger, session


@app.command("list")
def list_families(ctx: typer.Context) -> None:
    """Show available font families, one per line."""
    settings = _settings(ctx)
    try:
        logger, session = _init(settings)
        with session:
            client = WebfontsClient(session, settings.api.key, settings.api.timeout, logger)
            families = client.families()
    except WfivError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        raise typer.Exit(code=130) from None

    for family in families:
        typer.echo(family.family)


@app.command()
def show(
    ctx: typer.Context,
    patterns: Annotated[
        list[str] | None,
        typer.Argument(
            help="Glob patterns selecting families (e.g. 'Roboto*' 'Open {Sans,Serif}')",
            show_default=False,
        ),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Show all families, ignoring patterns",
        ),
    ] = False,
    font_size: Annotated[
        int,
        typer.Option(
            "--font-size",
            help="Font preview size",
            min=1,
            max=1000,
        ),
    ] = 48,
    font_style: Annotated[
        FontStyle,
        typer.Option(
            "--font-style",
            help="Font preview style",
            case_sensitive=False,
        ),
    ] = FontStyle.REGULAR,
    font_variant: Annotated[
        FontVariant,
        typer.Option(
            "--font-variant",
            help="Font preview variant",
            case_sensitive=False,
        ),
    ] = FontVariant.NORMAL,
    font_fg: Annotated[
        str,
        typer.Option(
            "--font-fg",
            help="Font preview foreground color",
        ),
    ] = "black",
    font_bg: Annotated[
        str,
        typer.Option(
            "--font-bg",
            help="Font preview background color",
        ),
    ] = "white",
    font_dpi: Annotated[
        int,
        typer.Option(
            "--font-dpi",
            help="Font preview DPI",
            min=1,
            max=1200,
        ),
    ] = 100,
    font_margin: Annotated[
        int,
        typer.Option(
            "--font-margin",
            help="Font preview margin",
            min=0,
            max=500,
        ),
    ] = 5,
    text: Annotated[
        str | None,
        typer.Option(
            "--text",
            help="Sample text (default: family name, alphabet, digits)",
        ),
    ] = None,
) -> None:
    """Render previews of the families matching PATTERNS.

    Example:
        wfiv --key $WFIV_KEY show 'Roboto*' 'Open Sans'
    """
    settings = _settings(ctx)
    token = CancelToken()
    try:
        protocol = require_graphics()
        try:
            render = RenderConfig(
                size=font_size,
                style=font_style,
                variant=font_variant,
                fg=font_fg,
                bg=font_bg,
                dpi=font_dpi,
                margin=font_margin,
                text=text,
            )
        except ValidationError as e:
            details = "; ".join(err["msg"] for err in e.errors())
            print_error("Invalid render options", details=details)
            raise typer.Exit(code=1)

        settings = settings.model_copy(update={"render": render})
        logger, session = _init(settings)
        globs = [] if show_all else compile_patterns(patterns or [])
        with session:
            client = WebfontsClient(session, settings.api.key, settings.api.timeout, logger)
            families = client.families()
            selection = select_families(families, globs, show_all)
            if settings.logging.verbose:
                print_selection(len(selection), len(families))

            previewer = FontPreviewer(
                fetcher=FontFetcher(session, client, settings.api.timeout, logger),
                rasterizer=RasterizerAdapter(settings.render, logger=logger),
                encoder=TerminalEncoder(protocol),
                logger=logger,
            )
            stats = previewer.run(selection, sys.stdout, token)
    except Canceled as e:
        print_cancellation_summary(e.processed_count, e.pending_count)
        raise typer.Exit(code=130)
    except KeyboardInterrupt:
        print_cancellation_summary(0, 0)
        raise typer.Exit(code=130) from None
    except WfivError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if settings.logging.verbose:
        print_summary(stats)


@cache_app.command("clear")
def cache_clear(ctx: typer.Context) -> None:
    """Remove every cached response."""
    settings = _settings(ctx)
    try:
        count = DiskCache.from_config(settings.cache).purge()
    except OSError as e:
        print_error(f"Could not clear cache: {e}")
        raise typer.Exit(code=1)
    print_cache_cleared(count, str(settings.cache.cache_dir))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
