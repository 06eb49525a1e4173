"""Configuration settings for wfiv."""

import os
from enum import Enum
from pathlib import Path

from PIL import ImageColor
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Browsers that advertise WOFF2 support get woff2 sources from the CSS API.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class FontStyle(str, Enum):
    """Preview font style (weight and slant)."""

    THIN = "thin"
    EXTRA_LIGHT = "extralight"
    LIGHT = "light"
    REGULAR = "regular"
    MEDIUM = "medium"
    SEMI_BOLD = "semibold"
    BOLD = "bold"
    EXTRA_BOLD = "extrabold"
    BLACK = "black"
    ITALIC = "italic"
    BOLD_ITALIC = "bolditalic"

    @property
    def weight(self) -> int:
        """CSS weight for the style."""
        return _STYLE_WEIGHTS[self]

    @property
    def italic(self) -> bool:
        """Whether the style is slanted."""
        return self in (FontStyle.ITALIC, FontStyle.BOLD_ITALIC)


_STYLE_WEIGHTS = {
    FontStyle.THIN: 100,
    FontStyle.EXTRA_LIGHT: 200,
    FontStyle.LIGHT: 300,
    FontStyle.REGULAR: 400,
    FontStyle.MEDIUM: 500,
    FontStyle.SEMI_BOLD: 600,
    FontStyle.BOLD: 700,
    FontStyle.EXTRA_BOLD: 800,
    FontStyle.BLACK: 900,
    FontStyle.ITALIC: 400,
    FontStyle.BOLD_ITALIC: 700,
}


class FontVariant(str, Enum):
    """Preview font variant."""

    NORMAL = "normal"
    SMALL_CAPS = "smallcaps"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"


def default_cache_dir() -> Path:
    """Return the per-user cache directory for wfiv."""
    base = os.environ.get("XDG_CACHE_HOME")
    root = Path(base) if base else Path.home() / ".cache"
    return root / "wfiv"


class RenderConfig(BaseModel):
    """Style parameters shared by every preview in a run.

    Sizes are expressed in points and converted to pixels using ``dpi``.
    """

    model_config = ConfigDict(frozen=True)

    size: int = Field(
        default=48,
        ge=1,
        le=1000,
        description="Font preview size in points",
    )
    style: FontStyle = Field(
        default=FontStyle.REGULAR,
        description="Font preview style",
    )
    variant: FontVariant = Field(
        default=FontVariant.NORMAL,
        description="Font preview variant",
    )
    fg: str = Field(
        default="black",
        description="Font preview foreground color",
    )
    bg: str = Field(
        default="white",
        description="Font preview background color",
    )
    dpi: int = Field(
        default=100,
        ge=1,
        le=1200,
        description="Font preview DPI",
    )
    margin: int = Field(
        default=5,
        ge=0,
        le=500,
        description="Font preview margin in points",
    )
    text: str | None = Field(
        default=None,
        description="Sample text (default: family name, alphabet, digits)",
    )

    @field_validator("fg", "bg")
    @classmethod
    def _check_color(cls, value: str) -> str:
        try:
            ImageColor.getrgb(value)
        except ValueError as e:
            raise ValueError(f"invalid color {value!r}") from e
        return value

    @property
    def pixel_size(self) -> int:
        """Font size in pixels at the configured DPI."""
        return max(1, round(self.size * self.dpi / 72))

    @property
    def pixel_margin(self) -> int:
        """Margin in pixels at the configured DPI."""
        return round(self.margin * self.dpi / 72)

    @property
    def fg_rgba(self) -> tuple[int, int, int, int]:
        """Foreground color as RGBA."""
        return _rgba(self.fg)

    @property
    def bg_rgba(self) -> tuple[int, int, int, int]:
        """Background color as RGBA."""
        return _rgba(self.bg)


def _rgba(value: str) -> tuple[int, int, int, int]:
    rgb = ImageColor.getrgb(value)
    if len(rgb) == 3:
        return (*rgb, 255)
    return rgb  # type: ignore[return-value]


class CacheConfig(BaseModel):
    """Configuration for the on-disk HTTP cache."""

    enabled: bool = Field(
        default=True,
        description="Serve repeated requests from the disk cache",
    )
    cache_dir: Path = Field(
        default_factory=default_cache_dir,
        description="Directory holding cached responses",
    )
    ttl_days: float = Field(
        default=14.0,
        gt=0,
        description="Time-to-live of cached responses in days",
    )
    header_whitelist: tuple[str, ...] = Field(
        default=("Date", "Set-Cookie", "Content-Type", "Location"),
        description="Response headers kept in cached entries",
    )
    compress: bool = Field(
        default=True,
        description="Store cached entries gzip compressed",
    )
    truncate_errors: bool = Field(
        default=True,
        description="Drop the body of error responses before caching",
    )

    @property
    def ttl_seconds(self) -> float:
        """Time-to-live in seconds."""
        return self.ttl_days * 24 * 60 * 60


class ApiConfig(BaseModel):
    """Configuration for the Google Webfonts API."""

    key: str | None = Field(
        default=None,
        description="Webfonts API key",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent sent with every request",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )
    verbose: bool = Field(
        default=False,
        description="Log HTTP traffic and per-family progress",
    )


class WfivSettings(BaseModel):
    """Main application settings."""

    render: RenderConfig = Field(default_factory=RenderConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> WfivSettings:
    """Get default application settings."""
    return WfivSettings()
