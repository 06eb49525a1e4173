"""Tests for configuration models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from wfiv.config import (
    CacheConfig,
    FontStyle,
    FontVariant,
    RenderConfig,
    WfivSettings,
    default_cache_dir,
    get_default_settings,
)


class TestRenderConfig:
    """Tests for RenderConfig."""

    def test_defaults(self) -> None:
        """Test default preview parameters."""
        config = RenderConfig()
        assert config.size == 48
        assert config.style == FontStyle.REGULAR
        assert config.variant == FontVariant.NORMAL
        assert config.fg == "black"
        assert config.bg == "white"
        assert config.dpi == 100
        assert config.margin == 5
        assert config.text is None

    def test_pixel_conversion(self) -> None:
        """Test points are converted to pixels using the DPI."""
        config = RenderConfig(size=36, dpi=144, margin=6)
        assert config.pixel_size == 72
        assert config.pixel_margin == 12

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("red", (255, 0, 0, 255)),
            ("#00ff00", (0, 255, 0, 255)),
            ("#0000ff80", (0, 0, 255, 128)),
            ("rgb(1, 2, 3)", (1, 2, 3, 255)),
        ],
    )
    def test_colors(self, value, expected) -> None:
        """Test color names and hex values are accepted."""
        assert RenderConfig(fg=value).fg_rgba == expected

    @pytest.mark.parametrize("field", ["fg", "bg"])
    def test_invalid_color(self, field) -> None:
        """Test unknown colors are rejected."""
        with pytest.raises(ValidationError, match="invalid color"):
            RenderConfig(**{field: "not-a-color"})

    @pytest.mark.parametrize(
        "kwargs",
        [{"size": 0}, {"size": 1001}, {"dpi": 0}, {"dpi": 1201}, {"margin": -1}],
    )
    def test_out_of_range(self, kwargs) -> None:
        """Test numeric bounds are enforced."""
        with pytest.raises(ValidationError):
            RenderConfig(**kwargs)

    def test_frozen(self) -> None:
        """Test render configuration is read-only."""
        config = RenderConfig()
        with pytest.raises(ValidationError):
            config.size = 12  # type: ignore[misc]


class TestFontStyle:
    """Tests for FontStyle."""

    @pytest.mark.parametrize(
        ("style", "weight", "italic"),
        [
            (FontStyle.THIN, 100, False),
            (FontStyle.REGULAR, 400, False),
            (FontStyle.BOLD, 700, False),
            (FontStyle.BLACK, 900, False),
            (FontStyle.ITALIC, 400, True),
            (FontStyle.BOLD_ITALIC, 700, True),
        ],
    )
    def test_weight_and_slant(self, style, weight, italic) -> None:
        """Test each style maps to a weight and slant."""
        assert style.weight == weight
        assert style.italic is italic

    def test_every_style_has_weight(self) -> None:
        """Test no style is missing a weight."""
        for style in FontStyle:
            assert 100 <= style.weight <= 900


class TestCacheConfig:
    """Tests for CacheConfig."""

    def test_defaults(self) -> None:
        """Test cache defaults."""
        config = CacheConfig()
        assert config.enabled
        assert config.ttl_days == 14
        assert config.ttl_seconds == 14 * 24 * 60 * 60
        assert config.header_whitelist == ("Date", "Set-Cookie", "Content-Type", "Location")
        assert config.compress
        assert config.truncate_errors

    def test_default_cache_dir_xdg(self, monkeypatch, tmp_path) -> None:
        """Test XDG_CACHE_HOME is honored."""
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        assert default_cache_dir() == tmp_path / "wfiv"

    def test_default_cache_dir_home(self, monkeypatch) -> None:
        """Test the fallback under the home directory."""
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        assert default_cache_dir() == Path.home() / ".cache" / "wfiv"


class TestWfivSettings:
    """Tests for WfivSettings."""

    def test_default_settings(self) -> None:
        """Test the aggregate defaults."""
        settings = get_default_settings()
        assert isinstance(settings, WfivSettings)
        assert settings.api.key is None
        assert settings.api.timeout == 30
        assert "Chrome" in settings.api.user_agent
        assert settings.logging.log_level == "WARNING"
        assert settings.logging.verbose is False
