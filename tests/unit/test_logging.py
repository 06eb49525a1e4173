"""Tests for logging utilities."""

import logging
from unittest.mock import Mock

from wfiv.exceptions import InvalidResponse
from wfiv.utils.logging import RenderLogger, RenderStats, configure_logging, null_logger


class TestRenderStats:
    """Tests for RenderStats."""

    def test_empty(self) -> None:
        """Test statistics of a run that did nothing."""
        stats = RenderStats()
        assert stats.total_count == 0
        assert stats.duration_seconds == 0.0
        assert stats.avg_family_time_ms is None

    def test_derived_values(self) -> None:
        """Test totals, duration and averages."""
        stats = RenderStats(
            rendered_count=2,
            error_count=1,
            family_times_ms=[10.0, 20.0, 30.0],
            start_time=100.0,
            end_time=102.5,
        )
        assert stats.total_count == 3
        assert stats.duration_seconds == 2.5
        assert stats.avg_family_time_ms == 20.0


class TestRenderLogger:
    """Tests for RenderLogger."""

    def test_tracks_outcomes(self) -> None:
        """Test successes and failures are counted."""
        tracker = RenderLogger()
        tracker.log_family_start("Roboto")
        tracker.log_family_complete("Roboto", 12.0, (100, 40))
        tracker.log_family_error("Oswald", InvalidResponse("Oswald", 404, ""), 3.0)

        stats = tracker.stats
        assert stats.rendered_count == 1
        assert stats.error_count == 1
        assert stats.errors == [("Oswald", "bad woff2 data, status: 404, content-type: ''")]
        assert stats.family_times_ms == [12.0, 3.0]

    def test_events_reach_logger(self) -> None:
        """Test events are sent to the given logger."""
        logger = Mock()
        tracker = RenderLogger(logger)
        tracker.log_family_complete("Roboto", 1.234, (10, 20))

        logger.info.assert_called_once_with(
            "Family rendered", family="Roboto", width=10, height=20, duration_ms=1.23
        )

    def test_null_logger_discards(self) -> None:
        """Test the null logger accepts and drops events."""
        logger = null_logger()
        assert logger.info("event", key="value") is None
        assert logger.bind(family="Roboto").warning("event") is None


class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self) -> None:
        base = logging.getLogger("wfiv")
        for handler in list(base.handlers):
            base.removeHandler(handler)
            handler.close()

    def test_file_logging(self, tmp_path) -> None:
        """Test debug events are written to the log file."""
        log_file = tmp_path / "wfiv.log"
        logger = configure_logging(log_file=log_file, quiet=True)
        logger.debug("HTTP cache miss", url="https://example.com/")

        for handler in logging.getLogger("wfiv").handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "Logging initialized" in content
        assert "event='HTTP cache miss'" in content
        assert "url='https://example.com/'" in content

    def test_console_level(self, capsys) -> None:
        """Test console output respects the console level."""
        logger = configure_logging(console_level="WARNING")
        logger.info("quiet event")
        logger.warning("loud event")

        err = capsys.readouterr().err
        assert "loud event" in err
        assert "quiet event" not in err

    def test_reconfigure_replaces_handlers(self, tmp_path) -> None:
        """Test repeated configuration does not stack handlers."""
        configure_logging(log_file=tmp_path / "a.log")
        configure_logging(log_file=tmp_path / "b.log")
        assert len(logging.getLogger("wfiv").handlers) == 2
