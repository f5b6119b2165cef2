"""
Tests for logger functionality.
"""

import pytest
from guestlinks.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["entries_processed"] == 0

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        # Should not raise exceptions
        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")

    def test_log_with_context(self, tmp_path):
        """Context is appended as JSON, keeping accents readable."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("No matches found", name="João")

        log_content = next(tmp_path.glob("*.log")).read_text(encoding="utf-8")
        assert 'Context: {"name": "João"}' in log_content

    def test_metrics_tracking(self, tmp_path):
        """Metrics should be tracked correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.record_contacts_loaded(12)
        logger.record_entry()
        logger.record_entry()
        logger.record_resolved(automatic=True)
        logger.record_prompt()
        logger.record_resolved()
        logger.record_skip("No matches found")
        logger.record_skip("No matches found")
        logger.record_skip("Skipped by user")

        metrics = logger.get_metrics()

        assert metrics["contacts_loaded"] == 12
        assert metrics["entries_processed"] == 2
        assert metrics["contacts_resolved"] == 2
        assert metrics["auto_resolved"] == 1
        assert metrics["prompts_shown"] == 1
        assert metrics["skips_by_reason"]["No matches found"] == 2
        assert metrics["total_skipped"] == 3

    def test_get_metrics_returns_copy(self, tmp_path):
        """Changing returned metrics does not affect the logger."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_skip("Skipped by user")

        metrics = logger.get_metrics()
        metrics["skips_by_reason"]["Skipped by user"] = 99

        assert logger.metrics["skips_by_reason"]["Skipped by user"] == 1

    def test_metrics_summary(self, tmp_path):
        """The summary is written to the log."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_entry()
        logger.record_skip("No matches found")

        logger.log_metrics_summary()

        log_content = next(tmp_path.glob("*.log")).read_text(encoding="utf-8")
        assert "Entries processed: 1" in log_content
        assert "No matches found: 1" in log_content

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Test message")

        log_files = list(tmp_path.glob("*.log"))
        assert len(log_files) == 1
        assert log_files[0].name.startswith("guestlinks_")
        assert "Test message" in log_files[0].read_text()


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_entry()

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        assert logger2.metrics["entries_processed"] == 0
