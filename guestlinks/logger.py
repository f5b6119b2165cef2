"""
Structured logging system for guestlinks.

Provides centralized logging with console and file outputs, and
metrics tracking for a resolution run (matches, prompts, skips).
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics describing how a guest list was resolved.
    """

    def __init__(
        self,
        name: str = "guestlinks",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "contacts_loaded": 0,
            "entries_processed": 0,
            "contacts_resolved": 0,
            "auto_resolved": 0,
            "prompts_shown": 0,
            "skips_by_reason": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"guestlinks_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, ensure_ascii=False)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_contacts_loaded(self, count: int):
        self.metrics["contacts_loaded"] += count

    def record_entry(self):
        """Count one guest-list entry as processed."""
        self.metrics["entries_processed"] += 1

    def record_resolved(self, automatic: bool = False):
        """Record one accepted contact."""
        self.metrics["contacts_resolved"] += 1
        if automatic:
            self.metrics["auto_resolved"] += 1

    def record_prompt(self):
        self.metrics["prompts_shown"] += 1

    def record_skip(self, reason: str):
        """Record a skipped name under its reason."""
        skips = self.metrics["skips_by_reason"]
        skips[reason] = skips.get(reason, 0) + 1

    def get_metrics(self) -> dict:
        """Return a copy of the current metrics."""
        metrics_copy = self.metrics.copy()
        metrics_copy["skips_by_reason"] = dict(self.metrics["skips_by_reason"])
        metrics_copy["total_skipped"] = sum(metrics_copy["skips_by_reason"].values())
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Resolution Metrics ===")
        self.info(f"Contacts loaded: {metrics['contacts_loaded']}")
        self.info(f"Entries processed: {metrics['entries_processed']}")
        self.info(
            f"Contacts resolved: {metrics['contacts_resolved']} "
            f"({metrics['auto_resolved']} automatic, {metrics['prompts_shown']} prompts)"
        )

        if metrics["skips_by_reason"]:
            self.info("Skipped:")
            for reason, count in metrics["skips_by_reason"].items():
                self.info(f"  {reason}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "guestlinks",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
