"""
Structured logging for faqmatch.

Console and file outputs with JSON-serialized context, plus counters for
how often queries are answered from the knowledge base versus falling back.
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
    Tracks match and knowledge-base source metrics.
    """

    def __init__(
        self,
        name: str = "faqmatch",
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
            "queries": 0,
            "matches": 0,
            "fallbacks": 0,
            "source_fetches": 0,
            "source_failures": 0,
            "errors_by_type": {},
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

            log_file = log_dir / f"faqmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_query(self):
        self.metrics["queries"] += 1

    def record_match(self):
        self.metrics["matches"] += 1

    def record_fallback(self):
        self.metrics["fallbacks"] += 1

    def record_source_fetch(self):
        self.metrics["source_fetches"] += 1

    def record_source_failure(self, error_type: str):
        """Record a failed knowledge-base fetch, bucketed by error type."""
        self.metrics["source_failures"] += 1
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return a copy of the metrics with the derived match rate."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        queries = metrics_copy["queries"]
        metrics_copy["match_rate"] = round(metrics_copy["matches"] / queries, 3) if queries else 0.0
        return metrics_copy

    def log_metrics_summary(self):
        metrics = self.get_metrics()

        self.info("=== Matching Session Metrics ===")
        self.info(
            f"Queries: {metrics['queries']} "
            f"(matched {metrics['matches']}, fallback {metrics['fallbacks']}, "
            f"{metrics['match_rate'] * 100:.1f}% match rate)"
        )
        self.info(f"Source fetches: {metrics['source_fetches']} ({metrics['source_failures']} failed)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "faqmatch",
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
