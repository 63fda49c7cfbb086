"""
SERP Parser - Structured Logging

JSON-formatted event logging for parse operations, layered on the shared
runner logging setup.

Features:
- JSON-formatted structured messages
- Separate loggers for parse events and metrics
- Context-aware logging with metadata (set once per page)

Author: scrape-serp
Date: 2026-10-19
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from runner.logging_setup import get_logger as get_runner_logger, setup_logging


class SerpParseLogger:
    """
    Structured logging for SERP parse operations.

    Uses two named loggers:
    - serp_parse: parse lifecycle and extraction decisions
    - serp_metrics: counts and durations
    """

    def __init__(
        self,
        parse_logger_name: str = "serp_parse",
        metrics_logger_name: str = "serp_metrics",
        log_dir: Optional[str] = None,
        log_level: Optional[str] = None,
    ):
        """
        Initialize the parse and metrics loggers.

        Args:
            parse_logger_name: Name of the parse event logger
            metrics_logger_name: Name of the metrics logger
            log_dir: Directory for {name}.log files (console only if None)
            log_level: Level name; the environment decides if None
        """
        self.log_dir = log_dir
        self.log_level = log_level

        self.parse_logger = self._setup_logger(parse_logger_name)
        self.metrics_logger = self._setup_logger(metrics_logger_name)

        # Track current operation context
        self.current_context: Dict[str, Any] = {}

    def _setup_logger(self, name: str):
        """Configure `name` from this logger's settings, or reuse the shared setup."""
        if self.log_dir is None and self.log_level is None:
            return get_runner_logger(name)
        return setup_logging(name, log_level=self.log_level, log_dir=self.log_dir)

    def set_context(self, **kwargs):
        """
        Set context for subsequent log messages.

        Example:
            logger.set_context(mobile=True, locale="en-US")
        """
        self.current_context.update(kwargs)

    def clear_context(self):
        """Clear the current logging context."""
        self.current_context = {}

    def _format_log_data(self, message: str, extra_data: Optional[Dict] = None) -> str:
        """
        Format log data as JSON with context.

        Args:
            message: Log message
            extra_data: Additional data to include

        Returns:
            JSON-formatted string
        """
        log_data = {
            "timestamp": datetime.now().isoformat(),
            "message": message,
            **self.current_context
        }

        if extra_data:
            log_data.update(extra_data)

        return json.dumps(log_data, default=str)

    # Parse lifecycle

    def parse_started(self, markup_length: int):
        """Log the start of a page parse."""
        msg = self._format_log_data("Parse started", {"markup_length": markup_length})
        self.parse_logger.debug(msg)

    def platform_mismatch(self, expected_mobile: bool, document_mobile: bool):
        """Log a document that does not match the requested platform."""
        data = {
            "expected_mobile": expected_mobile,
            "document_mobile": document_mobile,
        }
        msg = self._format_log_data("Platform mismatch - extraction aborted", data)
        self.parse_logger.warning(msg)

    def segmentation_completed(self, containers: int, candidates: int, survivors: int):
        """Log container discovery and overlap filtering counts."""
        data = {
            "containers": containers,
            "candidates": candidates,
            "survivors": survivors,
            "filtered": candidates - survivors,
        }
        msg = self._format_log_data("Segmentation completed", data)
        self.parse_logger.debug(msg)

    def result_dropped(self, start_index: Optional[int], reason: str):
        """Log a candidate element that produced no result."""
        data = {"start_index": start_index, "reason": reason}
        msg = self._format_log_data("Result dropped", data)
        self.parse_logger.debug(msg)

    # Metrics

    def parse_completed(self, feature_count: int, duration_seconds: float, feature_types: Dict[str, int]):
        """Log successful completion of a page parse."""
        data = {
            "feature_count": feature_count,
            "feature_types": feature_types,
            "duration_seconds": round(duration_seconds, 4),
            "status": "success",
        }
        msg = self._format_log_data("Parse completed", data)
        self.metrics_logger.info(msg)

    # Utility methods

    def debug(self, message: str, extra_data: Dict = None):
        """Debug logging."""
        msg = self._format_log_data(message, extra_data)
        self.parse_logger.debug(msg)

