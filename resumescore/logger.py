"""
Structured logging system for resumescore.

Provides centralized logging with console and file outputs, keyword
context on every message, and metrics tracking for pipeline runs and
per-stage latency.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring pipeline health.
    """

    def __init__(
        self,
        name: str = "resumescore",
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
        self.logger.handlers.clear()  # Remove existing handlers
        self.logger.propagate = False

        # Pipelines may be shared between threads; counters update under this lock.
        self._metrics_lock = threading.Lock()
        self.metrics = {
            "runs_started": 0,
            "runs_succeeded": 0,
            "runs_replayed": 0,
            "runs_failed": 0,
            "errors_by_type": {},
            "stage_latency_ms": {},
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
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"resumescore_{datetime.now().strftime('%Y%m%d')}.log"
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

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str, sort_keys=True)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_run_started(self):
        """Increment pipeline run counter."""
        with self._metrics_lock:
            self.metrics["runs_started"] += 1

    def record_run_success(self):
        with self._metrics_lock:
            self.metrics["runs_succeeded"] += 1

    def record_run_replayed(self):
        """Record a run answered from an existing profile."""
        with self._metrics_lock:
            self.metrics["runs_replayed"] += 1

    def record_run_failure(self, error_type: str):
        """Record a failed run by error type."""
        with self._metrics_lock:
            self.metrics["runs_failed"] += 1

            if error_type not in self.metrics["errors_by_type"]:
                self.metrics["errors_by_type"][error_type] = 0
            self.metrics["errors_by_type"][error_type] += 1

    def record_stage_latency(self, stage: str, elapsed_ms: float):
        """Accumulate time spent in a pipeline stage."""
        with self._metrics_lock:
            if stage not in self.metrics["stage_latency_ms"]:
                self.metrics["stage_latency_ms"][stage] = {"count": 0, "total_ms": 0.0}
            stats = self.metrics["stage_latency_ms"][stage]
            stats["count"] += 1
            stats["total_ms"] += elapsed_ms

    def get_metrics(self) -> dict:
        """Return current metrics."""
        with self._metrics_lock:
            metrics_copy = self.metrics.copy()
            metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
            metrics_copy["stage_latency_ms"] = {
                stage: dict(stats) for stage, stats in self.metrics["stage_latency_ms"].items()
            }
        for stats in metrics_copy["stage_latency_ms"].values():
            if stats["count"] > 0:
                stats["avg_ms"] = round(stats["total_ms"] / stats["count"], 2)

        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total_runs = metrics["runs_started"]
        completed = metrics["runs_succeeded"] + metrics["runs_replayed"]
        overall_rate = 0
        if total_runs > 0:
            overall_rate = round(completed / total_runs * 100, 1)

        self.info("=== Pipeline Session Metrics ===")
        self.info(f"Runs: {completed}/{total_runs} ({overall_rate}% completed)")
        self.info(f"Replayed: {metrics['runs_replayed']}")

        if metrics["stage_latency_ms"]:
            self.info("Stage Latency:")
            for stage, stats in metrics["stage_latency_ms"].items():
                self.info(f"  {stage}: avg {stats.get('avg_ms', 0):.2f} ms over {stats['count']} runs")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "resumescore",
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
