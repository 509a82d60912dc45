"""
Tests for logger functionality.
"""

import threading

import pytest
from pathlib import Path
from resumescore.logger import StructuredLogger, get_logger, reset_logger


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
        assert logger.metrics["runs_started"] == 0

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
        logger.critical("Critical message")

    def test_log_with_context(self, tmp_path):
        """Context is appended as sorted JSON."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Message with context", tenant_id="tenant-a", filename="cv.pdf", path=Path("x"))

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert 'Message with context | Context: {"filename": "cv.pdf", "path": "x", "tenant_id": "tenant-a"}' in log_content

    def test_run_metrics(self, tmp_path):
        """Run outcomes should be tracked correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        for _ in range(4):
            logger.record_run_started()
        logger.record_run_success()
        logger.record_run_replayed()
        logger.record_run_failure("EmptyExtraction")
        logger.record_run_failure("EmptyExtraction")

        metrics = logger.get_metrics()

        assert metrics["runs_started"] == 4
        assert metrics["runs_succeeded"] == 1
        assert metrics["runs_replayed"] == 1
        assert metrics["runs_failed"] == 2
        assert metrics["errors_by_type"] == {"EmptyExtraction": 2}

    def test_stage_latency_average(self, tmp_path):
        """Average latency per stage should be calculated correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.record_stage_latency("parsing", 10.0)
        logger.record_stage_latency("parsing", 20.0)
        logger.record_stage_latency("scoring", 0.5)

        stages = logger.get_metrics()["stage_latency_ms"]

        assert stages["parsing"]["count"] == 2
        assert stages["parsing"]["total_ms"] == 30.0
        assert stages["parsing"]["avg_ms"] == pytest.approx(15.0)
        assert stages["scoring"]["avg_ms"] == pytest.approx(0.5)

    def test_metrics_are_thread_safe(self, tmp_path):
        """Concurrent recording should not lose updates."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        def worker():
            for _ in range(500):
                logger.record_run_started()
                logger.record_run_failure("PersistenceFailure")
                logger.record_stage_latency("parsing", 1.0)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        metrics = logger.get_metrics()
        assert metrics["runs_started"] == 4000
        assert metrics["runs_failed"] == 4000
        assert metrics["errors_by_type"] == {"PersistenceFailure": 4000}
        assert metrics["stage_latency_ms"]["parsing"]["count"] == 4000

    def test_get_metrics_returns_snapshot(self, tmp_path):
        """Mutating the returned metrics should not touch the live counters."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )
        logger.record_run_failure("ParseFailure")

        snapshot = logger.get_metrics()
        snapshot["errors_by_type"]["ParseFailure"] = 99

        assert logger.get_metrics()["errors_by_type"] == {"ParseFailure": 1}

    def test_metrics_summary(self, tmp_path):
        """Summary should be written to the log."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )
        logger.record_run_started()
        logger.record_run_success()
        logger.record_stage_latency("parsing", 4.0)
        logger.record_run_failure("ParseFailure")

        logger.log_metrics_summary()

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert "Runs: 1/1 (100.0% completed)" in log_content
        assert "parsing: avg 4.00 ms over 1 runs" in log_content
        assert "ParseFailure: 1" in log_content

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Test message")

        # Check that a log file was created
        log_files = list(tmp_path.glob("resumescore_*.log"))
        assert len(log_files) == 1

        # Check that message was written
        log_content = log_files[0].read_text()
        assert "Test message" in log_content


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()  # Start fresh

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_run_started()

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        # Should be different instance with fresh metrics
        assert logger2 is not logger1
        assert logger2.metrics["runs_started"] == 0
