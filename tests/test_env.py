"""
Tests for environment-driven settings.
"""

from pathlib import Path

import pytest

from resumescore.env import Settings, get_settings, load_env


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "RESUMESCORE_DB_PATH",
            "RESUMESCORE_LOG_LEVEL",
            "RESUMESCORE_LOG_DIR",
            "RESUMESCORE_TEXT_CAP",
            "RESUMESCORE_RESUME_BUCKET",
            "RESUMESCORE_PERSIST_RETRIES",
        ):
            monkeypatch.delenv(name, raising=False)

        assert get_settings() == Settings()
        assert Settings().text_cap == 50_000

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RESUMESCORE_DB_PATH", str(tmp_path / "x.db"))
        monkeypatch.setenv("RESUMESCORE_TEXT_CAP", "1000")
        monkeypatch.setenv("RESUMESCORE_RESUME_BUCKET", "bucket")
        monkeypatch.setenv("RESUMESCORE_PERSIST_RETRIES", "0")

        settings = get_settings()

        assert settings.db_path == tmp_path / "x.db"
        assert settings.text_cap == 1000
        assert settings.resume_bucket == "bucket"
        assert settings.persist_retries == 0

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("RESUMESCORE_TEXT_CAP", "lots")
        with pytest.raises(SystemExit):
            get_settings()

    def test_load_env_reads_dotenv(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("RESUMESCORE_RESUME_BUCKET", "unset")
        monkeypatch.delenv("RESUMESCORE_RESUME_BUCKET")
        (tmp_path / ".env").write_text("RESUMESCORE_RESUME_BUCKET=from-dotenv\n")

        load_env()

        assert get_settings().resume_bucket == "from-dotenv"

    def test_load_env_without_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        load_env()
