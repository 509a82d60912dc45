import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_DB_PATH = "data/resumescore.db"
DEFAULT_TEXT_CAP = 50_000


def load_env() -> None:
    """Load .env from project root if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    db_path: Path = Path(DEFAULT_DB_PATH)
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    text_cap: int = DEFAULT_TEXT_CAP  # characters of résumé text kept on the profile
    resume_bucket: str = "resumescore-uploads"
    persist_retries: int = 2


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"{name} must be an integer, got {raw!r}")


def get_settings() -> Settings:
    """Build settings from RESUMESCORE_* environment variables."""
    return Settings(
        db_path=Path(os.getenv("RESUMESCORE_DB_PATH", DEFAULT_DB_PATH)),
        log_level=os.getenv("RESUMESCORE_LOG_LEVEL", "INFO"),
        log_dir=Path(os.getenv("RESUMESCORE_LOG_DIR", "logs")),
        text_cap=_int_env("RESUMESCORE_TEXT_CAP", DEFAULT_TEXT_CAP),
        resume_bucket=os.getenv("RESUMESCORE_RESUME_BUCKET", "resumescore-uploads"),
        persist_retries=_int_env("RESUMESCORE_PERSIST_RETRIES", 2),
    )
