# core/config.py

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True), override=False)

# Project root = parent directory of "core"
BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_COOLDOWN_SECONDS = 10


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings, read once from the environment (and `.env`).

    db_path:          sqlite file shared by the settings window and the
                      send guard (the "app group" store)
    cooldown_seconds: countdown shown for high-risk contacts
    day_filtering:    honour TimeRange.repeat_days when checking ranges
    log_dir:          where rotating log files go
    log_level:        name of a `logging` level
    """
    db_path: Path
    cooldown_seconds: int
    day_filtering: bool
    log_dir: Path
    log_level: str


def load_settings() -> Settings:
    cooldown = _env_int("NDT_COOLDOWN_SECONDS", DEFAULT_COOLDOWN_SECONDS)
    if cooldown < 1:
        raise ValueError("NDT_COOLDOWN_SECONDS must be at least 1")

    return Settings(
        db_path=Path(os.getenv("NDT_DB_PATH") or BASE_DIR / "nodrunktext.db"),
        cooldown_seconds=cooldown,
        day_filtering=_env_bool("NDT_DAY_FILTERING", True),
        log_dir=Path(os.getenv("NDT_LOG_DIR") or BASE_DIR / "logs"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
