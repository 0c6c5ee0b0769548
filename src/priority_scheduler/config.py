# src/priority_scheduler/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Every value has a working default; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .logging_setup import DEFAULT_QUIET_LOGGERS
from .tasks.task_heap import DEFAULT_INITIAL_CAPACITY
from .tasks.task_models import DEFAULT_MAX_NAME_LENGTH

ENV_PREFIX = "PSCHED"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_quiet: list[str]
    data_dir: Path

    # ---- Persistence ----
    tasks_path: Path
    autosave: bool

    # ---- Container tuning ----
    initial_capacity: int
    max_name_length: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "psched").strip() or "psched"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_quiet = _env_list(_k("LOG_QUIET"), list(DEFAULT_QUIET_LOGGERS))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/psched"))
        # The tasks file lives in the working directory unless told otherwise.
        tasks_path = _env_path(_k("TASKS_FILE"), Path("tasks.csv"))
        autosave = _env_bool(_k("AUTOSAVE"), True)

        initial_capacity = _env_int(_k("INITIAL_CAPACITY"), DEFAULT_INITIAL_CAPACITY)
        if initial_capacity <= 0:
            initial_capacity = DEFAULT_INITIAL_CAPACITY

        max_name_length = _env_int(_k("MAX_NAME_LENGTH"), DEFAULT_MAX_NAME_LENGTH)
        if max_name_length <= 0:
            max_name_length = DEFAULT_MAX_NAME_LENGTH

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_quiet=log_quiet,
            data_dir=data_dir,
            tasks_path=tasks_path,
            autosave=autosave,
            initial_capacity=initial_capacity,
            max_name_length=max_name_length,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
