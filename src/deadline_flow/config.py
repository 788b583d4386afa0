# src/deadline_flow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
- Host policy constants (refresh horizon, minimum gap) live here, not in the scheduler.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "DEADLINE_FLOW"

WIDGET_FAMILIES = ("small", "medium", "large")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


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

    # ---- Shared storage (app-group defaults) ----
    data_dir: Path
    shared_defaults_path: Path
    suite_name: str
    tasks_key: str

    # ---- Timeline refresh policy ----
    default_horizon_seconds: int
    minimum_gap_seconds: int

    # ---- Rendering ----
    widget_family: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "deadline-flow").strip() or "deadline-flow"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/deadline_flow"))
        shared_defaults_path = _env_path(
            _k("SHARED_DEFAULTS_PATH"), data_dir / "shared_defaults.sqlite3"
        )
        suite_name = _env(_k("SUITE_NAME"), "group.com.sun2.chessclock").strip()
        tasks_key = _env(_k("TASKS_KEY"), "tasks").strip() or "tasks"

        # Negative values make no sense for either knob; clamp instead of failing.
        default_horizon_seconds = max(0, _env_int(_k("DEFAULT_HORIZON_SECONDS"), 3600))
        minimum_gap_seconds = max(0, _env_int(_k("MINIMUM_GAP_SECONDS"), 60))

        widget_family = _env(_k("WIDGET_FAMILY"), "medium").strip().lower()
        if widget_family not in WIDGET_FAMILIES:
            widget_family = "medium"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            shared_defaults_path=shared_defaults_path,
            suite_name=suite_name,
            tasks_key=tasks_key,
            default_horizon_seconds=default_horizon_seconds,
            minimum_gap_seconds=minimum_gap_seconds,
            widget_family=widget_family,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for quick machine-specific tweaks.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "WIDGET_FAMILY"):
        object.__setattr__(SETTINGS, "widget_family", str(_config_local.WIDGET_FAMILY))  # type: ignore[misc]
    if hasattr(_config_local, "SUITE_NAME"):
        object.__setattr__(SETTINGS, "suite_name", str(_config_local.SUITE_NAME))  # type: ignore[misc]
except Exception:
    pass


def get_settings() -> Settings:
    return SETTINGS
