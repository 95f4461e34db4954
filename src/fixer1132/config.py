# src/fixer1132/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is touched on disk at import time.
- Every macOS path the actions shell out to is overridable.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "FIXER"

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


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
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
    data_dir: Path

    # ---- Update check ----
    update_check_enabled: bool
    update_timeout_seconds: float
    release_owner: str
    release_repo: str

    # ---- macOS tools ----
    osascript_path: str
    shell_path: str
    zoom_executable: str
    temp_dir: Path

    # ---- MAC spoofing ----
    mac_candidate_count: int

    @property
    def releases_api_url(self) -> str:
        return f"https://api.github.com/repos/{self.release_owner}/{self.release_repo}/releases/latest"

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.release_owner}/{self.release_repo}"

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "1132 Fixer")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(
            _k("DATA_DIR"),
            Path("~/Library/Application Support/1132Fixer").expanduser(),
        )

        update_check_enabled = _env_bool(_k("UPDATE_CHECK"), True)
        # A slow GitHub must never hold up the console for long.
        update_timeout_seconds = max(1.0, _env_float(_k("UPDATE_TIMEOUT_SECONDS"), 10.0))
        release_owner = _env(_k("RELEASE_OWNER"), "PrimeUpYourLife")
        release_repo = _env(_k("RELEASE_REPO"), "1132-fixer")

        osascript_path = _env(_k("OSASCRIPT_PATH"), "/usr/bin/osascript")
        shell_path = _env(_k("SHELL_PATH"), "/bin/zsh")
        zoom_executable = _env(
            _k("ZOOM_EXECUTABLE"),
            "/Applications/zoom.us.app/Contents/MacOS/zoom.us",
        )
        temp_dir = _env_path(_k("TEMP_DIR"), Path(tempfile.gettempdir()))

        mac_candidate_count = max(1, _env_int(_k("MAC_CANDIDATE_COUNT"), 4))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            update_check_enabled=update_check_enabled,
            update_timeout_seconds=update_timeout_seconds,
            release_owner=release_owner,
            release_repo=release_repo,
            osascript_path=osascript_path,
            shell_path=shell_path,
            zoom_executable=zoom_executable,
            temp_dir=temp_dir,
            mac_candidate_count=mac_candidate_count,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
