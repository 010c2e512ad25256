"""Environment-driven settings.

Values are read from the process environment on every call so that local
`.env` edits (and tests that patch the environment) apply without a restart.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# clinic-backend/ holds the optional .env file and the default data directory.
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

DEFAULT_SECRET_KEY = "vetclinic-dev-secret-change-me"
DEFAULT_TOKEN_TTL_S = 8 * 3600


def _env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name, default)
    if isinstance(value, str):
        return value.strip()
    return default


def _env_int(name: str, default: int) -> int:
    value = _env_str(name)
    if value is None:
        return default
    try:
        return int(float(value))
    except Exception:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def data_dir() -> Path:
    configured = _env_str("CLINIC_DATA_DIR")
    if configured:
        return Path(configured)
    return BASE_DIR / "data"


def secret_key() -> str:
    return _env_str("SECRET_KEY", DEFAULT_SECRET_KEY) or DEFAULT_SECRET_KEY


def token_ttl_s() -> int:
    return max(60, min(_env_int("TOKEN_TTL_S", DEFAULT_TOKEN_TTL_S), 7 * 24 * 3600))


def port() -> int:
    return _env_int("PORT", 3000)


def debug() -> bool:
    return _env_bool("FLASK_DEBUG", False)
