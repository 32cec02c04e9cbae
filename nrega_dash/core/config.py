from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_API_BASE_URL = "http://localhost:8000/api"
DEFAULT_STATE = "Bihar"
DEFAULT_MONTHS = 12


@dataclass
class Settings:
    api_base_url: str
    request_timeout: float
    default_locale: str
    state_name: str
    locales_dir: Path | None
    months: int


def _read_env_file() -> dict[str, str]:
    """Load a minimal .env so NRD_* keys work without exporting them.

    Existing os.environ values always win.
    """
    env_path = Path.cwd() / ".env"
    env: dict[str, str] = {}
    if not env_path.exists():
        return env
    try:
        lines = env_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        return {}
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        env[k.strip()] = v.strip().strip('"').strip("'")
    return env


def _get_env(
    name: str,
    fallback_names: list[str] | None = None,
    env_file: dict[str, str] | None = None,
) -> str | None:
    # Priority: process env -> .env -> fallback names
    val = os.getenv(name)
    if val:
        return val
    if env_file and name in env_file:
        return env_file[name]
    if fallback_names:
        for fb in fallback_names:
            v = os.getenv(fb)
            if v:
                return v
            if env_file and fb in env_file:
                return env_file[fb]
    return None


def _as_float(raw: str | None, default: float) -> float:
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _as_int(raw: str | None, default: int) -> int:
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def get_settings() -> Settings:
    env_file = _read_env_file()
    base_url = _get_env("NRD_API_BASE_URL", ["API_BASE_URL"], env_file)
    timeout = _get_env("NRD_REQUEST_TIMEOUT", None, env_file)
    locale = _get_env("NRD_DEFAULT_LOCALE", None, env_file)
    state = _get_env("NRD_STATE", None, env_file)
    locales_dir = _get_env("NRD_LOCALES_DIR", None, env_file)
    months = _get_env("NRD_MONTHS", None, env_file)
    return Settings(
        api_base_url=(base_url or DEFAULT_API_BASE_URL).rstrip("/"),
        request_timeout=_as_float(timeout, 15.0),
        default_locale=locale or "en",
        state_name=state or DEFAULT_STATE,
        locales_dir=Path(locales_dir) if locales_dir else None,
        months=_as_int(months, DEFAULT_MONTHS),
    )
