from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from urllib.parse import urlsplit

ENV_FILE = Path(".env")
ENV_PREFIX = "CLOUDFILES_"

DEFAULT_CDN_TTL = 86400
DEFAULT_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "python-cloudfiles/1.0.0"


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _env(name: str) -> str | None:
    return os.environ.get(f"{ENV_PREFIX}{name}")


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y", "on"}


def _check_url(name: str, value: str | None) -> None:
    if value is None:
        return
    parts = urlsplit(value)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError(f"{name} must be an absolute http(s) URL, got {value!r}.")


@dataclass
class Settings:
    STORAGE_URL: str | None = None
    CDN_MANAGEMENT_URL: str | None = None
    AUTH_TOKEN: str | None = None
    TIMEOUT: float = DEFAULT_TIMEOUT
    USER_AGENT: str = DEFAULT_USER_AGENT
    DEFAULT_CDN_TTL: int = DEFAULT_CDN_TTL
    ENABLE_METRICS: bool = True
    TRACE_HTTP: bool = False
    LOG_LEVEL: str = "INFO"

    def __post_init__(self) -> None:
        _check_url("STORAGE_URL", self.STORAGE_URL)
        _check_url("CDN_MANAGEMENT_URL", self.CDN_MANAGEMENT_URL)
        if self.TIMEOUT <= 0:
            raise ValueError("TIMEOUT must be a positive number of seconds.")
        if self.DEFAULT_CDN_TTL <= 0:
            raise ValueError("DEFAULT_CDN_TTL must be a positive number of seconds.")
        self.LOG_LEVEL = self.LOG_LEVEL.upper()

    @classmethod
    def from_environment(cls) -> "Settings":
        _load_env_file()
        return cls(
            STORAGE_URL=_env("STORAGE_URL") or None,
            CDN_MANAGEMENT_URL=_env("CDN_MANAGEMENT_URL") or None,
            AUTH_TOKEN=_env("AUTH_TOKEN") or None,
            TIMEOUT=float(_env("TIMEOUT") or cls.TIMEOUT),
            USER_AGENT=_env("USER_AGENT") or cls.USER_AGENT,
            DEFAULT_CDN_TTL=int(_env("DEFAULT_CDN_TTL") or cls.DEFAULT_CDN_TTL),
            ENABLE_METRICS=_as_bool(_env("ENABLE_METRICS"), cls.ENABLE_METRICS),
            TRACE_HTTP=_as_bool(_env("TRACE_HTTP"), cls.TRACE_HTTP),
            LOG_LEVEL=_env("LOG_LEVEL") or cls.LOG_LEVEL,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
