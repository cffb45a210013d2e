# finance_dashboard/config.py
# Environment-driven settings (.env supported via python-dotenv)

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from finance_dashboard.utils.exceptions import ConfigError

ENV_PREFIX = "FINANCE_DASHBOARD_"

DEFAULT_UPSTREAM_URL = "http://localhost:8000/api/transactions"
DEFAULT_CORS_ORIGINS = ["http://localhost:8501", "http://127.0.0.1:8501"]


def _env(name: str, default: str) -> str:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, "true" if default else "false").lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def _env_positive(name: str, default: float) -> float:
    raw = _env(name, str(default))
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value


@dataclass
class Settings:
    """Runtime settings shared by the API and the Streamlit dashboard."""

    upstream_url: str = DEFAULT_UPSTREAM_URL
    request_timeout: float = 30.0
    use_mock_data: bool = False
    refresh_interval: float = 30.0
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8001

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        port = _env("API_PORT", "8001")
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ConfigError(f"{ENV_PREFIX}API_PORT must be a TCP port, got {port!r}")

        log_level = _env("LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level: {log_level!r}")

        origins = [o.strip() for o in _env("CORS_ORIGINS", ",".join(DEFAULT_CORS_ORIGINS)).split(",")]

        return cls(
            upstream_url=_env("UPSTREAM_URL", DEFAULT_UPSTREAM_URL),
            request_timeout=_env_positive("TIMEOUT", 30.0),
            use_mock_data=_env_bool("USE_MOCK", False),
            refresh_interval=_env_positive("REFRESH_SECONDS", 30.0),
            cors_origins=[o for o in origins if o],
            log_level=log_level,
            api_host=_env("API_HOST", "127.0.0.1"),
            api_port=int(port),
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
