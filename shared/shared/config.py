"""Settings shared by the proxy services.

Each service subclasses ``BaseServiceSettings``. Values come from environment
variables and an optional ``.env`` file. One frozen instance configures both
the application (``create_app``) and the process host (``gunicorn_conf.py``).
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BaseServiceSettings(BaseSettings):
    """Runtime and listener settings common to every proxy service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ── Runtime ───────────────────────────────
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    service_name: str = "proxy"
    version: str = "1.0"

    # ── Listener (TLS is terminated by gunicorn) ──
    service_port: int = 8080
    tls_certfile: str = "testing.pem"
    tls_keyfile: str = "testing.pem"

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def bind(self) -> str:
        return f"0.0.0.0:{self.service_port}"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def json_logs(self) -> bool:
        return self.is_production
