"""
Runtime configuration read from environment variables.
"""

import logging
import os
from typing import Literal, Optional

from pydantic import BaseModel

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Settings for the HR API process."""

    port: int = 8080
    environment: str = "development"
    store_backend: Literal["memory", "minio"] = "memory"
    minio_endpoint: str = "localhost:9000"
    minio_access_key: str = "minioadmin"
    minio_secret_key: str = "minioadmin"
    minio_secure: bool = False
    users_bucket: str = "hr-users"
    store_timeout: Optional[float] = None
    log_level: Optional[str] = None
    log_format: str = DEFAULT_LOG_FORMAT

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "INFO" if self.is_production else "DEBUG"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        timeout = os.environ.get("HR_STORE_TIMEOUT")
        return cls(
            port=int(os.environ.get("AMBULANCE_API_PORT") or 8080),
            environment=os.environ.get(
                "AMBULANCE_API_ENVIRONMENT", "development"
            ),
            store_backend=os.environ.get(
                "HR_STORE_BACKEND", "memory"
            ).lower(),
            minio_endpoint=os.environ.get(
                "MINIO_ENDPOINT", "localhost:9000"
            ),
            minio_access_key=os.environ.get("MINIO_ACCESS_KEY", "minioadmin"),
            minio_secret_key=os.environ.get("MINIO_SECRET_KEY", "minioadmin"),
            minio_secure=_env_flag("MINIO_SECURE"),
            users_bucket=os.environ.get("HR_USERS_BUCKET", "hr-users"),
            store_timeout=float(timeout) if timeout else None,
            log_level=os.environ.get("LOG_LEVEL"),
            log_format=os.environ.get("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        )


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure logging based on environment variables"""
    settings = settings or Settings.from_env()
    log_level = settings.effective_log_level

    # Validate log level
    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        print(f"Invalid log level: {log_level}, defaulting to INFO")
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=settings.log_format,
        force=True,  # Override any existing configuration
    )
