"""
Application Settings

Reads configuration from environment variables. Keyword overrides take
precedence, which keeps tests independent of the process environment.
"""

import os
from typing import Any


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class AppConfig:
    """Application configuration."""

    def __init__(self, **overrides: Any):
        # Record lifecycle
        self.ttl_seconds = int(os.getenv("CODEDROP_TTL_SECONDS", 3600))
        self.sweep_interval_seconds = float(
            os.getenv("CODEDROP_SWEEP_INTERVAL_SECONDS", 60)
        )
        self.max_upload_bytes = int(
            os.getenv("CODEDROP_MAX_UPLOAD_BYTES", 100 * 1024 * 1024)
        )

        # Storage
        self.upload_dir = os.getenv("CODEDROP_UPLOAD_DIR", "/tmp/codedrop/uploads")

        # Background work
        self.reaper_enabled = _env_bool("CODEDROP_REAPER_ENABLED", "true")
        self.notifier_workers = int(os.getenv("CODEDROP_NOTIFIER_WORKERS", 2))

        # HTTP server
        self.host = os.getenv("FLASK_HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", os.getenv("FLASK_PORT", 3000)))
        self.debug = _env_bool("FLASK_DEBUG", "false")
        self.cors_origins = os.getenv("CORS_ORIGINS", "*")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown configuration option: {key}")
            setattr(self, key, value)

        self._validate()

    def _validate(self) -> None:
        if self.ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if self.sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be positive")
        if self.max_upload_bytes <= 0:
            raise ValueError("max_upload_bytes must be positive")
