"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
registry starts with no configuration at all; override them via the
environment before importing this module.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Lending Registry API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional log file.  run.py logs here only (default lending_registry.log)
    # while the interactive console owns the terminal.
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # PBKDF2 work factor for stored principal secrets.  Tests lower it to
    # keep the suite fast.
    password_hash_iterations: int = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))

    # Address the API server binds to when launched through ``run.py``.
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8080"))

    # Comma‑separated list of allowed origins for cross‑origin requests.
    # The default ``*`` matches the permissive headers browser clients
    # of the registry expect.
    cors_origins: List[str] = field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*")))

    # Populate the catalog and directory with the demo records at startup.
    seed_demo_data: bool = os.getenv("SEED_DEMO_DATA", "true").lower() in {"1", "true", "yes"}


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
