"""
NoteStore - Application Configuration
=======================================

What:  Server settings (bind address, port, cache directory, log level).
How:   Pydantic Settings model. Values come from explicit keyword arguments
       (the CLI passes them) or from NOTES_* environment variables / a .env
       file. The model is frozen: once built it is handed to create_app()
       and NoteService and never changes.
Who:   Built by notestore.cli, or by create_app() when run under
       `uvicorn --factory notestore.main:create_app`.

Environment variables:
    NOTES_HOST       bind address             (required)
    NOTES_PORT       listen port              (required, 1-65535)
    NOTES_CACHE      note directory path      (required)
    NOTES_LOG_LEVEL  logging level            (default INFO)
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Immutable server configuration.

    host, port and cache have no defaults: starting without them is an error.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(min_length=1, description="Address the server binds to")
    port: int = Field(ge=1, le=65535, description="Port the server listens on")

    # ── Note Storage ──────────────────────────────────────────────────────
    # Relative paths are resolved against the working directory at startup
    cache: str = Field(min_length=1, description="Directory holding <name>.txt note files")

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {sorted(valid_levels)}")
        return upper

    @property
    def cache_path(self) -> Path:
        """Absolute path of the cache directory."""
        return Path(self.cache).expanduser().resolve()

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_prefix": "NOTES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "frozen": True,
    }
