"""Configuration management using environment variables"""
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

MEMORY_BACKEND = "memory"
SQL_BACKEND = "sql"
STORAGE_BACKENDS = (MEMORY_BACKEND, SQL_BACKEND)


class Settings:
    """Process-wide settings, read once at startup."""

    def __init__(self):
        # Storage backend is fixed for the life of the process
        self.storage_backend = os.getenv("STORAGE_BACKEND", MEMORY_BACKEND).strip().lower()
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Invalid STORAGE_BACKEND: {self.storage_backend!r}. "
                f"Expected one of: {', '.join(STORAGE_BACKENDS)}."
            )

        # Database configuration (only read by the sql backend)
        if self.storage_backend == SQL_BACKEND:
            self.database_url = self._get_required("DATABASE_URL")
        else:
            self.database_url = os.getenv("DATABASE_URL", "")
        self.database_create_schema = (
            os.getenv("DATABASE_CREATE_SCHEMA", "false").lower() == "true"
        )

        # Server configuration
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "8080"))

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    def _get_required(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key, "").strip()
        if not value:
            raise ValueError(
                f"Missing required environment variable: {key}. "
                f"Required when STORAGE_BACKEND={self.storage_backend}."
            )
        return value
