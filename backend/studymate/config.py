"""
StudyMate Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.

Connection target resolution (first match wins):
    1. MONGODB_URI            → used verbatim
    2. DB_USER + DB_PASS      → mongodb+srv://<user>:<pass>@<DB_HOST>/?appName=<DB_APP_NAME>
    3. nothing configured     → mongodb://localhost:27017 (local development)
"""

from typing import List
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST provide database credentials
    (DB_USER/DB_PASS or MONGODB_URI).
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Full MongoDB connection string; overrides the credential fields below
    mongodb_uri: str = Field(default="", description="Full MongoDB connection URI")

    # What: Atlas credentials, URL-escaped when the URI is assembled
    db_user: str = Field(default="")
    db_pass: str = Field(default="")
    db_host: str = Field(default="cluster0.mongodb.net")
    db_app_name: str = Field(default="Cluster0")

    db_name: str = Field(default="studymate-db")
    partners_collection: str = Field(default="partners")
    partner_requests_collection: str = Field(default="partnerRequests")

    # What: How long the driver waits to find a usable server before failing
    # Trade-off: Lower = faster 500s when the cluster is down; higher = tolerates failover
    db_timeout_ms: int = Field(default=5000, ge=500, le=60000)

    @property
    def mongodb_url(self) -> str:
        """Resolved connection URI (see module docstring for precedence)."""
        if self.mongodb_uri:
            return self.mongodb_uri
        if self.db_user and self.db_pass:
            return (
                f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
                f"@{self.db_host}/?appName={quote_plus(self.db_app_name)}"
            )
        return "mongodb://localhost:27017"

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_USER and db_user both work
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that a database target is configured.
        When:  Called during app startup (lifespan).
        How:   Raises ValueError listing every problem found.
        """
        errors = []
        if not self.mongodb_uri and not (self.db_user and self.db_pass):
            errors.append(
                "No database configured. Set MONGODB_URI, or DB_USER and DB_PASS "
                "(falling back to mongodb://localhost:27017)"
            )
        elif not self.mongodb_uri and ":" in self.db_host:
            errors.append("DB_HOST must not include a port when using mongodb+srv://")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance — imported throughout the application
settings = Settings()
