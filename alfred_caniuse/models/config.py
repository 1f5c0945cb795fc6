"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from alfred_caniuse.utils.path import get_cache_dir

DEFAULT_DATABASE_URL = "https://caniuse.rs/features.json"
DEFAULT_SITE_URL = "https://caniuse.rs"


class AppConfig(BaseModel):
    """A validated configuration model for the application."""

    # Storage
    cache_dir: Path = Field(default_factory=get_cache_dir)
    cache_ttl_hours: float = 4.0

    # Remote endpoints
    database_url: str = DEFAULT_DATABASE_URL
    site_url: str = DEFAULT_SITE_URL
    releases_url: str | None = None
    fetch_timeout: float = 30.0

    # Self-update check
    check_updates: bool = False
    update_check_interval_hours: float = 24.0
    update_probe_timeout: float = 1.0

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator(
        "cache_ttl_hours",
        "update_check_interval_hours",
        "update_probe_timeout",
        "fetch_timeout",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Durations and timeouts must be strictly positive."""
        if v <= 0:
            raise ValueError("Durations and timeouts must be greater than zero.")
        return v

    @field_validator("database_url", "site_url", "releases_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Ensures remote endpoints are http(s) URLs without a trailing slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Expected an http(s) URL, got: {v!r}")
        return v.rstrip("/")

    @field_validator("cache_dir")
    @classmethod
    def expand_cache_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @model_validator(mode="after")
    def validate_update_source(self) -> "AppConfig":
        """The self-update check needs somewhere to look for releases."""
        if self.check_updates and not self.releases_url:
            raise ValueError("'check_updates' requires 'releases_url' to be set.")
        return self

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that may appear in the INI file."""
        return set(cls.model_fields)
