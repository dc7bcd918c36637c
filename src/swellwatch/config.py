"""Configuration management for Swellwatch.

Loads station and pipeline settings from environment variables using Pydantic.
Every setting has a default, so the module-level instance is always valid.

Usage:
    from swellwatch.config import settings

    print(settings.station_id)  # Validated at import
    print(settings.resolve_candidate_urls())
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from swellwatch.clients.ndbc import DEFAULT_BASE_URL, NDBCClient


class Settings(BaseSettings):
    """Swellwatch configuration from environment variables.

    Loads from .env file automatically. Validates on instantiation.

    Attributes:
        station_id: NDBC station identifier (e.g. LJPC1)
        station_name: Human-readable station name for the report
        source_base_url: Root of the NDBC data tree
        candidate_urls: Explicit ordered source list (overrides the derived one)
        cache_ttl_seconds: How long a good report is served without re-fetching
        fetch_timeout_seconds: Upper bound for a single candidate attempt
        stale_after_seconds: Age past which a report is flagged stale for display
        user_agent: User-Agent header sent upstream
        debug: Expose internal failure detail and diagnostic meta in responses
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars
    )

    # Station
    station_id: str = Field(default="LJPC1", min_length=1, description="NDBC station id")
    station_name: str = Field(
        default="Scripps Pier, La Jolla, CA",
        description="Human-readable station name",
    )

    # Upstream
    source_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the NDBC data tree",
    )
    candidate_urls: list[str] | None = Field(
        default=None,
        description="Ordered candidate source URLs (None = derive from station_id)",
    )
    user_agent: str = Field(default="Swellwatch/0.1", description="Upstream User-Agent")

    # Pipeline timing
    cache_ttl_seconds: float = Field(default=300.0, gt=0, description="Report cache TTL")
    fetch_timeout_seconds: float = Field(default=10.0, gt=0, description="Per-candidate timeout")
    stale_after_seconds: float = Field(
        default=3600.0,
        gt=0,
        description="Display staleness threshold for a report timestamp",
    )

    # System Settings
    debug: bool = Field(default=False, description="Expose diagnostic detail in responses")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("station_id")
    @classmethod
    def validate_station_id(cls, v: str) -> str:
        """Normalize station id to the canonical upper-case form."""
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError(f"station_id must be a single non-empty token, got '{v}'")
        return v.upper()

    @field_validator("candidate_urls")
    @classmethod
    def validate_candidate_urls(cls, v: list[str] | None) -> list[str] | None:
        """Reject an explicitly empty candidate list."""
        if v is None:
            return None
        urls = [u.strip() for u in v if u.strip()]
        if not urls:
            raise ValueError("candidate_urls must contain at least one URL when set")
        return urls

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid:
            raise ValueError(f"log_level must be one of {valid}, got {v}")
        return v_upper

    def resolve_candidate_urls(self) -> list[str]:
        """Return the ordered list of source URLs to try for this station."""
        if self.candidate_urls:
            return list(self.candidate_urls)
        return NDBCClient.candidate_urls(self.station_id, base_url=self.source_base_url)


# Global settings instance — loaded once at import
settings = Settings()
