"""Application configuration using Pydantic Settings.

Centralized configuration management following Clean Architecture principles.
All environment variables should be accessed through this module.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """API server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="API_", case_sensitive=False)

    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server",
    )
    port: int = Field(
        default=8000,
        description="Port to bind the API server",
    )
    workers: int = Field(
        default=4,
        description="Number of Uvicorn worker processes",
    )


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration settings."""

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_", case_sensitive=False)

    api_requests: int = Field(
        default=100,
        description="Requests allowed per window across the API",
    )
    api_window_seconds: int = Field(
        default=900,
        description="API rate limit window (seconds)",
    )
    impact_analysis_requests: int = Field(
        default=20,
        description="Impact analysis requests allowed per window",
    )
    impact_analysis_window_seconds: int = Field(
        default=300,
        description="Impact analysis rate limit window (seconds)",
    )


class ObservabilitySettings(BaseSettings):
    """Observability configuration settings (OpenTelemetry, logging, metrics)."""

    model_config = SettingsConfigDict(env_prefix="OTEL_", case_sensitive=False)

    # OpenTelemetry Tracing
    exporter_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP exporter endpoint (gRPC)",
    )
    service_name: str = Field(
        default="alert-impact-engine",
        description="Service name for traces and metrics",
    )
    trace_sample_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Trace sampling rate (0.0 to 1.0)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json_format: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )


class AuthSettings(BaseSettings):
    """API key bootstrap configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTH_", case_sensitive=False)

    bootstrap_api_key: str | None = Field(
        default=None,
        description="Raw API key registered at startup (development only)",
    )
    bootstrap_key_name: str = Field(
        default="bootstrap",
        description="Client name of the bootstrap API key",
    )
    bootstrap_user_id: str = Field(
        default="user-123",
        description="User the bootstrap API key acts as",
    )
    bootstrap_account_id: str = Field(
        default="account-456",
        description="Account the bootstrap API key is scoped to",
    )


class AnalysisSettings(BaseSettings):
    """Impact analysis workflow settings."""

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_", case_sensitive=False)

    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Time budget for a single impact analysis (seconds)",
    )
    historical_data_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts to fetch historical data before giving up",
    )
    historical_data_retry_wait_seconds: float = Field(
        default=0.5,
        ge=0.0,
        description="Base wait between historical data fetch attempts (seconds)",
    )
    recent_analyses_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Default number of analyses returned by the recent listing",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration modules and provides a single settings object.
    Load from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )

    # Sub-settings
    api: APISettings = Field(default_factory=APISettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    observability: ObservabilitySettings = Field(
        default_factory=ObservabilitySettings
    )
    auth: AuthSettings = Field(default_factory=AuthSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)


# Global settings instance (singleton)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance (singleton pattern).

    Returns:
        Settings instance loaded from environment
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
