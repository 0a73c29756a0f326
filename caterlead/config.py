from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator
from typing import Optional, Literal
from loguru import logger
import sys


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )

    database_host: str = Field(default="localhost", description="Database host")
    database_port: int = Field(
        default=5432, ge=1, le=65535, description="Database port"
    )
    database_name: str = Field(
        default="caterlead", min_length=1, description="Database name"
    )
    database_user: str = Field(default="postgres", min_length=1, description="Database username")
    database_password: Optional[str] = Field(
        default="postgres", description="Database password"
    )
    database_pool_min: int = Field(
        default=1, ge=1, le=100, description="Minimum database pool size"
    )
    database_pool_max: int = Field(
        default=10, ge=1, le=100, description="Maximum database pool size"
    )

    # Google Places
    google_places_api_key: Optional[str] = Field(
        default=None, description="Google Places / Geocoding API key"
    )
    places_max_concurrency: int = Field(
        default=4,
        ge=1,
        le=50,
        description="Maximum number of concurrent place detail requests",
    )
    places_request_timeout: float = Field(
        default=30.0, gt=0, le=300, description="Timeout in seconds for Places requests"
    )
    default_radius_miles: float = Field(
        default=25.0, gt=0, le=100, description="Search radius used when none is given"
    )

    # Enrichment provider
    enrichment_api_url: str = Field(
        default="http://localhost:3000/api/tests",
        description="Base URL of the enrichment job service",
    )
    enrichment_api_key: Optional[str] = Field(
        default=None, description="Enrichment provider API key"
    )
    enrichment_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        le=60,
        description="Minimum spacing in seconds between leads in a batch (prevents rate limiting)",
    )
    enrichment_poll_interval: float = Field(
        default=10.0, ge=0, le=300, description="Seconds between enrichment job status checks"
    )
    enrichment_poll_attempts: int = Field(
        default=30, ge=1, le=1000, description="Status checks before an enrichment job times out"
    )

    template_cache_ttl_hours: float = Field(
        default=6.0, gt=0, description="Hours a generated template set stays fresh"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}",
        description="Log format string",
    )
    log_rotation: str = Field(default="100 MB", description="Log file rotation size")
    log_retention: str = Field(default="10 days", description="Log retention period")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    app_name: str = Field(default="Caterlead", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    cors_origins: list[str] = Field(default=["*"], description="CORS allowed origins")

    @field_validator("enrichment_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_pool_sizes(self) -> "Settings":
        """Ensure max pool size is greater than min pool size"""
        if self.database_pool_max < self.database_pool_min:
            raise ValueError(
                "database_pool_max must be greater than or equal to database_pool_min"
            )
        return self

    @property
    def database_url(self) -> str:
        """Standard database URL for asyncpg connections"""
        password = f":{self.database_password}" if self.database_password else ""
        return f"postgresql://{self.database_user}{password}@{self.database_host}:{self.database_port}/{self.database_name}"

    def configure_logging(self) -> None:
        """Configure loguru based on settings"""
        logger.remove()

        logger.add(
            sys.stderr, format=self.log_format, level=self.log_level, colorize=True
        )

        if self.log_file:
            logger.add(
                self.log_file,
                format=self.log_format,
                level=self.log_level,
                rotation=self.log_rotation,
                retention=self.log_retention,
                compression="zip",
            )

        logger.info(f"Logging configured for {self.environment} environment")


def get_settings() -> Settings:
    """Get cached settings instance"""
    settings = Settings()
    settings.configure_logging()
    return settings


settings = get_settings()
