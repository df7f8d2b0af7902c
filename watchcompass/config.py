"""Application configuration using Pydantic Settings."""

from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, RedisDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from watchcompass.constants import (
    API_TIMEOUT_DEFAULT,
    DEFAULT_COUNTRY_FALLBACK,
    TMDB_API_BASE_URL,
)

TmdbAuthMode = Literal["bearer", "api_key_query"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class TmdbOptions:
    """Validated options for talking to the TMDB API."""

    base_url: str = TMDB_API_BASE_URL
    api_key: str = ""
    auth_mode: TmdbAuthMode = "bearer"
    default_country_code: str = DEFAULT_COUNTRY_FALLBACK
    language: str = "en-US"
    request_timeout_seconds: float = API_TIMEOUT_DEFAULT
    max_retries: int = 2
    backoff_base_ms: int = 200
    backoff_jitter_ms: int = 100

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())


@dataclass(frozen=True)
class CatalogCacheOptions:
    """Per-operation cache durations in minutes. Zero disables caching."""

    search_minutes: int = 5
    details_minutes: int = 30
    providers_minutes: int = 30
    genres_minutes: int = 120
    similar_minutes: int = 30

    @property
    def search_ttl(self) -> timedelta:
        return timedelta(minutes=max(0, self.search_minutes))

    @property
    def details_ttl(self) -> timedelta:
        return timedelta(minutes=max(0, self.details_minutes))

    @property
    def providers_ttl(self) -> timedelta:
        return timedelta(minutes=max(0, self.providers_minutes))

    @property
    def genres_ttl(self) -> timedelta:
        return timedelta(minutes=max(0, self.genres_minutes))

    @property
    def similar_ttl(self) -> timedelta:
        return timedelta(minutes=max(0, self.similar_minutes))


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "WatchCompass"
    log_level: LogLevel | None = None

    # Redis (optional cache backing store)
    redis_url: RedisDsn | None = None

    # TMDB
    tmdb_base_url: AnyHttpUrl = TMDB_API_BASE_URL  # type: ignore[assignment]
    tmdb_api_key: str = ""
    tmdb_auth_mode: TmdbAuthMode = "bearer"
    tmdb_default_country_code: str = DEFAULT_COUNTRY_FALLBACK
    tmdb_language: str = "en-US"
    tmdb_request_timeout_seconds: float = API_TIMEOUT_DEFAULT
    tmdb_max_retries: int = 2
    tmdb_backoff_base_ms: int = 200
    tmdb_backoff_jitter_ms: int = 100

    # Catalog cache durations (minutes)
    cache_search_minutes: int = 5
    cache_details_minutes: int = 30
    cache_providers_minutes: int = 30
    cache_genres_minutes: int = 120
    cache_similar_minutes: int = 30

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper() or None
        return v

    @field_validator("tmdb_api_key", "tmdb_language")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("tmdb_default_country_code")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        """Uppercase the country code, falling back to US when blank."""
        v = v.strip().upper()
        return v or DEFAULT_COUNTRY_FALLBACK

    @field_validator("tmdb_request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("TMDB_REQUEST_TIMEOUT_SECONDS must be positive")
        return v

    @field_validator("tmdb_max_retries", "tmdb_backoff_base_ms", "tmdb_backoff_jitter_ms")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Retry and backoff settings cannot be negative")
        return v

    @field_validator(
        "cache_search_minutes",
        "cache_details_minutes",
        "cache_providers_minutes",
        "cache_genres_minutes",
        "cache_similar_minutes",
    )
    @classmethod
    def floor_cache_minutes(cls, v: int) -> int:
        """Negative durations behave like zero (caching disabled)."""
        return max(0, v)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def effective_log_level(self) -> LogLevel:
        """Explicit LOG_LEVEL, else INFO in production and DEBUG elsewhere."""
        if self.log_level is not None:
            return self.log_level
        return "INFO" if self.is_production else "DEBUG"

    @property
    def tmdb(self) -> TmdbOptions:
        """TMDB options view injected into the catalog components."""
        return TmdbOptions(
            base_url=str(self.tmdb_base_url).rstrip("/"),
            api_key=self.tmdb_api_key,
            auth_mode=self.tmdb_auth_mode,
            default_country_code=self.tmdb_default_country_code,
            language=self.tmdb_language,
            request_timeout_seconds=self.tmdb_request_timeout_seconds,
            max_retries=self.tmdb_max_retries,
            backoff_base_ms=self.tmdb_backoff_base_ms,
            backoff_jitter_ms=self.tmdb_backoff_jitter_ms,
        )

    @property
    def catalog_cache(self) -> CatalogCacheOptions:
        return CatalogCacheOptions(
            search_minutes=self.cache_search_minutes,
            details_minutes=self.cache_details_minutes,
            providers_minutes=self.cache_providers_minutes,
            genres_minutes=self.cache_genres_minutes,
            similar_minutes=self.cache_similar_minutes,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
