from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass
class ApiKeyStatus:
    tmdb: bool
    omdb: bool

    @property
    def both(self) -> bool:
        return self.tmdb and self.omdb

    @property
    def missing(self) -> list[str]:
        missing: list[str] = []
        if not self.tmdb:
            missing.append("TMDB")
        if not self.omdb:
            missing.append("OMDB")
        return missing

    @property
    def message(self) -> str | None:
        """User-facing hint naming the missing keys, or None when both are set."""
        if self.both:
            return None
        return (
            f"Missing API keys: {', '.join(self.missing)}. "
            "Please add them to your environment or .env file."
        )


class Settings(BaseSettings):
    """Environment-backed settings for the catalog backend."""

    TMDB_API_KEY: str | None = None
    OMDB_API_KEY: str | None = None

    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p"
    TMDB_LANGUAGE: str = "en-US"
    OMDB_BASE_URL: str = "https://www.omdbapi.com/"

    CACHE_MAX_ENTRIES: int = Field(default=100, ge=1)
    CACHE_TTL_SECONDS: float = Field(default=300.0, gt=0)
    ENRICHMENT_CONCURRENCY: int = Field(default=5, ge=1)

    HTTP_MAX_ATTEMPTS: int = Field(default=3, ge=1)
    HTTP_RETRY_DELAY_SECONDS: float = Field(default=1.0, ge=0)
    HTTP_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    ITEMS_PER_PAGE: int = Field(default=20, ge=1)
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Movie World"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_prefix="MOVIEWORLD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def api_key_status(self) -> ApiKeyStatus:
        """Report which upstream keys are present without touching the network."""
        return ApiKeyStatus(
            tmdb=bool(self.TMDB_API_KEY and self.TMDB_API_KEY.strip()),
            omdb=bool(self.OMDB_API_KEY and self.OMDB_API_KEY.strip()),
        )
