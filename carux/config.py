"""Application configuration with validation."""
from typing import Literal
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings read from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Car UX Review Platform"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Redis (report cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_TTL_REPORTS: int = Field(default=3600, ge=1)  # 1 hour
    REDIS_CONNECT_TIMEOUT: float = Field(default=2.0, gt=0)
    CACHE_DELETE_BATCH: int = Field(default=500, ge=1)

    # Default task-level weights
    DEFAULT_TASK_DOABLE_WEIGHT: float = Field(default=43.75, ge=0, le=100)
    DEFAULT_TASK_USABILITY_WEIGHT: float = Field(default=37.5, ge=0, le=100)
    DEFAULT_TASK_VISUALS_WEIGHT: float = Field(default=18.75, ge=0, le=100)

    # Default category-level weights (emotional is a bonus percentage)
    DEFAULT_CATEGORY_TASKS_WEIGHT: float = Field(default=80.0, ge=0, le=100)
    DEFAULT_CATEGORY_RESPONSIVENESS_WEIGHT: float = Field(default=15.0, ge=0, le=100)
    DEFAULT_CATEGORY_WRITING_WEIGHT: float = Field(default=5.0, ge=0, le=100)
    DEFAULT_CATEGORY_EMOTIONAL_WEIGHT: float = Field(default=5.0, ge=0, le=100)

    # Presentation
    SCORE_DISPLAY_DECIMALS: int = Field(default=1, ge=0, le=4)

    @model_validator(mode="after")
    def validate_default_weights(self):
        """The doable weight and the base category weights must be positive."""
        if self.DEFAULT_TASK_DOABLE_WEIGHT <= 0:
            raise ValueError("DEFAULT_TASK_DOABLE_WEIGHT must be positive")
        category_total = (
            self.DEFAULT_CATEGORY_TASKS_WEIGHT
            + self.DEFAULT_CATEGORY_RESPONSIVENESS_WEIGHT
            + self.DEFAULT_CATEGORY_WRITING_WEIGHT
        )
        if category_total <= 0:
            raise ValueError("Default category weights must sum to a positive value")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production is not running in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
