"""
Centralized configuration management.

All application and engine configuration is loaded and validated here.
"""
import os
import logging
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# Engine constants, overridable through Settings
DEFAULT_TYPE_RATIO_THRESHOLD = 0.8
DEFAULT_DIVERSITY_THRESHOLD = 5
DEFAULT_DONUT_MAX_CARDINALITY = 8


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Application settings with validation."""

    # Request limits
    max_dataset_rows: int = Field(default=50000, ge=1, le=1000000, description="Maximum rows accepted per request")
    max_dataset_columns: int = Field(default=500, ge=1, le=10000, description="Maximum columns accepted per request")

    # Rate limiting
    rate_limit_per_minute: int = Field(default=60, ge=1, le=1000, description="Rate limit per minute per IP")

    # CORS
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Column profiling
    type_ratio_threshold: float = Field(
        default=DEFAULT_TYPE_RATIO_THRESHOLD, gt=0, lt=1,
        description="Share of values that must parse as numbers/dates before a column takes that type"
    )
    infer_boolean_columns: bool = Field(default=True, description="Classify all-boolean columns as boolean")

    # Suggestion generation
    diversity_threshold: int = Field(
        default=DEFAULT_DIVERSITY_THRESHOLD, ge=0, le=100,
        description="Accepted suggestions after which repeated chart types are dropped"
    )
    donut_max_cardinality: int = Field(
        default=DEFAULT_DONUT_MAX_CARDINALITY, ge=2, le=100,
        description="Categorical columns below this many distinct values are preferred for donut charts"
    )
    inline_chart_data: bool = Field(default=True, description="Inline rows into chart specs instead of a named data source")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got '{v}'")
        return v.upper()

    @property
    def allowed_origins_list(self) -> List[str]:
        """Get allowed origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            max_dataset_rows=int(os.getenv("MAX_DATASET_ROWS", "50000")),
            max_dataset_columns=int(os.getenv("MAX_DATASET_COLUMNS", "500")),
            rate_limit_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", "60")),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            type_ratio_threshold=float(os.getenv("TYPE_RATIO_THRESHOLD", str(DEFAULT_TYPE_RATIO_THRESHOLD))),
            infer_boolean_columns=_env_flag("INFER_BOOLEAN_COLUMNS", "true"),
            diversity_threshold=int(os.getenv("DIVERSITY_THRESHOLD", str(DEFAULT_DIVERSITY_THRESHOLD))),
            donut_max_cardinality=int(os.getenv("DONUT_MAX_CARDINALITY", str(DEFAULT_DONUT_MAX_CARDINALITY))),
            inline_chart_data=_env_flag("INLINE_CHART_DATA", "true"),
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
        logger.info("Configuration loaded and validated successfully")
    return _settings


def reload_settings() -> Settings:
    """Reload settings (useful for testing)."""
    global _settings
    _settings = None
    return get_settings()
