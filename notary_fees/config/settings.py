"""
Environment configuration for the notary fee calculation engine.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

from typing import List, Union
from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Application configuration
    APP_NAME: str = Field(default="Notary Fee Calculation Engine", alias="PROJECT_NAME")
    API_VERSION: str = Field(default="v1", alias="PROJECT_VERSION")
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: List[str] = Field(default=["*"], alias="BACKEND_CORS_ORIGINS")

    # Database configuration
    DATABASE_URL: str = "sqlite:///./notary_fees.db"
    DB_ECHO: bool = False

    # Currency: all amounts are integer minor units at this scale
    CURRENCY: str = "VND"
    CURRENCY_SCALE: int = Field(default=0, ge=0, le=6)

    # Input conventions inherited from the document-group forms
    DEFAULT_REFERENCE_FIELD: str = "property_value"
    DEFAULT_QUANTITY_FIELD: str = "num_copies"

    # Formula limits
    FORMULA_MAX_LENGTH: int = Field(default=1000, gt=0)
    FORMULA_MAX_DEPTH: int = Field(default=50, gt=0)
    FORMULA_MAX_ROUND_DIGITS: int = Field(default=18, ge=0)

    # Numeric inputs: digits before and after the decimal point
    NUMBER_MAX_INTEGER_DIGITS: int = Field(default=30, gt=0)
    NUMBER_MAX_FRACTION_DIGITS: int = Field(default=30, ge=0)

    # History pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"
    LOG_SQL_QUERIES: bool = False

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        if isinstance(v, str):
            # Handle JSON string format from .env
            if v.startswith('[') and v.endswith(']'):
                import json
                return json.loads(v)
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @field_validator('LOG_FORMAT')
    @classmethod
    def normalize_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in {"json", "console"}:
            raise ValueError(f"Unsupported log format: {v}")
        return fmt

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
