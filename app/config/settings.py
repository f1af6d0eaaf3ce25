"""
Environment configuration for the hostel ledger service.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
import secrets
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class CapacityPolicy(str, Enum):
    """What to do when an allocation would take a room past its capacity."""
    REJECT = "reject"
    FLAG = "flag"


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application configuration
    APP_NAME: str = "Hostel Ledger Service"
    API_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    CORS_ORIGINS: str = "*"

    # Database configuration
    DATABASE_URL: str = "sqlite:///./hostel.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    DB_CONNECT_ARGS: Dict[str, Any] = {}

    # Security configuration
    JWT_SECRET_KEY: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    PASSWORD_BCRYPT_ROUNDS: int = 12

    # Email configuration
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_TLS: bool = True
    EMAIL_FROM_NAME: str = "Hostel Office"
    EMAIL_FROM_ADDRESS: Optional[str] = None

    # Business logic
    CURRENCY: str = "INR"
    ALLOCATION_CAPACITY_POLICY: CapacityPolicy = CapacityPolicy.REJECT

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"
    LOG_SQL_QUERIES: bool = False

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names from the environment"""
        return str(v).upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from a JSON list or a comma separated string"""
        value = self.CORS_ORIGINS.strip()
        if value.startswith('[') and value.endswith(']'):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @property
    def email_enabled(self) -> bool:
        return bool(self.SMTP_HOST and self.EMAIL_FROM_ADDRESS)

    def get_database_url(self) -> str:
        return self.DATABASE_URL

    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
