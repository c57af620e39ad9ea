"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (storage backend, DB URI, secrets, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Storage
    STORAGE_BACKEND: str = Field(
        default="memory",
        description="Storage backend: 'memory' or 'mongo'"
    )
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI (mongo backend only)"
    )
    MONGODB_DB_NAME: str = Field(
        default="quicktech",
        description="MongoDB database name"
    )
    SEED_DEMO_DATA: bool = Field(
        default=True,
        description="Seed the service catalog and demo users on startup"
    )

    # Sessions
    SESSION_TIMEOUT_MINUTES: int = Field(
        default=60 * 24,
        description="Login session lifetime in minutes"
    )
    SESSION_COOKIE_NAME: str = Field(
        default="quicktech_sid",
        description="Name of the session cookie"
    )

    # Referrals
    REFERRAL_REWARD_AMOUNT: int = Field(
        default=50,
        description="Reward (INR) credited to a referrer per successful sign-up"
    )
    REFERRAL_CODE_LENGTH: int = Field(
        default=8,
        description="Length of generated referral codes"
    )
    PUBLIC_ORIGIN: Optional[str] = Field(
        default=None,
        description="Public site origin for referral links (defaults to request base URL)"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Security
    SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="Application secret key"
    )

    @validator("SECRET_KEY")
    def validate_secret_key(cls, v, values):
        """Ensure secret key is changed in production."""
        if values.get("ENVIRONMENT") == "production" and v == "change-me-in-production":
            raise ValueError("SECRET_KEY must be changed in production environment")
        return v

    @validator("STORAGE_BACKEND")
    def validate_storage_backend(cls, v):
        """Only the in-memory and MongoDB backends exist."""
        v = v.lower()
        if v not in ("memory", "mongo"):
            raise ValueError("STORAGE_BACKEND must be 'memory' or 'mongo'")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if settings.STORAGE_BACKEND == "mongo":
        if not settings.MONGODB_URL:
            errors.append("MONGODB_URL is required for the mongo backend")
        if not settings.MONGODB_DB_NAME:
            errors.append("MONGODB_DB_NAME is required for the mongo backend")

    if settings.SESSION_TIMEOUT_MINUTES <= 0:
        errors.append("SESSION_TIMEOUT_MINUTES must be positive")

    if settings.REFERRAL_CODE_LENGTH < 4:
        errors.append("REFERRAL_CODE_LENGTH must be at least 4")

    if settings.REFERRAL_REWARD_AMOUNT < 0:
        errors.append("REFERRAL_REWARD_AMOUNT cannot be negative")

    # Production-specific validations
    if settings.is_production:
        if settings.STORAGE_BACKEND == "memory":
            errors.append("In-memory storage is not allowed in production")
        if settings.SEED_DEMO_DATA:
            errors.append("SEED_DEMO_DATA must be disabled in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
