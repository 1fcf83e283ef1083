"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, JWT secret, Twilio credentials, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal

from app.core.exceptions import ConfigurationError
from utils.time_utils import parse_duration

PLACEHOLDER_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="servipro",
        description="MongoDB database name"
    )
    MONGODB_MAX_POOL_SIZE: int = Field(
        default=50,
        description="Maximum connections in the Motor pool"
    )
    MONGODB_CONNECT_RETRIES: int = Field(
        default=3,
        ge=1,
        description="Connection attempts at startup before giving up"
    )

    # Signed credentials
    JWT_SECRET: Optional[str] = Field(
        default=None,
        description="Secret used to sign and verify access tokens"
    )
    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    JWT_EXPIRES_IN: str = Field(
        default="7d",
        description="Access token lifetime (e.g. 7d, 12h, 30m, 3600)"
    )

    # Verification codes
    VERIFICATION_CODE_LENGTH: int = Field(
        default=6,
        description="Number of digits in a verification code"
    )
    VERIFICATION_CODE_TTL_MINUTES: int = Field(
        default=10,
        description="Minutes a verification code stays valid"
    )
    EXPOSE_VERIFICATION_CODE: bool = Field(
        default=False,
        description="Echo the generated code in the register response (development only)"
    )

    # Rate Limiting
    AUTH_RATE_LIMIT_REQUESTS: int = Field(
        default=4,
        description="Maximum register/verify requests per client IP per window"
    )
    AUTH_RATE_LIMIT_WINDOW_MINUTES: int = Field(
        default=60,
        description="Rate limit window for register/verify requests"
    )
    TRUSTED_PROXIES: list = Field(
        default=[],
        description="Peer addresses whose X-Forwarded-For header is honoured (JSON list)"
    )

    # SMS
    SMS_PROVIDER: Literal["console", "twilio"] = Field(
        default="console",
        description="console logs the SMS instead of sending it"
    )
    SMS_BRAND_NAME: str = Field(
        default="SERVIPRO",
        description="Brand name shown in the verification SMS"
    )
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio account SID"
    )
    TWILIO_AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Twilio auth token"
    )
    TWILIO_PHONE_NUMBER: Optional[str] = Field(
        default=None,
        description="Twilio sender number (E.164)"
    )
    TWILIO_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Twilio API request timeout in seconds"
    )

    # Providers
    SERVICES_CACHE_TTL_SECONDS: int = Field(
        default=60,
        description="Seconds a provider search result stays cached"
    )
    PROFILE_PURGE_AFTER_DAYS: int = Field(
        default=30,
        description="Days after a soft delete before a profile is purged"
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

    @validator("JWT_SECRET")
    def validate_jwt_secret(cls, v, values):
        """Ensure the signing secret is changed in production."""
        if values.get("ENVIRONMENT") == "production" and v == PLACEHOLDER_SECRET:
            raise ValueError("JWT_SECRET must be changed in production environment")
        return v

    @validator("JWT_EXPIRES_IN")
    def validate_jwt_expires_in(cls, v):
        """Reject durations the token issuer cannot parse."""
        parse_duration(v)
        return v

    @validator("EXPOSE_VERIFICATION_CODE")
    def validate_expose_code(cls, v, values):
        """Never echo verification codes in production."""
        if values.get("ENVIRONMENT") == "production" and v:
            raise ValueError("EXPOSE_VERIFICATION_CODE cannot be enabled in production environment")
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
        extra = "ignore"


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ConfigurationError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    # Validate MongoDB URI
    if not config.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    # Token signing
    if not config.JWT_SECRET:
        errors.append("JWT_SECRET is required")

    # SMS transport
    if config.SMS_PROVIDER == "twilio":
        for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_PHONE_NUMBER"):
            if not getattr(config, name):
                errors.append(f"{name} is required when SMS_PROVIDER=twilio")

    # Production-specific validations
    if config.is_production and config.SMS_PROVIDER == "console":
        errors.append("SMS_PROVIDER=console is not allowed in production")

    if errors:
        raise ConfigurationError(f"Configuration validation failed: {', '.join(errors)}")

    return True
