"""
Configuration settings for the application
"""

import os
from typing import List, Optional
from pydantic_settings import BaseSettings

from campus_events.core.exceptions import ConfigurationError

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./campus_events.db")
    DATABASE_KEY: Optional[str] = os.getenv("DATABASE_KEY")

    # Security
    JWT_SECRET_KEY: Optional[str] = os.getenv("JWT_SECRET_KEY")
    JWT_REFRESH_SECRET_KEY: Optional[str] = os.getenv("JWT_REFRESH_SECRET_KEY")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12
    PASSWORD_MIN_LENGTH: int = 6

    # Application
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))
    API_PREFIX: str = "/api"
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
    ]

    # File limits
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Rate limiting
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100
    AUTH_RATE_LIMIT_MAX_REQUESTS: int = 5

    # Reports
    DASHBOARD_DAYS: int = 30
    UPCOMING_EVENTS_LIMIT: int = 5

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def refresh_secret(self) -> Optional[str]:
        return self.JWT_REFRESH_SECRET_KEY or self.JWT_SECRET_KEY

    def validate_required(self) -> None:
        """Fail fast when a secret the service cannot run without is missing"""
        missing = [
            name for name in ("DATABASE_KEY", "JWT_SECRET_KEY")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

settings = Settings()
