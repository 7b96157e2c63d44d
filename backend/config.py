# backend/config.py
from functools import lru_cache
from pathlib import Path
from typing import ClassVar, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    # No default on purpose: the app must not start without a signing secret
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./delegations.db"

    # bcrypt cost factor; only tests should lower it
    BCRYPT_ROUNDS: int = 10

    PORT: int = 4000
    FRONTEND_URL: Optional[str] = None

    # Attach the underlying exception message to 500 responses
    EXPOSE_ERROR_DETAILS: bool = True
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SECRET_KEY must be set to a non-empty value")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_postgres_scheme(cls, v: str) -> str:
        # SQLAlchemy only understands the postgresql:// scheme
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
