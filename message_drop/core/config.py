# message_drop/core/config.py
from functools import lru_cache
from typing import List

from fastapi import Request
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# secrets that shipped as hard-coded fallbacks in earlier deployments
KNOWN_DEFAULT_SECRETS = {
    "message-drop-jwt-secret-change-me",
    "message-drop-secret-key-change-me",
    "dev-secret-change-me",
}


class Settings(BaseSettings):
    # required: the app refuses to start without a signing key
    SECRET_KEY: str
    DATABASE_URL: str = "sqlite:///./message_drop.db"

    # JWT session cookie
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30
    COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = True

    # bcrypt cost factor, shared by account passwords and message passcodes
    BCRYPT_ROUNDS: int = 12

    CORS_ORIGINS: List[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False

    # load from project-root .env and ignore everything else in it
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_must_be_real(cls, value: str) -> str:
        if value in KNOWN_DEFAULT_SECRETS:
            raise ValueError("SECRET_KEY is set to a publicly known default")
        if len(value) < 16:
            raise ValueError("SECRET_KEY must be at least 16 characters")
        return value

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def rounds_in_range(cls, value: int) -> int:
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return value


@lru_cache
def load_settings() -> Settings:
    """Read settings from the environment once per process."""
    return Settings()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
