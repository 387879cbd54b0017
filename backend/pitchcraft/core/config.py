import secrets
from enum import Enum
from typing import Any

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModeEnum(str, Enum):
    development = "development"
    production = "production"
    testing = "testing"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file="../.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── App ───────────────────────────────────────────────────
    MODE: ModeEnum = ModeEnum.production
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "PitchCraft"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # ── JWT / Auth ────────────────────────────────────────────
    SECRET_KEY: str = secrets.token_urlsafe(32)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # ── Database ──────────────────────────────────────────────
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_NAME: str = "pitchcraft"

    ASYNC_DATABASE_URI: PostgresDsn | str = Field(default="", validate_default=True)

    # Reads are idempotent, so they get a few attempts before failing.
    DB_READ_RETRIES: int = 2
    DB_READ_RETRY_DELAY: float = 0.5

    @field_validator("ASYNC_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: str | None, info: ValidationInfo) -> Any:
        """Build a Postgres URL from the DATABASE_* parts unless a full URI is given."""
        if v:
            return v
        parts = info.data
        production = parts.get("MODE") == ModeEnum.production
        return PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=parts.get("DATABASE_USER"),
            password=parts.get("DATABASE_PASSWORD"),
            host=parts.get("DATABASE_HOST"),
            port=parts.get("DATABASE_PORT"),
            path=parts.get("DATABASE_NAME"),
            query="ssl=require" if production else None,
        )

    # ── Pitch generation ──────────────────────────────────────
    OPENAI_API_KEY: str = ""
    PITCH_MODEL: str = "openai:gpt-4o-mini"
    GENERATION_TIMEOUT_SECONDS: float = 60.0
    GENERATION_RETRIES: int = 0


settings = Settings()
