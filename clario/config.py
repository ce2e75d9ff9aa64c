from typing import List, Optional

from decouple import Csv, UndefinedValueError, config
from pydantic import BaseModel, Field, ValidationError, field_validator


class ConfigurationError(RuntimeError):
    """Raised when the process environment cannot produce valid settings."""


def normalize_database_url(url: str) -> str:
    # Hosted providers hand out postgres:// URLs, SQLAlchemy wants the dialect name
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


class Settings(BaseModel):
    """Process-wide configuration, built once at startup and passed explicitly."""

    database_url: str = Field(..., min_length=1)
    secret_key: str = Field(..., min_length=8)
    upload_dir: str = "uploads"
    max_file_size: int = Field(10 * 1024 * 1024, gt=0)
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    ai_timeout_seconds: float = Field(60.0, gt=0)
    access_token_expire_minutes: int = Field(60 * 24, gt=0)
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8080"]
    clear_analysis_on_content_edit: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("database_url")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return normalize_database_url(v)

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment (or a .env file) and validate them."""
        try:
            return cls(
                database_url=config("DATABASE_URL"),
                secret_key=config("SECRET_KEY"),
                upload_dir=config("UPLOAD_DIR", default="uploads"),
                max_file_size=config("MAX_FILE_SIZE", default=10 * 1024 * 1024, cast=int),
                openai_api_key=config("OPENAI_API_KEY", default=None),
                openai_model=config("OPENAI_MODEL", default="gpt-4o-mini"),
                ai_timeout_seconds=config("AI_TIMEOUT_SECONDS", default=60.0, cast=float),
                access_token_expire_minutes=config("ACCESS_TOKEN_EXPIRE_MINUTES", default=60 * 24, cast=int),
                cors_origins=config(
                    "CORS_ORIGINS",
                    default="http://localhost:3000,http://localhost:8080",
                    cast=Csv(),
                ),
                clear_analysis_on_content_edit=config("CLEAR_ANALYSIS_ON_CONTENT_EDIT", default=False, cast=bool),
                log_level=config("LOG_LEVEL", default="INFO"),
            )
        except UndefinedValueError as e:
            raise ConfigurationError(f"Missing required setting: {e}") from e
        except (ValidationError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
