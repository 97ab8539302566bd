from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Async driver URL; use postgresql+asyncpg://... in production
    DATABASE_URL: str = "sqlite+aiosqlite:///./resume_store.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_PRE_PING: bool = True

    # Upper bound for each section read of the full-resume assembly
    SECTION_FETCH_TIMEOUT_SECONDS: float = 5.0

    DEFAULT_RESUME_TITLE: str = "Untitled Resume"
    DEFAULT_TEMPLATE: str = "professional"

    # Delete already-written records when a cascade create fails midway
    CASCADE_COMPENSATE: bool = False

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"

settings = Settings()
