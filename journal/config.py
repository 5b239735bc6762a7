"""
Configuration management for the Wellbeing Journal
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Wellbeing Journal"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = ""                   # overrides the DEBUG-derived level, e.g. "WARNING"

    # Storage
    DATABASE_URL: str = "sqlite:///./journal.db"
    STORAGE_BACKEND: str = "sql"          # "sql" or "memory"
    DAY_KEY_PREFIX: str = "dayData_"      # one key per calendar day
    RECORD_CACHE_ENABLED: bool = True

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8081",
        "http://127.0.0.1:8081",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
