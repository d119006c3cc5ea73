# quiz_anticheat/config.py
from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    MONGODB_URI: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "quiz_anticheat_db"
    JWT_SECRET: str = "change-me-jwt-secret-at-least-32-chars"
    JWT_ALGORITHM: str = "HS256"
    METADATA_MAX_CHARS: int = 10_000
    EVENT_QUERY_DEFAULT_LIMIT: int = 200
    EVENT_QUERY_MAX_LIMIT: int = 500
    # extra legacy spellings, e.g. {"FULLSCREEN_EXITED": "FULLSCREEN_EXIT"}
    EVENT_TYPE_ALIASES: Dict[str, str] = {}
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
