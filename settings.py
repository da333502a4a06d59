from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Database
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "mhs"
    ENFORCE_UNIQUE_TUPLE: bool = False  # Unique index on (name, npm, bid, fak)

    # HTTP listener
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # JWT
    SECRET_KEY: str = "change-this-secret-key"
    ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 1

    # Workers, None means one per logical CPU
    WORKERS: Optional[int] = None
    RESTART_BACKOFF: float = 0.0  # Seconds before the first refork, 0 disables backoff
    RESTART_BACKOFF_FACTOR: float = 2.0
    RESTART_BACKOFF_MAX: float = 30.0
    MAX_RESTARTS: Optional[int] = None  # None means unlimited

    LOG_LEVEL: str = "INFO"


def get_settings() -> Settings:
    return Settings()
