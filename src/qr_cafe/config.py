from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./qr_cafe.db"
    DATABASE_ECHO: bool = False

    # sql | memory
    STORE_BACKEND: Literal["sql", "memory"] = "sql"
    STORE_FALLBACK_TO_MEMORY: bool = True
    CREATE_TABLES: bool = True
    SEED_SAMPLE_DATA: bool = False

    STRICT_STATUS_TRANSITIONS: bool = False

    MENU_BASE_URL: str = "http://localhost:5173"
    QR_BOX_SIZE: int = 10
    QR_BORDER: int = 2

    ORDER_POLL_INTERVAL: float = 30.0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
