import os
import tempfile
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8080
    FRONTEND_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    RESET_DB: bool = False
    LOW_STOCK_THRESHOLD: int = 10
    # single-host serialization of the name uniqueness check
    SERIALIZE_NAME_WRITES: bool = False
    NAME_LOCK_TIMEOUT_SECONDS: float = 10
    LOCK_DIR: str = os.path.join(tempfile.gettempdir(), "inventory_api_locks")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
