# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./gamerental.db"
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "gamerental.log"

    # Rental order defaults
    ORDER_DUE_DAYS: int = 7
    ALLOW_EMPTY_ORDERS: bool = True
    RECENT_ORDERS_LIMIT: int = 5

    # Initial tracking record values for a freshly placed order
    DEFAULT_TRACKING_STATUS: str = "Order Processing"
    DEFAULT_TRACKING_LOCATION: str = "home office"
    DEFAULT_TRACKING_COURIER: str = "TBD"

    class Config:
        env_file: ClassVar[str] = str(env_path)

settings = Settings()
