# backend/app/core/config.py
import os
from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./fake_api.db")
    SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() == "true"
    FAKE_API_PREFIX: str = os.getenv("FAKE_API_PREFIX", "/api/fake")
    PUBLIC_BASE_URL: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "")
    ALLOWED_HOSTS: List[str] = ["*"]
    REGISTRY_SEED_FILE: Optional[str] = os.getenv("REGISTRY_SEED_FILE") or None
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SLOW_REQUEST_SECONDS: float = float(os.getenv("SLOW_REQUEST_SECONDS", "5"))

    class Config:
        env_file = ".env"

    @property
    def cors_origins(self) -> List[str]:
        if self.FRONTEND_URL:
            return [self.FRONTEND_URL]
        return ["*"]

settings = Settings()
