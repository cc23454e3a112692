# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    SESSION_COOKIE_NAME: str = "session"

    # Image uploads (filesystem blobs served under /uploads)
    UPLOAD_DIR: str = "static/uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    # Seeded on first start when no such user exists
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin"
    BCRYPT_ROUNDS: int = 12

    # Bounded retries for generated identifiers
    SKU_MAX_ATTEMPTS: int = 5
    RECEIPT_NUMBER_MAX_ATTEMPTS: int = 3

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
