# lms_api/core/config.py
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "LMS API"

    SECRET_KEY: str = "your-super-secret-jwt-key-change-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    DATABASE_URL: str = "sqlite:///./lms.db"

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False

    # used by scripts/init_admin.py
    ADMIN_EMAIL: str = "admin@lms.local"
    ADMIN_PASSWORD: str = "change-me"
    ADMIN_FULL_NAME: str = "System Administrator"

    class Config:
        env_file = ".env"

# created once
settings = Settings()
