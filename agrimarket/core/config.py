import os
from pydantic import BaseModel


class Settings(BaseModel):
    PROJECT_NAME: str = "agrimarket"

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./agrimarket.db")

    # Auth
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key-here")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    # API
    CORS_ORIGINS: list = os.getenv(
        "CORS_ORIGINS", "http://localhost,http://localhost:3000"
    ).split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
