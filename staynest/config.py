from __future__ import annotations

import os
from typing import List

from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv


load_dotenv()


class Settings(BaseSettings):
    DB_URL: str = Field(default=os.getenv("DB_URL", "sqlite:///./staynest.db"))
    JWT_SECRET: str = Field(default=os.getenv("JWT_SECRET", "change_me"))
    JWT_ALG: str = Field(default=os.getenv("JWT_ALG", "HS256"))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
    )

    # Empty disables head self-signup; heads are then only created by seed_head.
    HEAD_INVITE_CODE: str = Field(default=os.getenv("HEAD_INVITE_CODE", ""))

    UPLOAD_DIR: str = Field(default=os.getenv("UPLOAD_DIR", "data/uploads"))
    # Comma-separated list of allowed frontend origins.
    CORS_ORIGINS: str = Field(
        default=os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    )
    LOG_LEVEL: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    class Config:
        case_sensitive = False

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
