from __future__ import annotations
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    APP_NAME: str = Field(default="linkbio-api")
    APP_VERSION: str = Field(default="0.1.0")
    APP_ENV: str = Field(default="development")  # "development" | "production"
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)

    LOG_LEVEL: Optional[str] = None  # defaults by APP_ENV, see log_level
    LOG_DIR: Optional[str] = None    # enables error.log / combined.log

    FRONTEND_URL: str = Field(default="http://localhost:3000")
    REQUEST_BODY_MAX_BYTES: int = Field(default=10240)  # 10 KiB

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX: int = Field(default=100)
    RATE_LIMIT_WINDOW_SECONDS: int = Field(default=900)  # 15 minutes

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "INFO" if self.APP_ENV == "production" else "DEBUG"
