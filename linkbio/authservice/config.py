from __future__ import annotations
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    JWT_SECRET: str = Field(default="change-me-dev-access-secret-0000000000")
    JWT_REFRESH_SECRET: str = Field(default="change-me-dev-refresh-secret-000000000")
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TTL_SECONDS: int = Field(default=3600)        # 1 hour
    REFRESH_TTL_SECONDS: int = Field(default=604800)     # 7 days
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)
    MFA_ISSUER: str = Field(default="MultiLink Platform")
    MFA_VALID_WINDOW: int = Field(default=1, ge=0)       # steps tolerated on each side
