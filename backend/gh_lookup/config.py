from functools import lru_cache
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    github_token: Optional[str] = Field(default=None, alias="GITHUB_TOKEN")
    github_base_url: HttpUrl = Field(
        default="https://api.github.com", alias="GITHUB_BASE_URL"
    )
    github_proxy: Optional[str] = Field(default=None, alias="GITHUB_PROXY")
    request_timeout_seconds: float = Field(default=20, alias="REQUEST_TIMEOUT_SECONDS")
    user_agent: str = Field(default="gh-lookup", alias="USER_AGENT")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    max_sessions: int = Field(default=1000, alias="MAX_SESSIONS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # ignore unrelated env vars to avoid validation errors


@lru_cache
def get_settings() -> Settings:
    return Settings()
