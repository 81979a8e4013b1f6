"""Application configuration."""

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Development mode. When False, error details are hidden from clients
    dev_mode: bool = True

    # Gemini generateContent API (GEMINI_API_KEY)
    gemini_api_key: SecretStr = SecretStr("")
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.5-flash-preview-09-2025"

    # Upstream HTTP timeouts
    upstream_timeout_seconds: float = 60.0
    upstream_connect_timeout_seconds: float = 10.0

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_llm: int = 10  # per client per minute

    # Logging
    log_level: str = "info"

    @field_validator("gemini_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key.get_secret_value())

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
