"""Application configuration via Pydantic BaseSettings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DEEPGRAM_API_URL = "https://api.deepgram.com/v1"


class Settings(BaseSettings):
    """Typed settings for environment-driven configuration."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    deepgram_api_url: str = DEFAULT_DEEPGRAM_API_URL
    deepgram_api_key: str | None = None
    # Optional endpoint handing out short-lived keys as {"key": "..."}
    deepgram_key_url: str | None = None
    http_timeout: float = 60.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
