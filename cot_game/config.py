"""Configuration from .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:8081"
    DEFAULT_MODEL: str = "gemini-2.0-flash-lite"
    REQUEST_TIMEOUT: float = 30.0  # Seconds per API call
    LOG_LEVEL: str = "INFO"

    # Local record of every scored attempt (CLI + Streamlit).
    HISTORY_PATH: str = "data/attempt_history.json"

    class Config:
        env_file = ".env"


settings = Settings()
