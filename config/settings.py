"""
Configuration module for the Learner Grades Stats API.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    atlas_uri: str = "mongodb://localhost:27017"
    database_name: str = "grades_api"
    mongo_timeout_ms: int = 5000

    # API
    api_host: str = "0.0.0.0"
    port: int = 5050
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


settings = get_settings()
