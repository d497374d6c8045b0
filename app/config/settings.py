"""Application configuration and settings."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "mediguard"
    mediguard_port: int = 8010
    environment: str = "development"
    app_version: str = "1.0"

    # OpenAI-compatible model API
    openai_api_key: str
    openai_base_url: Optional[str] = None
    analysis_model_name: str = "gpt-4o"
    assistant_model_name: str = "gpt-4o"
    analysis_temperature: float = 0.1
    assistant_temperature: float = 0.4
    model_max_tokens: int = 2000
    llm_invoke_timeout: float = 60.0

    # Review workflow
    default_clinician: str = "Dr. Admin"

    # CORS
    cors_allow_origins: List[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
