"""Application configuration."""
from pydantic_settings import BaseSettings
from typing import List

from platecrafter.models import PlateType, Theme


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "PlateCrafter"
    debug: bool = False
    log_level: str = "INFO"

    # Plate
    plate_type: PlateType = PlateType.PLATE_96
    default_theme: Theme = Theme.LIGHT

    # AWS Bedrock (layout generation)
    aws_region: str = "us-east-1"
    bedrock_model_id: str = "anthropic.claude-3-sonnet-20240229-v1:0"
    generation_max_tokens: int = 8192
    generation_timeout_seconds: int = 60

    # File Upload
    max_file_size_mb: int = 10

    # CORS
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_prefix = "PLATECRAFTER_"


settings = Settings()
