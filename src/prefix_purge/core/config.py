"""Configuration management for prefix-purge."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    otel_enabled: bool = False
    otel_service_name: str = "prefix-purge"
    delete_batch_size: int = Field(default=1000, ge=1, le=1000)

    model_config = {
        "env_prefix": "PREFIX_PURGE_",
        "case_sensitive": False,
    }


settings = Settings()
