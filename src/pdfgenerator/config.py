"""Configuration module using Pydantic settings."""

import tempfile
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Generator settings loaded from PDFGEN_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PDFGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Streamed PDFs are written here before being handed to the caller
    temp_dir: Path = Path(tempfile.gettempdir()) / "pdfgenerator"

    # Page format used when no render options were set
    default_format: str = "A4"

    # Browser
    headless: bool = True
    browser_args: list[str] = Field(default_factory=list)
    timeout_ms: int = 30000  # Content loading timeout
    wait_until: str = "networkidle"

    # Logging
    log_level: str = "WARNING"


# Global settings instance
settings = Settings()
