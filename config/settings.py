"""
Configuration management using Pydantic Settings.

Environment variables:
- SCAN_BACKEND_URL: Base URL of the processing backend
- SCAN_BACKEND_TIMEOUT: Request timeout in seconds (unset = no timeout)
- SCAN_DEFAULT_EXPORT_FORMAT: 'txt' or 'csv'
- SCAN_LOG_LEVEL: Logging level name
"""
import logging
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Processing backend
    scan_backend_url: str = Field(default="http://localhost:8765")
    scan_backend_timeout: Optional[float] = Field(default=None, gt=0)

    # Export
    scan_default_export_format: Literal['txt', 'csv'] = Field(default="txt")

    # Logging
    scan_log_level: str = Field(default="INFO")

    def get_gateway_config(self) -> dict:
        """Get gateway constructor arguments as dictionary."""
        return {
            'base_url': self.scan_backend_url,
            'timeout': self.scan_backend_timeout,
        }


def configure_logging(config: Optional[Settings] = None) -> None:
    """Apply the configured log level to the root logger."""
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.scan_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


# Global settings instance
settings = Settings()
