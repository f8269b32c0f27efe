"""
API configuration settings.
"""

from typing import List, Optional

from pydantic import validator
from pydantic_settings import BaseSettings


class APISettings(BaseSettings):
    """Bookshelf API configuration, overridable through BOOKSHELF_* variables."""

    # API Settings
    api_title: str = "Bookshelf API"
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "localhost"
    port: int = 5000
    debug: bool = False

    # CORS Settings
    cors_origins: List[str] = ["*"]

    # Book ids
    id_length: int = 21

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"
    log_file: Optional[str] = None

    model_config = {
        "env_prefix": "BOOKSHELF_",
        "env_file": ".env",
        "extra": "ignore"
    }

    @validator('port')
    def validate_port(cls, v):
        """Ensure port is a valid TCP port."""
        if v < 1 or v > 65535:
            raise ValueError('port must be between 1 and 65535')
        return v

    @validator('id_length')
    def validate_id_length(cls, v):
        """Keep generated ids long enough to stay unique."""
        if v < 8 or v > 64:
            raise ValueError('id_length must be between 8 and 64')
        return v

    @validator('log_level')
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @validator('log_format')
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()

    @property
    def server_uri(self) -> str:
        """Base URI the server listens on."""
        return f"http://{self.host}:{self.port}"


# Global settings instance
settings = APISettings()
