# backend/config.py
"""
Configuration management for the Pylon camera parameter tooling
Loads settings from environment variables
"""

import logging

from pydantic_settings import BaseSettings

from errors import InvalidLogLevelError


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    app_env: str = "development"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Parameter source (YAML or JSON, same layout as the camera node's default.yaml)
    parameter_file: str = "params/default.yaml"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in .env file

    def log_level_value(self) -> int:
        """Resolve log_level to a logging module constant"""
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise InvalidLogLevelError(self.log_level)
        return level


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings"""
    return settings
