"""
config.py

Centralized configuration management using pydantic-settings.
All modules must import settings from this file.
Direct os.getenv() calls are prohibited elsewhere.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings loaded from .env file."""

    # Database
    mysql_host: str = "127.0.0.1"
    mysql_port: int = 3306
    mysql_user: str = "automation"
    mysql_password: str = ""
    mysql_db: str = "aaps_automation"

    # Insulin profile
    insulin_type: str = "oref_rapid"  # oref_rapid | oref_ultra_rapid | oref_free_peak
    insulin_dia: float = 5.0  # hours, user-defined
    insulin_free_peak: int = 75  # minutes, used by oref_free_peak only

    # Push notifications
    fcm_server_key: str = ""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
