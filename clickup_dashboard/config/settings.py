"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from clickup_dashboard.config.constants import CLICKUP_API_BASE_URL

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""

    # ClickUp
    CLICKUP_API_BASE_URL: str = os.getenv("CLICKUP_API_BASE_URL", CLICKUP_API_BASE_URL)
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

    # Stored dashboard settings
    SETTINGS_FILE_PATH: str = os.getenv("SETTINGS_FILE_PATH", "/tmp/clickup_api_settings.json")

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", str(Path(__file__).parent.parent.parent / "logs"))
    WEB_HOST: str = os.getenv("WEB_HOST", "0.0.0.0")
    WEB_PORT: int = int(os.getenv("WEB_PORT", "8000"))

    @classmethod
    def validate(cls) -> bool:
        """Validate that settings values are usable"""
        if not cls.CLICKUP_API_BASE_URL.startswith(("http://", "https://")):
            raise ValueError(
                f"CLICKUP_API_BASE_URL must be an http(s) URL, got '{cls.CLICKUP_API_BASE_URL}'"
            )

        if cls.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")

        return True


# Global settings instance
settings = Settings()
