"""
Application configuration using Pydantic Settings
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import field_validator


SUPPORTED_PROVIDERS: List[str] = ["wikimedia", "unsplash"]


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Settings
    api_title: str = "Free Images API"
    api_description: str = "Image search for file pickers backed by free image providers"
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = "data/app.log"

    # Security Settings
    max_requests_per_minute: int = 60

    # Provider Settings
    provider: str = "wikimedia"
    wikimedia_api_url: str = "https://commons.wikimedia.org/w/api.php"
    unsplash_api_url: str = "https://api.unsplash.com/search/photos"
    unsplash_client_id: str = ""  # Access key sent as client_id
    request_timeout: float = 10.0
    user_agent: str = "free-images/1.0 (+https://commons.wikimedia.org)"

    # Search Settings
    thumbs_per_page: int = 24
    file_namespace: int = 6  # MediaWiki File: namespace
    image_side_length: int = 1024
    thumb_size: int = 120
    icon_size: int = 24
    image_license: str = "cc-sa"
    commons_main_dir: str = "https://upload.wikimedia.org/wikipedia/commons/"

    # Generic file-type icons, used when an image has no real thumbnail
    icon_base_url: str = "/pix/f/"
    icon_extension: str = ".png"

    # User Preference Settings
    preferences_path: str = "data/preferences.json"
    preferences_lock_timeout: float = 5.0

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Normalise the provider name and reject unknown providers.

        Example:
            >>> validate_provider(" Unsplash ")
            'unsplash'
        """
        name = (v or "").strip().lower()
        if name not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unknown provider '{v}'. Supported: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        return name

    @field_validator("commons_main_dir", "icon_base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        if v and not v.endswith("/"):
            return v + "/"
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def provider_api_url(self) -> str:
        """Base URL of the configured provider."""
        if self.provider == "unsplash":
            return self.unsplash_api_url
        return self.wikimedia_api_url


# Global settings instance
settings = Settings()
