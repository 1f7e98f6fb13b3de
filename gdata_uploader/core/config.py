"""Client configuration using Pydantic BaseSettings"""
import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

# Setup logging
logger = logging.getLogger("config")


class Settings(BaseSettings):
    """Client settings loaded from environment variables"""

    # Account credentials
    GDATA_USERNAME: str = ""
    GDATA_PASSWORD: str = ""
    GDATA_DEVELOPER_KEY: str = ""
    GDATA_CLIENT_ID: str = "gdata_uploader"

    # Pre-authorized bearer credential (skips ClientLogin when set)
    GDATA_ACCESS_TOKEN: Optional[str] = None

    # Endpoints
    GDATA_BASE_URL: str = "http://gdata.youtube.com"
    GDATA_UPLOADS_URL: str = "http://uploads.gdata.youtube.com"
    CLIENT_LOGIN_URL: str = "https://www.google.com/youtube/accounts/ClientLogin"

    # Transport
    MULTIPART_BOUNDARY: str = "An43094fu"
    HTTP_TIMEOUT: float = 300.0  # seconds
    HTTP_DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("GDATA_ACCESS_TOKEN")
    @classmethod
    def blank_token_is_none(cls, v):
        if v is not None and v.strip() == "":
            return None
        return v

    @field_validator("MULTIPART_BOUNDARY")
    @classmethod
    def check_boundary(cls, v):
        if not v or any(c in v for c in "\r\n "):
            raise ValueError("MULTIPART_BOUNDARY must be a non-empty token without whitespace")
        return v


# Create global settings instance
settings = Settings()

# --- Module-level Constants (Extracted from settings) ---
GDATA_BASE_URL = settings.GDATA_BASE_URL
GDATA_UPLOADS_URL = settings.GDATA_UPLOADS_URL
CLIENT_LOGIN_URL = settings.CLIENT_LOGIN_URL
MULTIPART_BOUNDARY = settings.MULTIPART_BOUNDARY

# Derived constants
UPLOADS_PATH = "/feeds/api/users/{user}/uploads"
UPLOAD_TOKEN_PATH = "/action/GetUploadToken"
CATEGORIES_SCHEME = "http://gdata.youtube.com/schemas/2007/categories.cat"
