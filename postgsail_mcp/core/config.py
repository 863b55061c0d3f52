# The module is to define the configuration settings for the server.
# Version: 0.1.0

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional
from postgsail_mcp.core.errors import ConfigurationError

class Settings(BaseSettings):
    """
    Startup configuration, read from the environment or a `.env` file.
    Attributes:
        POSTGSAIL_URL (str): Base URL of the PostgSail REST API.
        POSTGSAIL_TOKEN (str): Bearer token used for every request.
        POSTGSAIL_USER (str): Account email, used with POSTGSAIL_PASS when no token is given.
        POSTGSAIL_PASS (str): Account password.
        POSTGSAIL_VERBOSE (bool): Log every outbound request.
        POSTGSAIL_DEBUG (bool): Enable debug logging, implies verbose.
        POSTGSAIL_TIMEOUT (float): Per-request timeout in seconds.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    POSTGSAIL_URL: Optional[str] = None
    POSTGSAIL_TOKEN: Optional[str] = None
    POSTGSAIL_USER: Optional[str] = None
    POSTGSAIL_PASS: Optional[str] = None

    POSTGSAIL_VERBOSE: bool = False
    POSTGSAIL_DEBUG: bool = False
    POSTGSAIL_TIMEOUT: float = 30.0

    @property
    def has_credentials(self) -> bool:
        return bool(self.POSTGSAIL_USER and self.POSTGSAIL_PASS)

    def validate_startup(self):
        """Raises ConfigurationError unless the server has a URL and a way to authenticate."""
        if not self.POSTGSAIL_URL:
            raise ConfigurationError("POSTGSAIL_URL environment variable is required")
        if not self.POSTGSAIL_TOKEN and not self.has_credentials:
            raise ConfigurationError(
                "POSTGSAIL_TOKEN or POSTGSAIL_USER and POSTGSAIL_PASS environment variables are required"
            )

# lru_cache to cache the settings instance.
@lru_cache
def get_settings() -> Settings:
    return Settings()
