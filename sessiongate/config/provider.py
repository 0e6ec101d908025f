"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol

SESSION_COOKIE_NAME = "__Host-session"
DEFAULT_COOKIE_MAX_AGE = 30 * 24 * 60 * 60  # 30 days


@dataclass
class APIConfig:
    """API configuration."""
    host: str
    port: int
    debug: bool
    log_level: str


@dataclass
class AuthConfig:
    """Authentication configuration."""
    data_password: str
    cookie_name: str = SESSION_COOKIE_NAME
    cookie_max_age: int = DEFAULT_COOKIE_MAX_AGE


@dataclass
class StorageConfig:
    """Storage configuration."""
    redis_url: str
    redis_password: Optional[str] = None


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "8080")),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        # The shared password is required - no default for security
        data_password = os.getenv("DATA_PASSWORD")
        if not data_password:
            raise ValueError(
                "DATA_PASSWORD environment variable is required. "
                "Set it to the shared password clients send via HTTP Basic auth."
            )

        return AuthConfig(
            data_password=data_password,
            cookie_max_age=int(os.getenv("SESSION_COOKIE_MAX_AGE", str(DEFAULT_COOKIE_MAX_AGE))),
        )

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration from environment variables."""
        return StorageConfig(
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            redis_password=os.getenv("REDIS_PASSWORD"),  # Optional: for authenticated Redis
        )
