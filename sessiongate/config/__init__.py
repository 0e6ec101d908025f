"""Configuration for SessionGate."""

from .provider import APIConfig, AuthConfig, ConfigProvider, EnvConfigProvider, StorageConfig

__all__ = ["APIConfig", "AuthConfig", "ConfigProvider", "EnvConfigProvider", "StorageConfig"]
