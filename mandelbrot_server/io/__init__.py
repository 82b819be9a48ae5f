"""Configuration loading."""

from .config import ConfigManager, ServerConfig, load_config

__all__ = ["ConfigManager", "ServerConfig", "load_config"]
