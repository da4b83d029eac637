"""Utility functions."""
from .config_manager import AppConfig, ConfigManager, get_config_manager
from .logger import setup_logging

__all__ = [
    "AppConfig", "ConfigManager", "get_config_manager",
    "setup_logging",
]
