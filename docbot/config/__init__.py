"""Configuration module for docbot."""

from docbot.config.loader import get_config_path, load_config
from docbot.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
