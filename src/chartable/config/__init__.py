"""Configuration loading for chartable."""

from .loader import ConfigError, load_app_config, load_config, load_yaml
from .models import AppConfig

__all__ = ["AppConfig", "ConfigError", "load_app_config", "load_config", "load_yaml"]
