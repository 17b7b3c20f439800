"""YAML configuration file loading with Pydantic validation."""

import logging
import os
from pathlib import Path
from typing import Optional, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from chartable.query.paginator import parse_positive_int

from .models import AppConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

ENV_DATA_URL = "CHARTABLE_DATA_URL"
ENV_DATA_PATH = "CHARTABLE_DATA_PATH"
ENV_PAGE_SIZE = "CHARTABLE_PAGE_SIZE"


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(f"Expected a mapping at the top of {path}")
            return data
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: Path, model_class: type[T]) -> T:
    """Load and validate a YAML config file against a Pydantic model.

    Raises:
        ConfigError: If validation fails.
    """
    data = load_yaml(path)
    try:
        return model_class(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e


def load_app_config(path: Optional[Path] = None, **overrides) -> AppConfig:
    """Build the application config.

    Precedence: explicit overrides > environment > YAML file > defaults.
    Overrides whose value is None are ignored. The YAML file is validated
    on its own first, then environment and overrides are layered over the
    fields it set.
    """
    data: dict = {}
    if path:
        data = load_config(Path(path), AppConfig).model_dump(exclude_unset=True)

    env_url = os.environ.get(ENV_DATA_URL, "")
    if env_url:
        data["data_url"] = env_url
    env_path = os.environ.get(ENV_DATA_PATH, "")
    if env_path:
        data["data_path"] = env_path
    env_page_size = os.environ.get(ENV_PAGE_SIZE, "")
    if env_page_size:
        default = parse_positive_int(data.get("default_page_size"), 10)
        page_size = parse_positive_int(env_page_size, default)
        if page_size == default and env_page_size.strip() != str(default):
            logger.warning(f"Ignoring invalid {ENV_PAGE_SIZE}={env_page_size!r}")
        data["default_page_size"] = page_size

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AppConfig(**data)
    except ValidationError as e:
        source = str(path) if path else "environment"
        raise ConfigError(f"Configuration validation failed for {source}: {e}") from e
