"""
Configuration loader for wordvec.

Precedence (lowest to highest): StoreConfig defaults, YAML file, environment
variables (including values loaded from a .env file).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv

from ..core.exceptions import ConfigError
from ..core.types import StoreConfig


logger = logging.getLogger(__name__)


ENV_ENDPOINT = "WORDVEC_EMBEDDING_URL"
ENV_DIMENSION = "WORDVEC_DIMENSION"
ENV_BATCH_SIZE = "WORDVEC_BATCH_SIZE"
ENV_TIMEOUT_SECONDS = "WORDVEC_TIMEOUT_SECONDS"
ENV_LOG_LEVEL = "WORDVEC_LOG_LEVEL"


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    use_dotenv: bool = True,
) -> StoreConfig:
    """
    Load store configuration.

    Args:
        config_path: Optional YAML file; settings may sit under a top-level
            'store' key or at the top level
        use_dotenv: Whether to load a .env file into the environment first

    Returns:
        Validated StoreConfig

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigError: If a value cannot be parsed or is out of range
    """
    values: Dict[str, Any] = StoreConfig().to_dict()

    if config_path is not None:
        values.update(_load_yaml(Path(config_path)))

    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    values.update(_env_overrides())

    try:
        config = StoreConfig.from_dict(values)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    validate_config(config)
    return config


def validate_config(config: StoreConfig) -> None:
    """
    Check configuration values are in range.

    Raises:
        ConfigError: On the first invalid value
    """
    if not config.endpoint:
        raise ConfigError("endpoint must be a non-empty URL")

    if isinstance(config.dimension, bool) or not isinstance(config.dimension, int) or config.dimension <= 0:
        raise ConfigError(f"dimension must be a positive integer, got {config.dimension!r}")

    if isinstance(config.batch_size, bool) or not isinstance(config.batch_size, int) or config.batch_size <= 0:
        raise ConfigError(f"batch_size must be a positive integer, got {config.batch_size!r}")

    timeout = config.timeout_seconds
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
    ):
        raise ConfigError(f"timeout_seconds must be positive, got {config.timeout_seconds!r}")

    if not isinstance(config.log_level, int):
        raise ConfigError(f"Unknown log level: {config.log_level!r}")


def _load_yaml(config_path: Path) -> Dict[str, Any]:
    """Load settings from a YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading config from: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")

    section = data.get("store", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'store' section must be a mapping: {config_path}")
    return section


def _env_overrides() -> Dict[str, Any]:
    """Collect overrides from environment variables."""
    overrides: Dict[str, Any] = {}

    endpoint = os.environ.get(ENV_ENDPOINT)
    if endpoint:
        overrides["endpoint"] = endpoint

    dimension = os.environ.get(ENV_DIMENSION)
    if dimension:
        overrides["dimension"] = _parse_number(ENV_DIMENSION, dimension, int)

    batch_size = os.environ.get(ENV_BATCH_SIZE)
    if batch_size:
        overrides["batch_size"] = _parse_number(ENV_BATCH_SIZE, batch_size, int)

    timeout = os.environ.get(ENV_TIMEOUT_SECONDS)
    if timeout:
        overrides["timeout_seconds"] = _parse_number(ENV_TIMEOUT_SECONDS, timeout, float)

    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        overrides["log_level"] = log_level

    return overrides


def _parse_number(name: str, raw: str, cast):
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
