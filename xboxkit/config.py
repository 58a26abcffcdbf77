"""Configuration loading: defaults, then ``config.json``, then environment."""
import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'language': 'en-US',
    'market': 'US',
    'api_timeout_seconds': 10,
    'log_level': 'WARNING',
}

# Environment variable -> config key
ENV_OVERRIDES = {
    'XBOXKIT_LANGUAGE': 'language',
    'XBOXKIT_MARKET': 'market',
    'XBOXKIT_TIMEOUT': 'api_timeout_seconds',
    'XBOXKIT_LOG_LEVEL': 'log_level',
}


class ConfigError(ValueError):
    """Raised when the config file or an override cannot be parsed."""


def load_config(config_path: str = 'config.json') -> Dict[str, Any]:
    """Load configuration from JSON file with environment variable support.

    Environment variables take precedence over config file values:
    - XBOXKIT_LANGUAGE overrides language
    - XBOXKIT_MARKET overrides market
    - XBOXKIT_TIMEOUT overrides api_timeout_seconds
    - XBOXKIT_LOG_LEVEL overrides log_level

    A missing file is not an error; the defaults are used.

    Raises:
        ConfigError: The file is not a JSON object, a code is not a string,
                     or the timeout is not a positive number.
    """
    config = dict(DEFAULT_CONFIG)

    if os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Error parsing config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a JSON object")
        config.update(data)
    else:
        logger.debug("No config file at %s, using defaults", config_path)

    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config[key] = value

    for key in ('language', 'market', 'log_level'):
        if not isinstance(config[key], str):
            raise ConfigError(f"{key} must be a string, got {config[key]!r}")

    try:
        config['api_timeout_seconds'] = float(config['api_timeout_seconds'])
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"api_timeout_seconds must be a number, got {config['api_timeout_seconds']!r}"
        ) from e
    if config['api_timeout_seconds'] <= 0:
        raise ConfigError(
            f"api_timeout_seconds must be positive, got {config['api_timeout_seconds']}"
        )

    return config
