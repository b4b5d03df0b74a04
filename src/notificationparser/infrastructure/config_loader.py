"""
Configuration loader module.

Handles loading and validation of the plugin configuration:
- An optional JSON config file (explicit path or $NOTIFICATION_PARSER_CONFIG)
- Environment variable overrides, applied last
- Built-in defaults for everything else
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from notificationparser.domain.config import ParserConfig
from notificationparser.domain.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "NOTIFICATION_PARSER_CONFIG"

# Environment variable -> ParserConfig field
ENV_OVERRIDES = {
    "NOTIFICATION_PARSER_DB": "db_path",
    "NOTIFICATION_PARSER_MANIFEST_DIR": "manifest_dir",
    "NOTIFICATION_PARSER_LOG_LEVEL": "log_level",
    "NOTIFICATION_PARSER_LOG_FILE": "log_file",
}


def _load_json_file(filepath: Path) -> Dict[str, Any]:
    """
    Load and parse a JSON config file with clear error messages.

    Raises:
        ConfigError: File missing, unreadable, empty, or not a JSON object
    """
    if not filepath.exists():
        raise ConfigError(f"Configuration file not found: {filepath}")

    try:
        content = filepath.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {filepath}: {e}") from e

    if not content.strip():
        raise ConfigError(f"Configuration file is empty: {filepath}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in config file: {filepath}\n"
            f"Error at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must hold a JSON object: {filepath}")
    return data


def load_config(
    path: Optional[Path | str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ParserConfig:
    """
    Build the plugin configuration.

    Args:
        path: Config file; falls back to $NOTIFICATION_PARSER_CONFIG, then defaults only
        environ: Environment to read overrides from (defaults to os.environ)

    Returns:
        Validated ParserConfig

    Raises:
        ConfigError: If the config file or an override is invalid
    """
    env = os.environ if environ is None else environ

    if path is None and env.get(CONFIG_ENV):
        path = env[CONFIG_ENV]

    data: Dict[str, Any] = {}
    if path is not None:
        filepath = Path(path)
        logger.debug("Loading configuration from: %s", filepath)
        data.update(_load_json_file(filepath))

    for var, field_name in ENV_OVERRIDES.items():
        if env.get(var):
            logger.debug("Config override from %s", var)
            data[field_name] = env[var]

    try:
        config = ParserConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug("Using database %s", config.db_path)
    return config
