"""
Configuration loader for ai_changelog.

Connection settings for the Ollama server are read from the JSON file
``~/.ollama_server/.ollama_config.json``, the same file other local
Ollama tooling uses. The file is optional: when it is absent the
built-in defaults are used.

If the file exists but is malformed or has fields of the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ai_changelog.llm.ollama_client import (
    DEFAULT_BASE_URL,
    DEFAULT_CHANGELOG_TIMEOUT,
    DEFAULT_MODEL,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
)


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

CONFIG_FILE_NAME = ".ollama_config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "port": DEFAULT_PORT,
    "model": DEFAULT_MODEL,
    "request_timeout": DEFAULT_REQUEST_TIMEOUT,
    "changelog_timeout": DEFAULT_CHANGELOG_TIMEOUT,
    "max_tokens": None,
}


class ConfigError(Exception):
    """Raised when the Ollama configuration file is invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the directory holding the Ollama configuration file."""
    return Path.home() / ".ollama_server"


def default_config() -> Dict[str, Any]:
    """Return a fresh copy of the built-in configuration."""
    return dict(DEFAULT_CONFIG)


def _validate(data: Dict[str, Any]) -> None:
    if "base_url" in data and not isinstance(data["base_url"], str):
        raise ConfigError("'base_url' must be a string")
    # bool is an int subclass; reject it explicitly
    if "port" in data and (not isinstance(data["port"], int) or isinstance(data["port"], bool)):
        raise ConfigError("'port' must be an integer")
    if "model" in data and not isinstance(data["model"], str):
        raise ConfigError("'model' must be a string")
    for key in ("request_timeout", "changelog_timeout"):
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ConfigError(f"'{key}' must be a number")
        if value <= 0:
            raise ConfigError(f"'{key}' must be greater than zero")
    max_tokens = data.get("max_tokens")
    if max_tokens is not None and (not isinstance(max_tokens, int) or isinstance(max_tokens, bool)):
        raise ConfigError("'max_tokens' must be an integer")


def load_config() -> Dict[str, Any]:
    """Load the Ollama configuration, falling back to defaults.

    Returns
    -------
    Dict[str, Any]
        The defaults updated with the file's values. Keys:
        - base_url (str): The base URL of the Ollama server
        - port (int): The port number
        - model (str): The default model name
        - request_timeout (int|float): Health probe timeout in seconds
        - changelog_timeout (int|float): Changelog generation timeout
        - max_tokens (int|None): Maximum tokens for generation

    Raises
    ------
    ConfigError
        If the file exists but cannot be read, is not a JSON object, or
        has fields of the wrong type.
    """
    config_path = _get_config_directory() / CONFIG_FILE_NAME
    config = default_config()

    if not config_path.exists():
        logger.debug("No configuration file at %s; using defaults", config_path)
        return config

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.debug("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")
    _validate(data)

    config.update({key: value for key, value in data.items() if key in DEFAULT_CONFIG})
    logger.debug("Loaded Ollama configuration from: %s", config_path)
    return config
