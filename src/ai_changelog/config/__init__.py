"""
Configuration loading for ai_changelog.

Provides a loader for the optional Ollama configuration file in the
user's home directory. See :mod:`ai_changelog.config.loader` for
implementation details.
"""

from .loader import ConfigError, default_config, load_config  # noqa: F401
