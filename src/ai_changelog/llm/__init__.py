"""
Language model integration for ai_changelog.

This package contains the :class:`OllamaClient` for communicating with
an Ollama LLM server and the prompt builders it sends.
"""

from .ollama_client import LLMError, OllamaClient  # noqa: F401
