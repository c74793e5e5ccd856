"""
Top-level package for ai_changelog.

This package exposes the main CLI entry point via the
``ai_changelog.cli`` module. The changelog pipeline itself lives in
:mod:`ai_changelog.generator`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
