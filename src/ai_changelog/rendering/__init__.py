"""
Changelog rendering.

See :mod:`ai_changelog.rendering.renderer` for the Markdown and plain
text renderers.
"""

from .renderer import MarkdownRenderer, PlainTextRenderer, Renderer, get_renderer  # noqa: F401
