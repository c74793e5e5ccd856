"""
Deterministic changelog renderers.

Two renderers share the same contract, ``render(sections, version)``:
:class:`MarkdownRenderer` produces GitHub flavoured Markdown and
:class:`PlainTextRenderer` produces an underlined plain-text document.
Both skip sections without commits, so a caller may pass sections that
did not come from the grouper.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, TYPE_CHECKING

from ai_changelog.grouping.group_model import Section

if TYPE_CHECKING:  # pragma: no cover
    from ai_changelog.vcs.git_client import Commit


SHORT_HASH_LENGTH = 7

FORMAT_MARKDOWN = "markdown"
FORMAT_PLAIN = "plain"
FORMATS = (FORMAT_MARKDOWN, FORMAT_PLAIN)


def short_hash(commit_hash: str) -> str:
    """Return the first seven characters of a hash (display only)."""
    return commit_hash[:SHORT_HASH_LENGTH]


def clean_subject(subject: str) -> str:
    """Strip the ``type(scope):`` prefix from a subject line.

    Everything up to and including the first colon is dropped and the
    rest trimmed. If nothing is left, the subject is returned unchanged.
    """
    _, colon, rest = subject.partition(":")
    if not colon:
        return subject
    cleaned = rest.strip()
    return cleaned or subject


def _non_empty(sections: Optional[Iterable[Optional[Section]]]) -> List[Section]:
    return [section for section in sections or () if section is not None and section.commits]


class Renderer:
    """Base class for changelog renderers."""

    def render(self, sections: Optional[Iterable[Section]], version: str = "") -> str:
        raise NotImplementedError


class MarkdownRenderer(Renderer):
    """Render sections as Markdown with ``#``/``##`` headings and bullets."""

    def render(self, sections: Optional[Iterable[Section]], version: str = "") -> str:
        parts = [self._header(version)]
        for section in _non_empty(sections):
            parts.append("\n")
            parts.append(self._section(section))
        return "".join(parts)

    @staticmethod
    def _header(version: str) -> str:
        if not version:
            return "# Changelog\n"
        return f"# Changelog {version}\n"

    def _section(self, section: Section) -> str:
        lines = [f"## {section.title}\n\n"]
        lines.extend(self._commit_line(commit) for commit in section.commits)
        return "".join(lines)

    @staticmethod
    def _commit_line(commit: Commit) -> str:
        return f"- {clean_subject(commit.subject)} ({short_hash(commit.hash)})\n"


class PlainTextRenderer(Renderer):
    """Render sections as plain text with an ``=`` underlined title."""

    def render(self, sections: Optional[Iterable[Section]], version: str = "") -> str:
        header = "CHANGELOG" if not version else f"CHANGELOG {version}"
        parts = [f"{header}\n", "=" * len(header), "\n"]
        for section in _non_empty(sections):
            parts.append(f"\n{section.title.upper()}\n\n")
            for commit in section.commits:
                parts.append(f"  * {clean_subject(commit.subject)} ({short_hash(commit.hash)})\n")
        return "".join(parts)


def get_renderer(output_format: str) -> Renderer:
    """Return the renderer for ``output_format``.

    ``"plain"`` selects :class:`PlainTextRenderer`; any other value falls
    back to :class:`MarkdownRenderer`.
    """
    if output_format == FORMAT_PLAIN:
        return PlainTextRenderer()
    return MarkdownRenderer()
