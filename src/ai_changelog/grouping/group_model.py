"""
Data models for changelog grouping.

The category table below is the single source of truth for which
Conventional Commit types are recognised, the order in which their
sections appear in a changelog, and the heading each section gets.
A :class:`Section` is one titled block of commits produced by the
grouper and consumed by a renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional, Sequence, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from ai_changelog.vcs.git_client import Commit


OTHER = "other"

# Ordered (prefix, display name) pairs. Section precedence follows this order.
CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("feat", "New Features"),
    ("fix", "Bug Fixes"),
    ("perf", "Performance"),
    ("docs", "Documentation"),
    ("refactor", "Internal Changes"),
    ("chore", "Maintenance"),
    ("test", "Testing"),
    ("style", "Style"),
    (OTHER, "Other"),
)

CATEGORY_ORDER: Tuple[str, ...] = tuple(prefix for prefix, _ in CATEGORIES)

DISPLAY_NAMES: Mapping[str, str] = MappingProxyType(dict(CATEGORIES))


def normalize_category(prefix: Optional[str]) -> str:
    """Return ``prefix`` if it is a known category, otherwise ``other``."""
    if prefix in DISPLAY_NAMES:
        return prefix  # type: ignore[return-value]
    return OTHER


def get_display_name(prefix: Optional[str]) -> str:
    """Return the section heading for a category prefix."""
    return DISPLAY_NAMES[normalize_category(prefix)]


@dataclass(frozen=True)
class Section:
    """A titled group of commits.

    Attributes
    ----------
    title : str
        Human readable heading, e.g. ``"New Features"``.
    commits : Sequence[Commit]
        Commits in display order. The grouper always supplies a non-empty
        tuple; renderers tolerate empty or ``None`` values from other
        callers.
    """

    title: str
    commits: Optional[Sequence[Commit]] = ()
