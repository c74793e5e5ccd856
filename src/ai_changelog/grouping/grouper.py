"""
Ordering and grouping of commits into changelog sections.

:func:`sort_by_date` puts the most recent commits first and
:func:`group_by_category` buckets them into :class:`Section` objects in
the fixed category precedence. Neither function mutates its input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ai_changelog.grouping.group_model import (
    CATEGORY_ORDER,
    DISPLAY_NAMES,
    Section,
    normalize_category,
)

if TYPE_CHECKING:  # pragma: no cover
    from ai_changelog.vcs.git_client import Commit


def sort_by_date(commits: Optional[Iterable[Commit]]) -> List[Commit]:
    """Return a new list of commits ordered by timestamp, newest first.

    Commits with equal timestamps keep their relative input order. ``None``
    is treated as an empty sequence.
    """
    if commits is None:
        return []
    # sorted() stays stable with reverse=True
    return sorted(commits, key=lambda commit: commit.timestamp, reverse=True)


def group_by_category(commits: Optional[Iterable[Commit]]) -> List[Section]:
    """Group commits into sections following the category precedence.

    Parameters
    ----------
    commits : Iterable[Commit]
        Commits, usually already sorted with :func:`sort_by_date`. Their
        order is preserved inside each section.

    Returns
    -------
    List[Section]
        One section per category that has at least one commit, ordered
        ``feat, fix, perf, docs, refactor, chore, test, style, other``.
    """
    buckets: Dict[str, List[Commit]] = {}
    for commit in commits or ():
        buckets.setdefault(normalize_category(commit.prefix), []).append(commit)

    return [
        Section(title=DISPLAY_NAMES[category], commits=tuple(buckets[category]))
        for category in CATEGORY_ORDER
        if buckets.get(category)
    ]
