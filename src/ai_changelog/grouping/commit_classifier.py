"""
Conventional Commit prefix extraction.

Commits are classified purely from their subject line: the token before
the first colon, with an optional ``(scope)`` suffix removed, is matched
case-sensitively against the known category table. Anything else is
``other``. No grammar validation beyond that is attempted.
"""

from __future__ import annotations

from ai_changelog.grouping.group_model import DISPLAY_NAMES, OTHER


def classify_subject(subject: str) -> str:
    """Return the Conventional Commit category of a subject line.

    Parameters
    ----------
    subject : str
        The first line of a commit message, e.g. ``"feat(api): add route"``.

    Returns
    -------
    str
        One of ``feat``, ``fix``, ``perf``, ``docs``, ``refactor``,
        ``chore``, ``test``, ``style`` or ``other``.

    Notes
    -----
    ``"feat : x"`` (whitespace before the colon) and ``": x"`` (nothing
    before the colon) are both ``other``.
    """
    if not subject:
        return OTHER
    colon = subject.find(":")
    if colon <= 0:
        return OTHER
    prefix = subject[:colon]
    paren = prefix.find("(")
    if paren != -1:
        prefix = prefix[:paren]
    if prefix in DISPLAY_NAMES:
        return prefix
    return OTHER
