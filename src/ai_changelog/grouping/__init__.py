"""
Grouping logic for changelog entries.

This package classifies commit subjects into Conventional Commit
categories and arranges commits into ordered sections. See
:mod:`ai_changelog.grouping.commit_classifier`,
:mod:`ai_changelog.grouping.grouper` and
:mod:`ai_changelog.grouping.group_model` for details.
"""

from .commit_classifier import classify_subject  # noqa: F401
from .group_model import Section, get_display_name  # noqa: F401
from .grouper import group_by_category, sort_by_date  # noqa: F401
