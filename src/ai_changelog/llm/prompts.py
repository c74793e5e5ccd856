"""
Prompt construction for changelog generation.

Two prompts are used: a single-shot prompt asking the model to write a
complete release changelog, and a shorter prompt asking it to summarise
a batch of commits.
"""

from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING, Sequence

from ai_changelog.rendering.renderer import short_hash

if TYPE_CHECKING:  # pragma: no cover
    from ai_changelog.vcs.git_client import Commit


_CHANGELOG_INSTRUCTIONS = dedent(
    """
    You are a professional release notes writer. Given the git commits below,
    produce a clean changelog in Markdown.

    Rules:
    1. Merge related commits into ONE high-level entry that describes the
       user-facing capability.
    2. Write from the user's perspective: describe what users can now DO,
       not which code artifacts were created.
    3. Leave out commits that only touch tests, refactoring, style or internal
       restructuring.
    4. Order entries by impact, most important first, not chronologically.
    5. Start with a single-sentence summary of the release.
    6. Use exactly these sections and skip any that would be empty:
       - **Highlights**: major new capabilities
       - **Improvements**: enhancements to existing functionality
       - **Bug Fixes**: resolved issues
    7. Each entry is one concise line starting with "- ".
    8. Do NOT include commit hashes, author names or dates in entries.
    9. Do NOT add explanations or commentary outside the changelog.
    10. Do NOT wrap the output in a code block.

    Output format:

    _One-sentence summary of this release._

    ## Highlights

    - Entry here

    ## Improvements

    - Entry here

    ## Bug Fixes

    - Entry here

    Commits:
    """
).lstrip()


def build_changelog_prompt(commits: Sequence[Commit]) -> str:
    """Build the single-shot changelog prompt; empty input gives ``""``."""
    if not commits:
        return ""
    lines = [f"- {commit.subject} ({short_hash(commit.hash)})" for commit in commits]
    return _CHANGELOG_INSTRUCTIONS + "\n".join(lines) + "\n"


def build_summary_prompt(commits: Sequence[Commit]) -> str:
    """Build the prompt used to summarise one batch of commits."""
    if not commits:
        return ""
    subjects = "\n".join(f"- {commit.subject}" for commit in commits)
    return (
        "You are a changelog generator. Summarize the following git commits "
        "into clear, user-friendly changelog entries.\n\n"
        f"Commits:\n{subjects}\n\n"
        "Generate a concise changelog summary grouped by type (features, fixes, etc.)."
    )
