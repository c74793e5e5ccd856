"""
Git client implementation for ai_changelog.

This module reads commit history from a Git repository. It is
intentionally minimal and only implements what the changelog generator
needs: locating the repository and listing commits since a reference.
All subprocess calls go through :meth:`GitClient._run` so that unit
tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ai_changelog.grouping.commit_classifier import classify_subject


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# Field separator used in the ``git log`` pretty format.
LOG_FIELD_SEPARATOR = "|"
LOG_FORMAT = "%H|%s|%an|%at"


@dataclass(frozen=True)
class Commit:
    """A single commit as read from the log."""

    hash: str
    subject: str
    author: str
    timestamp: datetime
    prefix: str = "other"


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class CommitParseError(ValueError):
    """Raised when a ``git log`` line does not have the expected shape."""

    pass


def parse_commit_line(line: str) -> Commit:
    """Parse one ``hash|subject|author|unix-seconds`` log line.

    Raises
    ------
    CommitParseError
        If the line does not have exactly four fields or the timestamp is
        not an integer.
    """
    parts = line.split(LOG_FIELD_SEPARATOR)
    if len(parts) != 4:
        raise CommitParseError(f"invalid commit line format: {line!r}")
    commit_hash, subject, author, raw_timestamp = parts
    try:
        seconds = int(raw_timestamp)
    except ValueError as exc:
        raise CommitParseError(f"invalid timestamp {raw_timestamp!r}") from exc
    return Commit(
        hash=commit_hash,
        subject=subject,
        author=author,
        timestamp=datetime.fromtimestamp(seconds, tz=timezone.utc),
        prefix=classify_subject(subject),
    )


class GitClient:
    """Client for reading history from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If git cannot be started, or the command exits with a non-zero
            status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.error("Failed to run git: %s", exc)
            raise GitError(f"Failed to run git: {exc}") from exc

        if check and result.returncode != 0:
            logger.debug(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_commits(self, since: str = "") -> List[Commit]:
        """List commits reachable from HEAD, optionally since a reference.

        Parameters
        ----------
        since : str
            Tag, branch or commit. When non-empty only ``<since>..HEAD`` is
            read; when empty the whole history is read.

        Returns
        -------
        List[Commit]
            Commits in ``git log`` order. Malformed lines are skipped.

        Raises
        ------
        GitError
            If the git command fails.
        """
        args = ["log", f"--pretty=format:{LOG_FORMAT}"]
        if since:
            args.append(f"{since}..HEAD")
        result = self._run(args, check=True)

        commits: List[Commit] = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            try:
                commits.append(parse_commit_line(line))
            except CommitParseError as exc:
                logger.debug("Skipping malformed log line: %s", exc)
        return commits
