"""
Version control system (VCS) integration.

This package contains the Git client used as the commit source for
changelog generation.
"""

from .git_client import Commit, GitClient, GitError  # noqa: F401
