"""
Changelog generation pipeline.

:func:`generate_changelog` reads commits from a commit source and turns
them into a changelog. When an Ollama client is configured it first
asks the language model for a polished changelog; any failure on that
path (server down, request error, blank answer) is reported as a
warning and the deterministic pipeline runs instead:

    sort_by_date -> group_by_category -> renderer.render

Only a failure to read commits, or to write the output file, is fatal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, TextIO

import click

from ai_changelog.grouping.grouper import group_by_category, sort_by_date
from ai_changelog.llm.ollama_client import DEFAULT_MODEL, LLMError, OllamaClient
from ai_changelog.rendering.renderer import FORMAT_MARKDOWN, get_renderer
from ai_changelog.vcs.git_client import GitError

if TYPE_CHECKING:  # pragma: no cover
    from ai_changelog.vcs.git_client import Commit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

NO_COMMITS_MESSAGE = "No commits found."
OLLAMA_DOWN_MESSAGE = "Ollama is not running. Start it with: ollama serve"

WarnFunc = Callable[[str], None]


class ChangelogError(Exception):
    """Base class for fatal changelog generation errors."""

    pass


class CommitSourceError(ChangelogError):
    """Raised when commits cannot be read from the repository."""

    pass


class OutputError(ChangelogError):
    """Raised when the changelog cannot be written to its destination."""

    pass


@dataclass
class GenerateDeps:
    """Collaborators of the pipeline.

    ``commit_reader`` is anything with a ``get_commits(since)`` method,
    typically a :class:`~ai_changelog.vcs.git_client.GitClient`.
    ``ollama_client`` may be ``None`` to skip the AI path entirely.
    """

    commit_reader: object
    ollama_client: Optional[OllamaClient] = None


@dataclass
class GenerateOptions:
    format: str = FORMAT_MARKDOWN
    since: str = ""
    model: str = DEFAULT_MODEL
    version: str = ""


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of the AI path: either generated text or a failure reason."""

    text: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.text is not None


def _stderr_warning(message: str) -> None:
    click.echo(f"⚠ Warning: {message}", err=True)


def check_ollama_health(client: OllamaClient) -> Optional[str]:
    """Return ``None`` when Ollama answers, else a user-facing message."""
    try:
        client.health_check()
    except LLMError as exc:
        logger.debug("Health check failed: %s", exc)
        return OLLAMA_DOWN_MESSAGE
    return None


def attempt_ai_changelog(client: OllamaClient, commits: Sequence[Commit], model: str) -> AttemptResult:
    """Probe the server and ask it for a changelog.

    Never raises; every failure is folded into ``AttemptResult.reason``.
    """
    down = check_ollama_health(client)
    if down is not None:
        return AttemptResult(reason=f"{down} (using structured output)")
    try:
        text = client.generate_changelog(commits, model)
    except LLMError as exc:
        return AttemptResult(
            reason=f"LLM generation failed ({exc}), falling back to structured output"
        )
    if not text or not text.strip():
        return AttemptResult(reason="LLM returned an empty changelog, falling back to structured output")
    return AttemptResult(text=text)


def render_structured(commits: Sequence[Commit], output_format: str, version: str = "") -> str:
    """Render commits with the deterministic sort/group/render pipeline."""
    sections = group_by_category(sort_by_date(commits))
    return get_renderer(output_format).render(sections, version)


def _read_commits(commit_reader: object, since: str) -> List[Commit]:
    try:
        return list(commit_reader.get_commits(since))  # type: ignore[attr-defined]
    except GitError as exc:
        raise CommitSourceError(f"failed to get commits: {exc}") from exc


def generate_changelog(
    deps: GenerateDeps,
    options: GenerateOptions,
    warn: Optional[WarnFunc] = None,
) -> str:
    """Produce the changelog text.

    Parameters
    ----------
    deps : GenerateDeps
        Commit reader and optional Ollama client.
    options : GenerateOptions
        Output format, ``since`` reference, model and version label.
    warn : callable, optional
        Receives non-fatal diagnostics. Defaults to printing on stderr.

    Returns
    -------
    str
        The complete changelog, or ``"No commits found.\\n"``.

    Raises
    ------
    CommitSourceError
        If commits cannot be read.
    """
    warn = warn or _stderr_warning
    commits = _read_commits(deps.commit_reader, options.since)
    logger.debug("Read %d commit(s) since %r", len(commits), options.since)

    if not commits:
        return f"{NO_COMMITS_MESSAGE}\n"

    if deps.ollama_client is not None:
        attempt = attempt_ai_changelog(deps.ollama_client, commits, options.model)
        if attempt.ok:
            if options.version:
                return f"# {options.version}\n\n{attempt.text}"
            return attempt.text  # type: ignore[return-value]
        warn(attempt.reason or "LLM generation failed")

    return render_structured(commits, options.format, options.version)


def run_generate(
    deps: GenerateDeps,
    options: GenerateOptions,
    writer: TextIO,
    warn: Optional[WarnFunc] = None,
) -> None:
    """Generate the changelog and write it to ``writer``."""
    writer.write(generate_changelog(deps, options, warn))


def write_to_file(
    deps: GenerateDeps,
    options: GenerateOptions,
    path: str,
    warn: Optional[WarnFunc] = None,
) -> None:
    """Generate the changelog and write it to ``path``.

    Raises
    ------
    CommitSourceError
        If commits cannot be read; the file is left untouched.
    OutputError
        If the file cannot be created or written.
    """
    output = generate_changelog(deps, options, warn)
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(output)
    except OSError as exc:
        raise OutputError(f"failed to create output file: {exc}") from exc
