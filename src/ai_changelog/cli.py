"""
Command line interface for the ai_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``ai-changelog`` command. It wires together
configuration loading, the Git commit source, the optional Ollama
client, and the changelog generator, and maps fatal errors to exit
codes. The changelog itself is the only thing written to stdout unless
``--output`` is given; diagnostics go to stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click

from ai_changelog import __version__
from ai_changelog.config.loader import ConfigError, default_config, load_config
from ai_changelog.generator import (
    ChangelogError,
    CommitSourceError,
    GenerateDeps,
    GenerateOptions,
    OutputError,
    run_generate,
    write_to_file,
)
from ai_changelog.llm.ollama_client import OllamaClient
from ai_changelog.rendering.renderer import FORMAT_MARKDOWN, FORMATS
from ai_changelog.vcs.git_client import GitClient

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_VCS_FAILURE = 3
EXIT_OUTPUT_FAILURE = 4


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    """Print a warning message on stderr."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ Warning: {message}", err=True)


def print_error(message: str, indent: int = 0):
    """Print an error message on stderr."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def resolve_config() -> Dict[str, Any]:
    """Load the Ollama config, degrading to defaults on a bad file."""
    try:
        return load_config()
    except ConfigError as exc:
        print_warning(f"Configuration error: {exc} (using defaults)")
        return default_config()


def build_ollama_client(config: Dict[str, Any]) -> OllamaClient:
    return OllamaClient(
        base_url=config["base_url"],
        port=config["port"],
        request_timeout=float(config["request_timeout"]),
        changelog_timeout=float(config["changelog_timeout"]),
        max_tokens=config.get("max_tokens"),
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-o", "--output", default="", help="Write the changelog to this file instead of stdout.")
@click.option("-s", "--since", default="", help="Only include commits after this tag, branch or commit.")
@click.option("-m", "--model", default=None, help="Ollama model to use (default: from config, else llama3.2).")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(FORMATS),
    default=FORMAT_MARKDOWN,
    show_default=True,
    help="Output format of the structured changelog.",
)
@click.option("-V", "--version", "version_label", default="", help="Version label for the changelog header.")
@click.option("--no-ai", is_flag=True, help="Skip the language model and render the structured changelog.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(__version__, "--tool-version", prog_name="ai-changelog")
def main(
    output: str,
    since: str,
    model: Optional[str],
    output_format: str,
    version_label: str,
    no_ai: bool,
    verbose: bool,
) -> None:
    """Generate changelogs from git commits using AI.

    Commits are summarised by a local Ollama model when one is running;
    otherwise they are grouped by Conventional Commit type.
    """
    # Use force=True to ensure handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        config = resolve_config()
        cwd = Path.cwd()
        repo_root = GitClient.find_repo_root(cwd) or cwd
        logger.debug("Reading commits from %s", repo_root)

        deps = GenerateDeps(
            commit_reader=GitClient(repo_root),
            ollama_client=None if no_ai else build_ollama_client(config),
        )
        options = GenerateOptions(
            format=output_format,
            since=since,
            model=model or config["model"],
            version=version_label,
        )

        if output:
            write_to_file(deps, options, output, warn=print_warning)
            print_success(f"Changelog written to {output}")
        else:
            run_generate(deps, options, sys.stdout, warn=print_warning)

    except CommitSourceError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_VCS_FAILURE)
    except OutputError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_OUTPUT_FAILURE)
    except ChangelogError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
