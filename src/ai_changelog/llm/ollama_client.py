"""
Client for interacting with an Ollama LLM server.

This client wraps HTTP requests to the Ollama REST API: a health probe
against the server root and text generation via ``/api/generate``. On
error conditions (HTTP errors, timeouts, malformed responses) a
:class:`LLMError` is raised. :meth:`OllamaClient.summarize_commits` is
the exception: it degrades failed batches to raw commit subjects and
never raises.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

import requests

from ai_changelog.llm.prompts import build_changelog_prompt, build_summary_prompt

if TYPE_CHECKING:  # pragma: no cover
    from ai_changelog.vcs.git_client import Commit


logger = logging.getLogger(__name__)
# Attach a null handler to avoid errors when the root logger is missing a
# stream. Messages will still propagate to the root logger if configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

DEFAULT_BASE_URL = "http://localhost"
DEFAULT_PORT = 11434
DEFAULT_MODEL = "llama3.2"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_CHANGELOG_TIMEOUT = 120.0
SUMMARY_BATCH_SIZE = 10

_THINKING_TAGS = re.compile(
    r"<(think|thinking|thought|reasoning)>.*?</\1>\s*",
    flags=re.DOTALL | re.IGNORECASE,
)


class LLMError(Exception):
    """Raised when communication with the LLM server fails."""

    pass


def strip_thinking_tags(text: str) -> str:
    """Remove reasoning blocks such as ``<think>...</think>`` from a response.

    Whitespace directly after a block goes with it; the rest of the text is
    left untouched.

    >>> strip_thinking_tags("<think>hmm</think>\\n\\n## Highlights\\n")
    '## Highlights\\n'
    """
    return _THINKING_TAGS.sub("", text)


@dataclass
class OllamaClient:
    """Client for interacting with an Ollama server.

    Parameters
    ----------
    base_url : str
        Base URL of the Ollama server, e.g. ``"http://localhost"``.
    port : int
        Port number of the Ollama server, e.g. ``11434``.
    request_timeout : float, optional
        Timeout in seconds for the health probe and batch summaries.
    changelog_timeout : float, optional
        Timeout in seconds for single-shot changelog generation, which is
        much slower than a probe.
    max_tokens : int, optional
        Maximum number of tokens to generate. If provided, passed via
        the ``options`` payload.
    """

    base_url: str = DEFAULT_BASE_URL
    port: int = DEFAULT_PORT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    changelog_timeout: float = DEFAULT_CHANGELOG_TIMEOUT
    max_tokens: Optional[int] = None

    def _server_url(self) -> str:
        return f"{self.base_url}:{self.port}"

    def _endpoint(self) -> str:
        return f"{self._server_url()}/api/generate"

    def health_check(self) -> None:
        """Check that the server answers on its root URL.

        Raises
        ------
        LLMError
            If the server is unreachable or answers with a non-200 status.
        """
        url = self._server_url()
        try:
            response = requests.get(url, timeout=self.request_timeout)
        # an invalid timeout surfaces as ValueError from urllib3
        except (requests.RequestException, ValueError) as exc:
            logger.debug("Ollama health check failed: %s", exc)
            raise LLMError(f"ollama not reachable: {exc}") from exc
        if response.status_code != 200:
            raise LLMError(f"ollama returned status {response.status_code}")

    def generate(self, prompt: str, model: str, timeout: Optional[float] = None) -> str:
        """Generate a completion from the model.

        Parameters
        ----------
        prompt : str
            The prompt to send to the model.
        model : str
            Name of the model, e.g. ``"llama3.2"``.
        timeout : float, optional
            Overrides :attr:`request_timeout` for this call.

        Returns
        -------
        str
            The generated response text with reasoning tags removed.

        Raises
        ------
        LLMError
            If the request fails or the server returns an error.
        """
        payload: Dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "stream": False,
        }
        if self.max_tokens is not None:
            payload["options"] = {"num_predict": self.max_tokens}
        url = self._endpoint()
        logger.debug("Sending request to LLM at %s for model %s", url, model)
        try:
            response = requests.post(
                url,
                json=payload,
                timeout=timeout if timeout is not None else self.request_timeout,
            )
        except (requests.RequestException, ValueError) as exc:
            logger.debug("Failed to connect to LLM: %s", exc)
            raise LLMError(f"generate request failed: {exc}") from exc
        if response.status_code != 200:
            logger.debug(
                "LLM returned non-200 status %s: %s", response.status_code, response.text
            )
            raise LLMError(f"ollama returned status {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise LLMError("failed to decode response") from exc
        if not isinstance(data, dict) or not isinstance(data.get("response"), str):
            raise LLMError("Unexpected response structure from LLM")
        return strip_thinking_tags(data["response"])

    def generate_changelog(self, commits: Sequence[Commit], model: str) -> str:
        """Ask the model for a complete changelog of ``commits``.

        Returns ``""`` for an empty commit list without contacting the
        server.

        Raises
        ------
        LLMError
            If the request fails.
        """
        if not commits:
            return ""
        prompt = build_changelog_prompt(commits)
        return self.generate(prompt, model, timeout=self.changelog_timeout)

    def summarize_commits(self, commits: Sequence[Commit], model: str) -> List[str]:
        """Summarise commits in batches of :data:`SUMMARY_BATCH_SIZE`.

        Each successful batch contributes one summary string. A failed batch
        contributes the raw subject of each of its commits instead, so the
        result length is ``successful batches + commits in failed batches``.
        """
        summaries: List[str] = []
        for start in range(0, len(commits), SUMMARY_BATCH_SIZE):
            batch = commits[start:start + SUMMARY_BATCH_SIZE]
            try:
                summaries.append(self.generate(build_summary_prompt(batch), model))
            except LLMError as exc:
                logger.warning(
                    "LLM failed to summarise commits %d-%d: %s; using raw subjects.",
                    start + 1,
                    start + len(batch),
                    exc,
                )
                summaries.extend(commit.subject for commit in batch)
        return summaries
