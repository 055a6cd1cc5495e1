"""
HTTP document source.

Fetches raw markdown files relative to a base URL, e.g. a raw GitHub
docs directory:

    https://raw.githubusercontent.com/<owner>/<repo>/main/docs/globals.md
    https://raw.githubusercontent.com/<owner>/<repo>/main/docs/classes.md

There is no retry here; a failed request fails the whole run and the
caller decides whether to run it again.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence

import requests

from .base import Document, DocumentSource, DocumentSourceError, role_for_path

logger = logging.getLogger(__name__)

DEFAULT_PATHS = ("globals.md", "classes.md")
DEFAULT_TIMEOUT = 30.0


class HttpDocumentSource(DocumentSource):
    """Fetch documentation files over HTTP(S)."""

    def __init__(
        self,
        base_url: str,
        paths: Sequence[str] = DEFAULT_PATHS,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize HTTP source.

        Args:
            base_url: URL of the docs directory
            paths: File paths relative to base_url, in parse order
            timeout: Per-request timeout in seconds
            session: Optional requests session (defaults to a new one)
        """
        if not paths:
            raise ValueError("At least one document path is required")

        self.base_url = base_url.rstrip("/")
        self.paths = list(paths)
        self.timeout = timeout
        self.session = session or requests.Session()

    def describe(self) -> str:
        return self.base_url

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def fetch(self, path: str) -> str:
        """Fetch one document.

        Raises:
            DocumentSourceError: On network errors or HTTP error status
        """
        url = self._url(path)
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DocumentSourceError(f"Failed to fetch {url}: {exc}") from exc

        return response.text

    def documents(self) -> Iterator[Document]:
        for path in self.paths:
            yield Document(role_for_path(path), path, self.fetch(path))
