"""
Resolve input sources (files, stdin, URLs, the sample document) into JSON text.
"""
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple
import requests
from tqdm import tqdm
from sources.http_client import HttpJsonClient
import config

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"


class InputLoadError(Exception):
    """Raised when an input source cannot be read."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Cannot read {source}: {reason}")
        self.source = source
        self.reason = reason


def sample_text() -> str:
    """The sample document as pretty-printed JSON text."""
    return json.dumps(config.SAMPLE_JSON, indent=2)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class InputLoader:
    """Loads raw JSON text from named sources."""

    def __init__(self, client: Optional[HttpJsonClient] = None):
        """
        Initialize input loader.

        Args:
            client: HTTP client for URL sources, created on first use if omitted
        """
        self._client = client

    @property
    def client(self) -> HttpJsonClient:
        if self._client is None:
            self._client = HttpJsonClient()
        return self._client

    def load(self, source: str) -> str:
        """
        Read the raw text of a source.

        Args:
            source: "-" for stdin, "sample:" for the sample document,
                an http(s) URL, or a file path

        Returns:
            Raw text

        Raises:
            InputLoadError: If the source cannot be read
        """
        if source == STDIN_SOURCE:
            return sys.stdin.read()
        if source == config.SAMPLE_SOURCE:
            return sample_text()
        if is_url(source):
            try:
                return self.client.fetch_text(source)
            except (requests.exceptions.RequestException, ValueError) as e:
                raise InputLoadError(source, str(e)) from e
        try:
            return Path(source).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise InputLoadError(source, str(e)) from e

    def iter_sources(
        self,
        sources: Iterable[str],
        show_progress: bool = True
    ) -> Iterator[Tuple[str, Optional[str]]]:
        """
        Load sources one by one.

        Unreadable sources are logged and yielded with None text, so one
        bad source does not stop the rest.

        Yields:
            (source, text) pairs
        """
        sources = list(sources)
        with tqdm(total=len(sources), desc="Converting", unit="docs", disable=not show_progress) as pbar:
            for source in sources:
                try:
                    text = self.load(source)
                except InputLoadError as e:
                    logger.error(str(e))
                    text = None
                pbar.update(1)
                yield source, text
