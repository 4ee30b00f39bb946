"""
Document sources for the scraping pipeline.

Provides markdown for a source URL, either from a remote
Firecrawl-style scrape service (built on httpx) or from local files.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


DEFAULT_API_URL = "https://api.firecrawl.dev"


class FetchError(Exception):
    """Raised when a source document could not be fetched."""


class DocumentSource(ABC):
    """
    Abstract provider of markdown documents.

    Implementations return the markdown for a URL, or None when the
    page has no content.
    """

    async def __aenter__(self) -> "DocumentSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    @abstractmethod
    async def fetch(self, url: str) -> Optional[str]:
        """
        Fetch markdown for a source URL.

        Args:
            url: Source page URL

        Returns:
            Markdown text or None

        Raises:
            FetchError: If the document could not be retrieved
        """
        pass


class ScrapeServiceClient(DocumentSource):
    """
    Async client for a markdown scrape service.

    Usage:
        async with ScrapeServiceClient(api_key="fc-...") as client:
            markdown = await client.fetch("https://dst.gov.in/call-for-proposals")
    """

    def __init__(
        self,
        api_key: str = "",
        api_url: str = DEFAULT_API_URL,
        timeout_ms: int = 15000,
        only_main_content: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize scrape client.

        Args:
            api_key: Bearer token for the service
            api_url: Service base URL
            timeout_ms: Page render timeout passed to the service
            only_main_content: Strip navigation/footer on the service side
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self.only_main_content = only_main_content
        self._transport = transport

        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ScrapeServiceClient":
        """Enter async context."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        # Client timeout is a little longer than the render timeout
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=httpx.Timeout(self.timeout_ms / 1000 + 5),
            headers=headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> Optional[str]:
        """Scrape a page and return its markdown."""
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        payload = {
            "url": url,
            "formats": ["markdown"],
            "onlyMainContent": self.only_main_content,
            "timeout": self.timeout_ms,
        }

        logger.debug("scrape_request", url=url)

        response = await self._client.post("/v1/scrape", json=payload)
        response.raise_for_status()

        try:
            body = response.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from scrape service for {url}") from e

        if not body.get("success", False):
            raise FetchError(body.get("error") or f"Scrape failed for {url}")

        data = body.get("data") or {}
        return data.get("markdown") or body.get("markdown")


class LocalDocumentSource(DocumentSource):
    """
    Serve markdown from files on disk, keyed by source URL.

    Used for offline runs and tests.
    """

    def __init__(self, documents: dict[str, str]):
        """
        Initialize local source.

        Args:
            documents: Mapping of source URL -> markdown file path
        """
        self.documents = {url: Path(path) for url, path in documents.items()}

    @property
    def urls(self) -> list[str]:
        return list(self.documents)

    async def fetch(self, url: str) -> Optional[str]:
        """Read markdown for a URL from its mapped file."""
        path = self.documents.get(url)
        if path is None:
            raise FetchError(f"No local document for {url}")

        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise FetchError(f"Cannot read {path}: {e}") from e
