"""HTTP client fetching the widget page markup."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class WidgetHtmlClient(Protocol):
    """Interface for loading widget markup."""

    async def fetch_html(self, path: str) -> str:
        """Return the HTML served at ``path``."""


@dataclass
class HttpxWidgetHtmlClient(WidgetHtmlClient):
    """HTTPX-backed widget markup client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxWidgetHtmlClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def fetch_html(self, path: str) -> str:
        """Fetch the page at ``path`` relative to the base URL."""
        response = await self.http_client.get(f"{self.base_url}{path}", timeout=15)
        response.raise_for_status()
        return response.text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
