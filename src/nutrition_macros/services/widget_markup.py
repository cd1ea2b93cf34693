"""Widget markup served to the host as an MCP resource."""

import asyncio
import logging
from dataclasses import dataclass, field

from nutrition_macros.adapters.widget_html_client import WidgetHtmlClient

_logger = logging.getLogger(__name__)


@dataclass
class WidgetMarkupService:
    """Fetches the widget page once and serves the same markup afterwards."""

    client: WidgetHtmlClient
    path: str = "/nmacros"
    _html: str | None = field(default=None, init=False, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def get_html(self) -> str:
        """Return the widget markup, fetching it on first use."""
        if self._html is not None:
            return self._html
        async with self._lock:
            if self._html is None:
                html = await self.client.fetch_html(self.path)
                _logger.info(
                    "Fetched widget markup from %s (%s bytes)", self.path, len(html)
                )
                self._html = html
        return self._html


def wrap_html(markup: str) -> str:
    """Wrap markup in an ``<html>`` root unless it already has one."""
    head = markup.lstrip()[:15].lower()
    if head.startswith(("<!doctype", "<html")):
        return markup
    return f"<html>{markup}</html>"
