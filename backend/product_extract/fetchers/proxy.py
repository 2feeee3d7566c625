"""
Proxied client fetch strategies.

Fetch raw HTML through a public CORS relay and parse it statically. No
scripts run, so only server-rendered markup and embedded structured data
are visible.

The relay answers GET <prefix><url-encoded target> with
{"contents": "<html...>"}. It is best-effort: any failure is a FetchError.
"""

import asyncio
from typing import Optional
from urllib.parse import quote

import aiohttp

from backend.config import ExtractorSettings

from ..document import SoupDocument
from ..errors import FetchError
from ..extractors import extract_from_document, extract_structured_data
from ..models import ExtractedProduct, FetchStrategy
from .base import BaseFetcher


class ProxyClient:
    """Fetches page HTML through the CORS relay."""

    def __init__(self, settings: Optional[ExtractorSettings] = None):
        self.settings = settings or ExtractorSettings.from_config()

    def relay_url(self, url: str) -> str:
        return f"{self.settings.cors_proxy_url}{quote(url, safe='')}"

    async def fetch_html(self, url: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.settings.request_timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.relay_url(url)) as response:
                    if response.status != 200:
                        raise FetchError(f"Proxy returned HTTP {response.status}")
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Failed to fetch page content: {e}") from e
        except ValueError as e:
            raise FetchError(f"Proxy returned invalid JSON: {e}") from e

        contents = data.get('contents') if isinstance(data, dict) else None
        if not isinstance(contents, str) or not contents.strip():
            raise FetchError("Proxy returned no page content")
        return contents


class ProxyFetcher(BaseFetcher):
    """Shared fetch + parse for the proxied strategies."""

    def __init__(self, settings: Optional[ExtractorSettings] = None, client: Optional[ProxyClient] = None):
        super().__init__(settings)
        self.client = client or ProxyClient(self.settings)

    async def load_document(self, url: str) -> SoupDocument:
        html = await self.client.fetch_html(url)
        return SoupDocument(html, url)


class ProxyStructuredFetcher(ProxyFetcher):
    """LD+JSON / OpenGraph extraction over the relayed HTML."""

    strategy_type = FetchStrategy.PROXY_STRUCTURED

    async def _fetch_and_extract(self, url: str) -> ExtractedProduct:
        doc = await self.load_document(url)
        return await extract_structured_data(doc, url, self.settings.spec_max_length)


class ProxySelectorFetcher(ProxyFetcher):
    """Site-profile selector extraction over the relayed HTML."""

    strategy_type = FetchStrategy.PROXY_SELECTORS

    async def _fetch_and_extract(self, url: str) -> ExtractedProduct:
        doc = await self.load_document(url)
        return await extract_from_document(doc, url, self.settings.spec_max_length)
