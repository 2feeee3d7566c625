"""
Server fetch strategy.

POSTs the URL to the extraction endpoint (which renders the page in a
headless browser) and relays its JSON answer.
"""

import asyncio

import aiohttp

from ..errors import FetchError
from ..models import ExtractedProduct, FetchStrategy
from .base import BaseFetcher


class ServerFetcher(BaseFetcher):
    """Delegate extraction to the remote /api/extract-product endpoint."""

    strategy_type = FetchStrategy.SERVER

    async def _post(self, url: str) -> dict:
        """POST {url} to the endpoint and return the decoded JSON body."""
        timeout = aiohttp.ClientTimeout(total=self.settings.request_timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.settings.endpoint_url, json={'url': url}) as response:
                    if response.status != 200:
                        raise FetchError(f"Server extraction failed: HTTP {response.status}")
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Server extraction unavailable: {e}") from e
        except ValueError as e:
            raise FetchError(f"Server returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise FetchError("Server returned an unexpected payload")
        return data

    async def _fetch_and_extract(self, url: str) -> ExtractedProduct:
        data = await self._post(url)
        result = ExtractedProduct.from_dict(data)
        self.log.debug(f"Server answered for {url}: {result.to_dict()}")
        return result
