"""
Base class for fetch strategies.

A fetcher gets page content one way (remote endpoint, CORS relay, local
browser) and runs the shared extractors over it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from backend.config import ExtractorSettings

from ..errors import ExtractionError
from ..logger import get_fetcher_logger
from ..models import ExtractedProduct, FetchStrategy


class BaseFetcher(ABC):
    """Base class for fetch strategies."""

    strategy_type: FetchStrategy

    def __init__(self, settings: Optional[ExtractorSettings] = None):
        self.settings = settings or ExtractorSettings.from_config()
        self.log = get_fetcher_logger(self.strategy_type.value)

    async def fetch_and_extract(self, url: str) -> ExtractedProduct:
        """
        Fetch url and extract product data.

        Known pipeline failures come back as ExtractedProduct.failure();
        anything unexpected propagates for the orchestrator to handle.
        """
        try:
            return await self._fetch_and_extract(url)
        except ExtractionError as e:
            self.log.warning(f"{self.strategy_type.value} failed for {url}: {e}")
            return ExtractedProduct.failure(str(e))

    @abstractmethod
    async def _fetch_and_extract(self, url: str) -> ExtractedProduct:
        """Do the actual work. May raise ExtractionError subclasses."""
