"""
Product Extractor - strategy fallthrough for a single product URL.

Tries each fetch strategy in a fixed order and returns the first usable
result (no error, plus a name or a price). Never raises.
"""

from typing import List, Optional, Sequence, Tuple
from urllib.parse import urlparse

from backend.config import ExtractorSettings

from .document import SoupDocument, clean_text
from .errors import ExtractionError, InvalidUrlError
from .fetchers import (
    BaseFetcher, BrowserFetcher, ProxyClient, ProxySelectorFetcher, ProxyStructuredFetcher, ServerFetcher
)
from .logger import logger
from .models import ExtractedProduct, ExtractionTrace, StrategyAttempt, UrlPreview

INVALID_URL = "Invalid URL format"
TOTAL_FAILURE = "Unable to extract product data from this URL"

FAVICON_URL = "https://www.google.com/s2/favicons?domain={domain}&sz=32"


def validate_url(url: str) -> str:
    """
    Check url is a well-formed absolute URL.

    Raises:
        InvalidUrlError: if it is not
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrlError(INVALID_URL)
    url = url.strip()
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        parsed.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidUrlError(INVALID_URL) from e
    if not parsed.scheme or not parsed.netloc or not hostname or ' ' in hostname:
        raise InvalidUrlError(INVALID_URL)
    return url


class ProductExtractor:
    """
    Main extraction entry point.

    Usage:
        extractor = ProductExtractor.default()
        product = await extractor.extract("https://www.amazon.com/dp/B0...")
        if product.error:
            ...  # ask the user to fill the item in manually

    Args:
        fetchers: Strategies in preference order
        settings: Shared settings (also used for previews)
        proxy_client: CORS relay client used by get_url_preview()
    """

    def __init__(
        self,
        fetchers: Sequence[BaseFetcher],
        settings: Optional[ExtractorSettings] = None,
        proxy_client: Optional[ProxyClient] = None,
    ):
        self.settings = settings or ExtractorSettings.from_config()
        self.fetchers: List[BaseFetcher] = list(fetchers)
        self.proxy_client = proxy_client or ProxyClient(self.settings)

    @classmethod
    def default(cls, settings: Optional[ExtractorSettings] = None, include_browser: bool = False) -> 'ProductExtractor':
        """
        Standard strategy order: server endpoint, structured data via proxy,
        selectors via proxy. include_browser appends a local headless browser
        as the last resort.
        """
        settings = settings or ExtractorSettings.from_config()
        client = ProxyClient(settings)
        fetchers: List[BaseFetcher] = [
            ServerFetcher(settings),
            ProxyStructuredFetcher(settings, client),
            ProxySelectorFetcher(settings, client),
        ]
        if include_browser:
            fetchers.append(BrowserFetcher(settings))
        return cls(fetchers, settings=settings, proxy_client=client)

    async def extract(self, url: str) -> ExtractedProduct:
        """Extract product data from url. Always returns, never raises."""
        product, _ = await self.extract_with_trace(url)
        return product

    async def extract_with_trace(self, url: str) -> Tuple[ExtractedProduct, ExtractionTrace]:
        """Like extract(), also returning what every attempted strategy did."""
        trace = ExtractionTrace(url=url if isinstance(url, str) else repr(url))

        try:
            url = validate_url(url)
        except InvalidUrlError:
            return ExtractedProduct.failure(INVALID_URL), trace

        for fetcher in self.fetchers:
            attempt = StrategyAttempt(strategy=fetcher.strategy_type)
            trace.attempts.append(attempt)

            try:
                attempt.result = await fetcher.fetch_and_extract(url)
            except Exception as e:
                logger.warning(f"Strategy {fetcher.strategy_type.value} raised for {url}: {e!r}")
                attempt.exception = str(e) or type(e).__name__
                continue

            if attempt.succeeded:
                logger.info(f"Extracted {url} via {fetcher.strategy_type.value}")
                return attempt.result, trace

            logger.debug(
                f"Strategy {fetcher.strategy_type.value} gave no usable data for {url}: "
                f"{attempt.result.error if attempt.result else 'no result'}"
            )

        logger.warning(f"All {len(self.fetchers)} strategies failed for {url}")
        return ExtractedProduct.failure(TOTAL_FAILURE), trace

    async def get_url_preview(self, url: str) -> UrlPreview:
        """
        Quick title/domain/favicon for a URL, without the extraction pipeline.

        Returns UrlPreview(domain="Unknown") on any failure.
        """
        try:
            url = validate_url(url)
            domain = urlparse(url).hostname
            html = await self.proxy_client.fetch_html(url)
        except ExtractionError as e:
            logger.debug(f"Preview failed for {url!r}: {e}")
            return UrlPreview(domain="Unknown")

        doc = SoupDocument(html, url)
        title = (
            clean_text(await doc.text('title'))
            or clean_text(await doc.attribute('meta[property="og:title"]', 'content'))
            or 'Unknown Product'
        )

        return UrlPreview(
            title=title,
            domain=domain,
            favicon=FAVICON_URL.format(domain=domain),
        )
