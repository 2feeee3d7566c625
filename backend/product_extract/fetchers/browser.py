"""
Rendered browser strategy.

Loads the page in a disposable headless browser, waits for dynamic content
to settle, then runs the shared extraction pass against the live DOM.
This is also what the /api/extract-product endpoint runs.
"""

from typing import Callable, Optional

from backend.config import ExtractorSettings

from ..browser_session import BrowserSession
from ..document import RenderedDocument
from ..errors import PageLoadError
from ..extractors import extract_product
from ..models import ExtractedProduct, FetchStrategy
from .base import BaseFetcher

NO_PRODUCT_DATA = "No product data found. Make sure you're using a product page URL."

# Bot walls the supported retailers serve in place of the product page.
# They are small pages; a real product page is far larger than this.
BOT_CHECK_MAX_LENGTH = 5000

BOT_CHECK_MARKERS = (
    'robot check',                          # amazon
    'enter the characters you see below',   # amazon
    'px-captcha',                           # walmart (PerimeterX)
    'press & hold',                         # walmart
    'access denied',                        # bestbuy, target (Akamai)
    'just a moment',                        # cloudflare
    'checking your browser',                # cloudflare
    'captcha',
)


def is_bot_check_page(html: str) -> bool:
    """True when a small page carries one of the retailer bot-wall markers."""
    if not html or len(html) > BOT_CHECK_MAX_LENGTH:
        return False
    lowered = html.lower()
    return any(marker in lowered for marker in BOT_CHECK_MARKERS)


class BrowserFetcher(BaseFetcher):
    """
    Extract from a page rendered in a headless browser.

    Args:
        settings: Timeouts, user agent and headless flag
        session_factory: Zero-arg callable returning an async context manager
            that yields a Playwright-like page (default: BrowserSession)
    """

    strategy_type = FetchStrategy.BROWSER

    def __init__(self, settings: Optional[ExtractorSettings] = None, session_factory: Optional[Callable] = None):
        super().__init__(settings)
        self.session_factory = session_factory or self._new_session

    def _new_session(self) -> BrowserSession:
        return BrowserSession(headless=self.settings.headless, user_agent=self.settings.user_agent)

    async def render(self, url: str) -> ExtractedProduct:
        """
        Render url and extract.

        Raises:
            PageLoadError: navigation failed, timed out, or hit a bot challenge

        Returns:
            The extracted product, or a failure when neither name nor price was found.
        """
        async with self.session_factory() as page:
            try:
                await page.goto(
                    url,
                    wait_until='domcontentloaded',
                    timeout=self.settings.navigation_timeout_ms,
                )
            except Exception as e:
                raise PageLoadError(f"Failed to load {url}: {e}") from e

            # Let client-side rendering fill in prices, titles, galleries
            await page.wait_for_timeout(self.settings.settle_delay_ms)

            html = await page.content()
            if is_bot_check_page(html):
                raise PageLoadError(f"Bot challenge served for {url} ({len(html)} chars)")

            doc = RenderedDocument(page)
            result = await extract_product(doc, doc.url or url, self.settings.spec_max_length)

        if not result.has_data():
            return ExtractedProduct.failure(NO_PRODUCT_DATA)

        self.log.info(f"Rendered extraction for {url}: name={result.name!r} price={result.price}")
        return result

    async def _fetch_and_extract(self, url: str) -> ExtractedProduct:
        return await self.render(url)
