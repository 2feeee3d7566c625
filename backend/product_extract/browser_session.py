"""
Browser Session - one disposable Playwright browser per extraction.

A rendered extraction needs a real browser, which is the most expensive
resource in the pipeline. Each session owns exactly one
playwright -> browser -> context -> page chain and tears the whole chain
down on exit, whether the extraction succeeded, raised, or was cancelled.

USAGE:
    async with BrowserSession(user_agent=ua) as page:
        await page.goto(url)
        html = await page.content()
    # Page, context, browser and playwright are all closed here
"""

from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from .logger import get_fetcher_logger

log = get_fetcher_logger('browser_session')

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)


class BrowserSession:
    """
    Isolated browser session with guaranteed release.

    acquire() launches everything and returns a fresh page; release() closes
    it all and may be called any number of times. As an async context
    manager the release always runs, including when acquire() itself fails
    halfway through a launch.

    Args:
        headless: Run browser in headless mode (default: True)
        user_agent: Desktop user agent sent with every request
    """

    def __init__(self, headless: bool = True, user_agent: str = DEFAULT_USER_AGENT):
        self.headless = headless
        self.user_agent = user_agent

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self.released = False

    async def acquire(self) -> Page:
        """Launch the browser and open one page."""
        self._playwright = await async_playwright().start()

        self._browser = await self._playwright.chromium.launch(
            headless=self.headless,
            args=[
                '--disable-blink-features=AutomationControlled',
                '--disable-dev-shm-usage',  # Prevents crashes in memory-constrained environments
                '--no-first-run',
                '--no-default-browser-check',
            ]
        )

        # Isolated context - no cookies or storage shared with other sessions
        self._context = await self._browser.new_context(
            viewport={'width': 1920, 'height': 1080},
            user_agent=self.user_agent,
        )

        self._page = await self._context.new_page()
        return self._page

    async def release(self):
        """Close page, context, browser and playwright. Safe to call repeatedly."""
        if self.released:
            return
        self.released = True

        for label, closer in (
            ('page', self._page.close if self._page else None),
            ('context', self._context.close if self._context else None),
            ('browser', self._browser.close if self._browser else None),
            ('playwright', self._playwright.stop if self._playwright else None),
        ):
            if closer is None:
                continue
            try:
                await closer()
            except Exception as e:
                # Already closed or crashed; the rest of the chain still gets closed
                log.debug(f"Closing {label} failed: {e}")

        self._page = self._context = self._browser = self._playwright = None

    async def __aenter__(self) -> Page:
        try:
            return await self.acquire()
        except BaseException:
            await self.release()
            raise

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.release()
        return False
