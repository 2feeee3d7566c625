"""
Queryable documents.

The selector walk and structured-data parsing run against this small
interface, so the same code works on:

    - SoupDocument: static HTML parsed with BeautifulSoup (proxy fetches)
    - RenderedDocument: a live Playwright page after JS has run (browser fetch)

Every query returns None / [] when nothing matches. Bad selectors are
logged and treated as "no match".
"""

import re
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError, Page

from .logger import logger


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace runs and trim."""
    if not text:
        return ''
    return re.sub(r'\s+', ' ', text).strip()


class QueryableDocument(ABC):
    """Read-only view of a page for selector queries."""

    url: str

    @abstractmethod
    async def text(self, selector: str) -> Optional[str]:
        """Text content of the first element matching selector."""

    @abstractmethod
    async def texts(self, selector: str) -> List[str]:
        """Raw text content of every element matching selector, in document order."""

    @abstractmethod
    async def attribute(self, selector: str, name: str) -> Optional[str]:
        """Attribute value of the first element matching selector."""

    @abstractmethod
    async def image_src(self, selector: str) -> Optional[str]:
        """Absolute image URL of the first element matching selector."""

    def resolve_url(self, src: Optional[str]) -> Optional[str]:
        src = (src or '').strip()
        if not src or src.startswith('data:'):
            return None
        return urljoin(self.url, src)


class SoupDocument(QueryableDocument):
    """Static HTML document. No scripts run, so only server-rendered markup is visible."""

    def __init__(self, html: str, url: str):
        self.url = url
        self.soup = BeautifulSoup(html or '', 'html.parser')

    def _select_one(self, selector: str):
        try:
            return self.soup.select_one(selector)
        except Exception as e:
            logger.debug(f"Selector {selector!r} failed: {e}")
            return None

    async def text(self, selector: str) -> Optional[str]:
        element = self._select_one(selector)
        if element is None:
            return None
        return element.get_text()

    async def texts(self, selector: str) -> List[str]:
        try:
            elements = self.soup.select(selector)
        except Exception as e:
            logger.debug(f"Selector {selector!r} failed: {e}")
            return []
        # <script> bodies are only reliably exposed through .string
        return [el.string if el.string is not None else el.get_text() for el in elements]

    async def attribute(self, selector: str, name: str) -> Optional[str]:
        element = self._select_one(selector)
        if element is None:
            return None
        value = element.get(name)
        if isinstance(value, list):
            value = ' '.join(value)
        return value

    async def image_src(self, selector: str) -> Optional[str]:
        element = self._select_one(selector)
        if element is None:
            return None
        return self.resolve_url(element.get('src') or element.get('data-src'))


class RenderedDocument(QueryableDocument):
    """Live DOM of a Playwright page."""

    def __init__(self, page: Page):
        self.page = page
        self.url = page.url

    async def _query(self, selector: str):
        try:
            return await self.page.query_selector(selector)
        except PlaywrightError as e:
            logger.debug(f"Selector {selector!r} failed: {e}")
            return None

    async def text(self, selector: str) -> Optional[str]:
        element = await self._query(selector)
        if element is None:
            return None
        return await element.text_content()

    async def texts(self, selector: str) -> List[str]:
        try:
            elements = await self.page.query_selector_all(selector)
        except PlaywrightError as e:
            logger.debug(f"Selector {selector!r} failed: {e}")
            return []
        results = []
        for element in elements:
            results.append(await element.text_content() or '')
        return results

    async def attribute(self, selector: str, name: str) -> Optional[str]:
        element = await self._query(selector)
        if element is None:
            return None
        return await element.get_attribute(name)

    async def image_src(self, selector: str) -> Optional[str]:
        element = await self._query(selector)
        if element is None:
            return None
        src = await element.evaluate(
            "e => e.currentSrc || e.src || e.getAttribute('data-src') || ''"
        )
        return self.resolve_url(src)
