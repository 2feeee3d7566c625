#!/usr/bin/env python3
"""
Extraction Orchestrator Tests
=============================

Strategy order, short-circuiting, fault injection and URL previews.
Fetchers are mocks so call counts show exactly which strategies ran.
"""

import unittest
from unittest.mock import AsyncMock, MagicMock

from backend.config import ExtractorSettings
from backend.product_extract.errors import FetchError, InvalidUrlError
from backend.product_extract.extractor import (
    INVALID_URL, TOTAL_FAILURE, ProductExtractor, validate_url
)
from backend.product_extract.fetchers import (
    BrowserFetcher, ProxyClient, ProxySelectorFetcher, ProxyStructuredFetcher, ServerFetcher
)
from backend.product_extract.models import ExtractedProduct, FetchStrategy, UrlPreview

from .fakes import GENERIC_PRODUCT_HTML

URL = 'https://shop.example.com/products/mouse'


def mock_fetcher(strategy: FetchStrategy, result=None, error: Exception = None):
    fetcher = MagicMock()
    fetcher.strategy_type = strategy
    fetcher.fetch_and_extract = AsyncMock(return_value=result, side_effect=error)
    return fetcher


def mock_client(html=None, error=None):
    client = MagicMock(spec=ProxyClient)
    client.fetch_html = AsyncMock(return_value=html, side_effect=error)
    return client


class TestValidateUrl(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(validate_url(' https://www.amazon.com/dp/B01 '), 'https://www.amazon.com/dp/B01')
        self.assertEqual(validate_url('http://localhost:8080/item'), 'http://localhost:8080/item')

    def test_invalid(self):
        for bad in ('not a url', '', '   ', None, 'www.amazon.com/dp/B01', 'https://', 'http://[::1/x',
                    'https://shop.example.com:port/x', 'mailto:someone@example.com'):
            with self.assertRaises(InvalidUrlError, msg=repr(bad)):
                validate_url(bad)


class TestExtract(unittest.IsolatedAsyncioTestCase):

    async def test_invalid_url_makes_no_calls(self):
        fetchers = [
            mock_fetcher(FetchStrategy.SERVER),
            mock_fetcher(FetchStrategy.PROXY_STRUCTURED),
            mock_fetcher(FetchStrategy.PROXY_SELECTORS),
        ]
        client = mock_client()
        extractor = ProductExtractor(fetchers, settings=ExtractorSettings(), proxy_client=client)

        result = await extractor.extract('not a url')

        self.assertEqual(result.to_dict(), {'error': INVALID_URL})
        for fetcher in fetchers:
            fetcher.fetch_and_extract.assert_not_called()
        client.fetch_html.assert_not_called()

    async def test_first_usable_result_short_circuits(self):
        server = mock_fetcher(FetchStrategy.SERVER, ExtractedProduct(name='Wireless Mouse', price=24.99))
        structured = mock_fetcher(FetchStrategy.PROXY_STRUCTURED)
        selectors = mock_fetcher(FetchStrategy.PROXY_SELECTORS)
        extractor = ProductExtractor([server, structured, selectors], settings=ExtractorSettings())

        result = await extractor.extract(URL)

        self.assertEqual(result.to_dict(), {'name': 'Wireless Mouse', 'price': 24.99})
        server.fetch_and_extract.assert_awaited_once_with(URL)
        structured.fetch_and_extract.assert_not_called()
        selectors.fetch_and_extract.assert_not_called()

    async def test_falls_through_errors_empties_and_exceptions(self):
        server = mock_fetcher(FetchStrategy.SERVER, ExtractedProduct.failure('Server extraction unavailable'))
        structured = mock_fetcher(FetchStrategy.PROXY_STRUCTURED, ExtractedProduct(image='https://cdn/x.jpg'))
        selectors = mock_fetcher(FetchStrategy.PROXY_SELECTORS, error=RuntimeError('parser exploded'))
        browser = mock_fetcher(FetchStrategy.BROWSER, ExtractedProduct(price=19.0))
        extractor = ProductExtractor([server, structured, selectors, browser], settings=ExtractorSettings())

        result, trace = await extractor.extract_with_trace(URL)

        self.assertEqual(result.to_dict(), {'price': 19.0})
        self.assertEqual(
            [a['strategy'] for a in trace.to_dict()['attempts']],
            ['server', 'proxy_structured', 'proxy_selectors', 'browser'],
        )
        self.assertEqual(trace.attempts[2].exception, 'parser exploded')
        self.assertTrue(trace.attempts[3].succeeded)

    async def test_result_with_data_and_error_is_not_usable(self):
        server = mock_fetcher(FetchStrategy.SERVER, ExtractedProduct(name='Mouse', error='partial'))
        structured = mock_fetcher(FetchStrategy.PROXY_STRUCTURED, ExtractedProduct(name='Mouse'))
        extractor = ProductExtractor([server, structured], settings=ExtractorSettings())

        result = await extractor.extract(URL)

        self.assertEqual(result.to_dict(), {'name': 'Mouse'})
        structured.fetch_and_extract.assert_awaited_once()

    async def test_all_strategies_fail(self):
        fetchers = [
            mock_fetcher(FetchStrategy.SERVER, error=FetchError('connection refused')),
            mock_fetcher(FetchStrategy.PROXY_STRUCTURED, error=TimeoutError()),
            mock_fetcher(FetchStrategy.PROXY_SELECTORS, ExtractedProduct()),
        ]
        extractor = ProductExtractor(fetchers, settings=ExtractorSettings())

        result = await extractor.extract('https://unreachable.invalid/item')

        self.assertEqual(result.to_dict(), {'error': TOTAL_FAILURE})
        for fetcher in fetchers:
            fetcher.fetch_and_extract.assert_awaited_once()

    async def test_no_strategies(self):
        extractor = ProductExtractor([], settings=ExtractorSettings())
        result = await extractor.extract(URL)
        self.assertEqual(result.error, TOTAL_FAILURE)


class TestDefaultExtractor(unittest.IsolatedAsyncioTestCase):

    def test_strategy_order(self):
        extractor = ProductExtractor.default(ExtractorSettings())
        self.assertEqual(
            [type(f) for f in extractor.fetchers],
            [ServerFetcher, ProxyStructuredFetcher, ProxySelectorFetcher],
        )
        # Both proxy strategies share the preview client
        self.assertIs(extractor.fetchers[1].client, extractor.proxy_client)
        self.assertIs(extractor.fetchers[2].client, extractor.proxy_client)

    def test_browser_appended_last(self):
        extractor = ProductExtractor.default(ExtractorSettings(), include_browser=True)
        self.assertIsInstance(extractor.fetchers[-1], BrowserFetcher)

    async def test_generic_page_through_proxy_selectors(self):
        """Unknown domain, server down, no structured data: selectors find name + price."""
        extractor = ProductExtractor.default(ExtractorSettings())
        extractor.proxy_client.fetch_html = AsyncMock(return_value=GENERIC_PRODUCT_HTML)
        server = extractor.fetchers[0]
        server._post = AsyncMock(side_effect=FetchError('Server extraction unavailable'))

        result = await extractor.extract(URL)

        self.assertEqual(result.to_dict(), {'name': 'Wireless Mouse', 'price': 24.99})
        # No LD+JSON or OpenGraph, so the structured pass came up empty; one relay call per proxy strategy
        self.assertEqual(extractor.proxy_client.fetch_html.await_count, 2)


class TestUrlPreview(unittest.IsolatedAsyncioTestCase):

    def make_extractor(self, client):
        return ProductExtractor([], settings=ExtractorSettings(), proxy_client=client)

    async def test_title_tag(self):
        client = mock_client(GENERIC_PRODUCT_HTML)
        preview = await self.make_extractor(client).get_url_preview(URL)

        self.assertEqual(preview, UrlPreview(
            title='Wireless Mouse | Gadget Shop',
            domain='shop.example.com',
            favicon='https://www.google.com/s2/favicons?domain=shop.example.com&sz=32',
        ))

    async def test_og_title_fallback(self):
        client = mock_client('<meta property="og:title" content="Camp Stove">')
        preview = await self.make_extractor(client).get_url_preview(URL)
        self.assertEqual(preview.title, 'Camp Stove')

    async def test_unknown_title(self):
        client = mock_client('<p>nothing here</p>')
        preview = await self.make_extractor(client).get_url_preview(URL)
        self.assertEqual(preview.title, 'Unknown Product')

    async def test_failure_returns_unknown_domain(self):
        client = mock_client(error=FetchError('relay down'))
        preview = await self.make_extractor(client).get_url_preview(URL)
        self.assertEqual(preview.to_dict(), {'domain': 'Unknown'})

    async def test_invalid_url(self):
        client = mock_client()
        preview = await self.make_extractor(client).get_url_preview('nope')

        self.assertEqual(preview.to_dict(), {'domain': 'Unknown'})
        client.fetch_html.assert_not_called()


if __name__ == '__main__':
    unittest.main()
