"""
Product Extraction

Best-effort product metadata (name, price, specifications, image) from an
arbitrary e-commerce URL. Combines per-site CSS selectors, schema.org
LD+JSON and OpenGraph data across three fetch strategies.
"""

from .models import ExtractedProduct, SiteProfile, SelectorSet, UrlPreview, FetchStrategy
from .extractor import ProductExtractor, validate_url, INVALID_URL, TOTAL_FAILURE

__all__ = [
    'ExtractedProduct',
    'SiteProfile',
    'SelectorSet',
    'UrlPreview',
    'FetchStrategy',
    'ProductExtractor',
    'validate_url',
    'INVALID_URL',
    'TOTAL_FAILURE',
]
