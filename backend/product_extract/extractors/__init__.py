"""
Extraction passes over a QueryableDocument.
"""

from urllib.parse import urlparse

from ..document import QueryableDocument
from ..models import ExtractedProduct
from ..sites import GENERIC_PROFILE, resolve_profile
from .selectors import DEFAULT_SPEC_MAX_LENGTH, extract_from_document, extract_with_profile
from .structured import extract_structured_data, find_product_ld_json, parse_ld_json_product


async def extract_product(
    doc: QueryableDocument,
    source_url: str,
    spec_max_length: int = DEFAULT_SPEC_MAX_LENGTH,
) -> ExtractedProduct:
    """
    Full pass used on rendered pages.

    1. Site profile selectors
    2. Generic selectors, only if the site profile found neither name nor price
    3. LD+JSON Product data fills whatever is still missing
    """
    profile = resolve_profile(urlparse(source_url).hostname or '')
    result = await extract_with_profile(doc, profile, spec_max_length)

    if not result.has_data() and profile is not GENERIC_PROFILE:
        result = await extract_with_profile(doc, GENERIC_PROFILE, spec_max_length)

    if result.name is None or result.price is None:
        product = await find_product_ld_json(doc)
        if product:
            result.fill_missing(parse_ld_json_product(product, spec_max_length, doc))

    return result


__all__ = [
    'DEFAULT_SPEC_MAX_LENGTH',
    'extract_from_document',
    'extract_product',
    'extract_structured_data',
    'extract_with_profile',
]
