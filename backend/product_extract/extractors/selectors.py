"""
CSS selector extraction.

Walks a site profile's ordered selector lists against a document and keeps
the first non-empty match per field.
"""

from typing import Callable, Iterable, Optional
from urllib.parse import urlparse

from ..document import QueryableDocument, clean_text
from ..models import ExtractedProduct, SiteProfile
from ..pricing import default_price_processor
from ..sites import resolve_profile

DEFAULT_SPEC_MAX_LENGTH = 300


async def first_text(doc: QueryableDocument, selectors: Iterable[str]) -> Optional[str]:
    """First non-empty trimmed text over selectors, else None."""
    for selector in selectors:
        text = clean_text(await doc.text(selector))
        if text:
            return text
    return None


async def first_price(
    doc: QueryableDocument,
    selectors: Iterable[str],
    processor: Callable[[str], float],
) -> Optional[float]:
    """
    First positive price over selectors, else None.

    A selector whose text parses to 0 does not stop the walk.
    """
    for selector in selectors:
        text = clean_text(await doc.text(selector))
        if not text:
            continue
        price = processor(text)
        if price and price > 0:
            return price
    return None


async def first_image(doc: QueryableDocument, selectors: Iterable[str]) -> Optional[str]:
    for selector in selectors:
        src = await doc.image_src(selector)
        if src:
            return src
    return None


async def extract_with_profile(
    doc: QueryableDocument,
    profile: SiteProfile,
    spec_max_length: int = DEFAULT_SPEC_MAX_LENGTH,
) -> ExtractedProduct:
    selectors = profile.selectors
    processor = profile.price_processor or default_price_processor

    specifications = None
    if selectors.specs:
        specs = await first_text(doc, selectors.specs)
        if specs:
            specifications = specs[:spec_max_length]

    image = None
    if selectors.image:
        image = await first_image(doc, selectors.image)

    return ExtractedProduct(
        name=await first_text(doc, selectors.name),
        price=await first_price(doc, selectors.price, processor),
        specifications=specifications,
        image=image,
    )


async def extract_from_document(
    doc: QueryableDocument,
    source_url: str,
    spec_max_length: int = DEFAULT_SPEC_MAX_LENGTH,
) -> ExtractedProduct:
    """Extract using the profile registered for source_url's host (or the generic one)."""
    hostname = urlparse(source_url).hostname or ''
    profile = resolve_profile(hostname)
    return await extract_with_profile(doc, profile, spec_max_length)
