"""
Structured data extraction.

Reads schema.org Product data from <script type="application/ld+json">
blocks, falling back to OpenGraph meta tags. Does not use site profiles.
"""

import json
from typing import Any, Optional

from ..document import QueryableDocument, clean_text
from ..logger import logger
from ..models import ExtractedProduct
from ..pricing import normalize_price
from .selectors import DEFAULT_SPEC_MAX_LENGTH

LD_JSON_SELECTOR = 'script[type="application/ld+json"]'


def _is_product(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    node_type = node.get('@type')
    if isinstance(node_type, list):
        return 'Product' in node_type
    return node_type == 'Product'


def _product_node(data: Any) -> Optional[dict]:
    """Find the Product object in one parsed LD+JSON payload."""
    if isinstance(data, list):
        for item in data:
            found = _product_node(item)
            if found:
                return found
        return None

    if not isinstance(data, dict):
        return None

    if isinstance(data.get('product'), dict):
        return data['product']

    if _is_product(data):
        return data

    # Handle @graph arrays
    graph = data.get('@graph')
    if isinstance(graph, list):
        for item in graph:
            if _is_product(item):
                return item

    return None


async def find_product_ld_json(doc: QueryableDocument) -> Optional[dict]:
    """Return the first Product found across all LD+JSON blocks, in document order."""
    for raw in await doc.texts(LD_JSON_SELECTOR):
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw.strip())
        except ValueError as e:
            logger.warning(f"LD+JSON parsing failed on {doc.url}: {e}")
            continue

        product = _product_node(data)
        if product:
            return product

    return None


def _offer_price(product: dict) -> Optional[float]:
    offers = product.get('offers')
    if isinstance(offers, list):
        offers = offers[0] if offers else None

    price = None
    if isinstance(offers, dict):
        price = normalize_price(offers.get('price'))
        if price is None:
            # AggregateOffer
            price = normalize_price(offers.get('lowPrice'))

    if price is None:
        price = normalize_price(product.get('price'))
    return price


def _image_url(image: Any) -> Optional[str]:
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, dict):
        # ImageObject
        image = image.get('url') or image.get('contentUrl')
    if isinstance(image, str) and image.strip():
        return image.strip()
    return None


def _text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return clean_text(value) or None


def parse_ld_json_product(
    product: dict,
    spec_max_length: int = DEFAULT_SPEC_MAX_LENGTH,
    doc: Optional[QueryableDocument] = None,
) -> ExtractedProduct:
    """
    Map a schema.org Product object onto ExtractedProduct.

    With doc given, a relative image URL resolves against the document URL.
    """
    description = _text(product.get('description'))
    image = _image_url(product.get('image'))
    return ExtractedProduct(
        name=_text(product.get('name')),
        price=_offer_price(product),
        specifications=description[:spec_max_length] if description else None,
        image=doc.resolve_url(image) if doc is not None and image else image,
    )


async def extract_open_graph(doc: QueryableDocument, spec_max_length: int = DEFAULT_SPEC_MAX_LENGTH) -> ExtractedProduct:
    """OpenGraph carries no price, so price is always absent here."""
    title = _text(await doc.attribute('meta[property="og:title"]', 'content'))
    description = _text(await doc.attribute('meta[property="og:description"]', 'content'))
    image = await doc.attribute('meta[property="og:image"]', 'content')

    return ExtractedProduct(
        name=title,
        specifications=description[:spec_max_length] if description else None,
        image=doc.resolve_url(image) if image else None,
    )


async def extract_structured_data(
    doc: QueryableDocument,
    source_url: Optional[str] = None,
    spec_max_length: int = DEFAULT_SPEC_MAX_LENGTH,
) -> ExtractedProduct:
    """
    Extract from LD+JSON Product data, else OpenGraph.

    source_url is accepted for symmetry with extract_from_document; relative
    image URLs resolve against the document's own URL.
    """
    product = await find_product_ld_json(doc)
    if product:
        result = parse_ld_json_product(product, spec_max_length, doc)
        if result.has_data() or result.image or result.specifications:
            return result

    return await extract_open_graph(doc, spec_max_length)
