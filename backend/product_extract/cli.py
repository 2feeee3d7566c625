#!/usr/bin/env python3
"""
CLI for product extraction.

Usage:
    # Full extraction with strategy fallthrough
    python -m backend.product_extract.cli extract <url>

    # Same, with a local headless browser as the last strategy
    python -m backend.product_extract.cli extract <url> --browser

    # Render in a local headless browser only
    python -m backend.product_extract.cli render <url>

    # Quick title/domain preview
    python -m backend.product_extract.cli preview <url>
"""

import asyncio
import json
import sys

from backend.config import ExtractorSettings

from .extractor import ProductExtractor
from .fetchers import BrowserFetcher
from .models import ExtractedProduct


def print_product(product: ExtractedProduct):
    """Pretty print a product."""
    print(f"\n{'─'*50}")
    if product.error:
        print(f"✗ {product.error}")
        print("  Add the item manually instead.")
        print(f"{'─'*50}")
        return

    print(f"Name: {product.name or '-'}")
    print(f"Price: {product.price if product.price is not None else '-'}")
    print(f"Image: {product.image or '-'}")
    if product.specifications:
        print(f"\nSpecifications: {product.specifications}")
    print(f"{'─'*50}")


async def cmd_extract(args):
    """Extract a single product."""
    if len(args) < 1:
        print("Usage: python -m backend.product_extract.cli extract <url> [--browser] [--json]")
        return 1

    url = args[0]
    extractor = ProductExtractor.default(include_browser='--browser' in args)
    product, trace = await extractor.extract_with_trace(url)

    if '--json' in args:
        print(json.dumps(product.to_dict(), indent=2))
    else:
        print_product(product)
        for attempt in trace.to_dict()["attempts"]:
            status = "✓" if attempt["succeeded"] else "✗"
            print(f"  {status} {attempt['strategy']:<18} {attempt['error'] or ''}")

    return 0 if product.is_usable() else 1


async def cmd_render(args):
    """Render in a local browser and extract."""
    if len(args) < 1:
        print("Usage: python -m backend.product_extract.cli render <url>")
        return 1

    fetcher = BrowserFetcher(ExtractorSettings.from_config())
    product = await fetcher.fetch_and_extract(args[0])
    print_product(product)
    return 0 if product.is_usable() else 1


async def cmd_preview(args):
    """Show a URL preview."""
    if len(args) < 1:
        print("Usage: python -m backend.product_extract.cli preview <url>")
        return 1

    preview = await ProductExtractor.default().get_url_preview(args[0])
    print(json.dumps(preview.to_dict(), indent=2))
    return 0


COMMANDS = {
    'extract': cmd_extract,
    'render': cmd_render,
    'preview': cmd_preview,
}


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] not in COMMANDS:
        print(__doc__)
        return 1

    return asyncio.run(COMMANDS[argv[0]](argv[1:]))


if __name__ == "__main__":
    sys.exit(main())
