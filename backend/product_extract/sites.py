"""
Site profiles: per-retailer selector lists.

Profiles are matched against the page hostname by substring, in
registration order. Unknown sites get GENERIC_PROFILE.

Run: python -m backend.product_extract.sites <url>
to see which profile a URL resolves to.
"""

from typing import Iterable, Optional
from urllib.parse import urlparse

from .models import SelectorSet, SiteProfile
from .pricing import digits_only_price_processor


SITE_PROFILES = (
    SiteProfile(
        key='amazon',
        domains=('amazon.com', 'amazon.ca', 'amazon.co.uk', 'amazon.de'),
        selectors=SelectorSet(
            name=('#productTitle', '.product-title', '[data-testid="product-title"]'),
            price=('.a-price-whole', '.a-price .a-offscreen', '.a-price-range'),
            specs=('#feature-bullets ul', '.a-unordered-list.a-nostyle', '#productDetails_techSpec_section_1'),
            image=('#landingImage', '.a-dynamic-image', '#imgTagWrapperId img'),
        ),
        price_processor=digits_only_price_processor,
    ),
    SiteProfile(
        key='bestbuy',
        domains=('bestbuy.com', 'bestbuy.ca'),
        selectors=SelectorSet(
            name=('.sku-title h1', '.product-title', '[data-testid="product-title"]'),
            price=('.pricing-price__range', '.sr-only', '[data-testid="customer-price"]'),
            specs=('.product-details', '.specifications-tab'),
            image=('.primary-image img', '.product-image img'),
        ),
    ),
    SiteProfile(
        key='ebay',
        domains=('ebay.com',),
        selectors=SelectorSet(
            name=('.x-item-title-text', '.it-ttl', 'h1[id="x-title-text-text"]'),
            price=('.notranslate', '.u-flL.condText', '[data-testid="clipped-price"]'),
            specs=('.product-details', '.itemAttr'),
            image=('#icImg', '.imageContainer img'),
        ),
    ),
    SiteProfile(
        key='walmart',
        domains=('walmart.com',),
        selectors=SelectorSet(
            name=('[data-automation-id="product-title"]', 'h1', '.prod-ProductTitle'),
            price=('[data-automation-id="product-price"]', '.price-current', '[data-testid="price-current"]'),
            specs=('.product-details', '.specifications'),
            image=('.prod-hero-image img', '.product-image img'),
        ),
    ),
    SiteProfile(
        key='target',
        domains=('target.com',),
        selectors=SelectorSet(
            name=('[data-test="product-title"]', 'h1', '.ProductTitle'),
            price=('[data-test="product-price"]', '.Price', '[data-testid="price"]'),
            specs=('.product-details', '.ItemDetails'),
            image=('.ProductImages img', '.hero-image img'),
        ),
    ),
    SiteProfile(
        key='newegg',
        domains=('newegg.com',),
        selectors=SelectorSet(
            name=('.product-title', 'h1', '[data-testid="product-title"]'),
            price=('.price-current', '.product-price', '[data-testid="price"]'),
            specs=('.product-bullets', '.spec-table'),
            image=('.product-view-img img', '.main-image img'),
        ),
    ),
)


# Fallback for sites without a profile
GENERIC_PROFILE = SiteProfile(
    key='generic',
    domains=(),
    selectors=SelectorSet(
        name=(
            'h1', '[class*="title"]', '[class*="product-title"]', '[class*="name"]',
            '[id*="title"]', '[data-testid*="title"]', '.product-name',
        ),
        price=(
            '[class*="price"]', '[id*="price"]', '[data-testid*="price"]',
            '.cost', '.amount', '[class*="cost"]', '[class*="amount"]',
        ),
        specs=(
            '[class*="spec"]', '[class*="detail"]', '[class*="description"]',
            '[class*="feature"]', '.product-info', '[class*="product-info"]',
        ),
        image=(
            '[class*="product-image"] img', '[class*="main-image"] img',
            '[class*="hero-image"] img', '.product img', '[data-testid*="image"] img',
        ),
    ),
)


def resolve_profile(hostname: str, profiles: Optional[Iterable[SiteProfile]] = None) -> SiteProfile:
    """Return the first registered profile matching hostname, else GENERIC_PROFILE."""
    hostname = (hostname or '').lower()
    for profile in (SITE_PROFILES if profiles is None else profiles):
        if profile.matches(hostname):
            return profile
    return GENERIC_PROFILE


def profile_for_url(url: str) -> SiteProfile:
    return resolve_profile(urlparse(url).hostname or '')


if __name__ == "__main__":
    import sys

    for arg in sys.argv[1:]:
        print(f"{arg:<60} -> {profile_for_url(arg).key}")
