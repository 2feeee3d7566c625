"""
Fetch strategies: ways of getting page content to extract from.
"""

from .base import BaseFetcher
from .server import ServerFetcher
from .proxy import ProxyClient, ProxyFetcher, ProxyStructuredFetcher, ProxySelectorFetcher
from .browser import BrowserFetcher

__all__ = [
    'BaseFetcher',
    'ServerFetcher',
    'ProxyClient',
    'ProxyFetcher',
    'ProxyStructuredFetcher',
    'ProxySelectorFetcher',
    'BrowserFetcher',
]
