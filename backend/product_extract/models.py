"""
Data models for product extraction.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Callable, Tuple
from enum import Enum


class FetchStrategy(Enum):
    """Available ways of getting page content."""
    SERVER = "server"
    PROXY_STRUCTURED = "proxy_structured"
    PROXY_SELECTORS = "proxy_selectors"
    BROWSER = "browser"


# Fields an extraction can populate, in output order
PRODUCT_FIELDS = ('name', 'price', 'specifications', 'image')


@dataclass
class ExtractedProduct:
    """
    Result of one extraction attempt.

    Absent fields stay None ("not found"). `error` is only set when the
    attempt failed outright.
    """
    name: Optional[str] = None
    price: Optional[float] = None
    specifications: Optional[str] = None
    image: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> 'ExtractedProduct':
        return cls(error=error)

    def is_usable(self) -> bool:
        """No error and at least a name or a price."""
        return self.error is None and (bool(self.name) or self.price is not None)

    def has_data(self) -> bool:
        return bool(self.name) or self.price is not None

    def fill_missing(self, other: 'ExtractedProduct') -> 'ExtractedProduct':
        """
        Fill fields still absent here from `other`.

        Fields already known are never overwritten.
        """
        for name in PRODUCT_FIELDS:
            if getattr(self, name) is None and getattr(other, name) is not None:
                setattr(self, name, getattr(other, name))
        return self

    def to_dict(self) -> dict:
        data = {}
        for name in PRODUCT_FIELDS + ('error',):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtractedProduct':
        price = data.get('price')
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            price = None
        elif price <= 0:
            price = None
        else:
            price = float(price)

        def _text(key):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            return None

        return cls(
            name=_text('name'),
            price=price,
            specifications=_text('specifications'),
            image=_text('image'),
            error=_text('error'),
        )


@dataclass(frozen=True)
class SelectorSet:
    """Ordered CSS selector lists, tried first to last."""
    name: Tuple[str, ...]
    price: Tuple[str, ...]
    specs: Tuple[str, ...] = ()
    image: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SiteProfile:
    """Selectors and price rule for one e-commerce site."""
    key: str
    domains: Tuple[str, ...]
    selectors: SelectorSet
    price_processor: Optional[Callable[[str], float]] = None

    def matches(self, hostname: str) -> bool:
        hostname = (hostname or '').lower()
        return any(domain in hostname for domain in self.domains)


@dataclass
class UrlPreview:
    """Lightweight page preview shown before a full extraction."""
    title: Optional[str] = None
    domain: Optional[str] = None
    favicon: Optional[str] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in (('title', self.title), ('domain', self.domain), ('favicon', self.favicon))
                if v is not None}


@dataclass
class StrategyAttempt:
    """What one fetch strategy returned during an orchestrated extraction."""
    strategy: FetchStrategy
    result: Optional[ExtractedProduct] = None
    exception: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None and self.result.is_usable()


@dataclass
class ExtractionTrace:
    """Ordered record of strategy attempts, kept for logging and debugging."""
    url: str
    attempts: List[StrategyAttempt] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "attempts": [
                {
                    "strategy": a.strategy.value,
                    "succeeded": a.succeeded,
                    "error": a.exception or (a.result.error if a.result else None),
                }
                for a in self.attempts
            ],
        }
