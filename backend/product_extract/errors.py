"""
Exceptions raised inside the extraction pipeline.

Fetchers convert these into ExtractedProduct.failure() before returning,
so none of them reach callers of ProductExtractor.extract().
"""


class ExtractionError(Exception):
    """Base class for extraction failures."""


class InvalidUrlError(ExtractionError):
    """URL is not a well-formed absolute URL."""


class FetchError(ExtractionError):
    """Network failure, timeout, non-2xx response or unusable payload."""


class PageLoadError(ExtractionError):
    """Browser navigation failed, timed out, or hit a bot challenge."""
