"""
Price normalization.

Turns matched price text like "$1,299.00" or "$10 - $20" into a number.
A return value of 0 means "no price".
"""

import math
import re
from typing import Any, Optional

# First number in the text: digits with an optional decimal fraction
PRICE_TOKEN = re.compile(r'\d+(?:\.\d+)?')

# "$10 - $20", "$10–$20", "$10 to $20": only the lower bound is kept
RANGE_SEPARATOR = re.compile(r'(?<=\d)\s*(?:[-–—]|to\b)', re.IGNORECASE)


def _first_token(text: str) -> float:
    match = PRICE_TOKEN.search(text)
    if not match:
        return 0.0
    return float(match.group(0))


def _lower_bound(raw_text: str) -> str:
    return RANGE_SEPARATOR.split(str(raw_text), maxsplit=1)[0]


def default_price_processor(raw_text: str) -> float:
    """
    Parse price text using the generic rule.

    Keeps digits, commas and periods, drops thousands separators and takes
    the first number found. Ranges resolve to their lower bound.
    """
    if not raw_text:
        return 0.0
    cleaned = re.sub(r'[^\d.,]', '', _lower_bound(raw_text))
    cleaned = cleaned.replace(',', '')
    return _first_token(cleaned)


def digits_only_price_processor(raw_text: str) -> float:
    """Parse price text keeping only digits and the decimal point."""
    if not raw_text:
        return 0.0
    cleaned = re.sub(r'[^\d.]', '', _lower_bound(raw_text))
    return _first_token(cleaned)


def normalize_price(value: Any) -> Optional[float]:
    """
    Normalize a structured-data price (number or string) to a positive float.

    Returns None for missing, unparseable, non-finite or non-positive values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        price = default_price_processor(str(value))
    if not math.isfinite(price) or price <= 0:
        return None
    return price
