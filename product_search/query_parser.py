"""
Search parameter parsing for the product search API.

Converts the raw query-string values of GET /search into a search
parameter dict consumed by payload_builder.build_search_payload().
This is the only place where client input can be rejected: the payload
builder itself accepts any parameter combination.
"""

import math
import re
from typing import Dict, Any, Optional, Tuple

from product_search.errors import InvalidArgument

# ============================================================
# Price range format: "<min>-<max>"
# ============================================================

# A float literal: optional sign, digits with optional fraction (or a bare
# fraction), optional exponent.
_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"

# The separator is the first "-" after a complete number, so signed bounds
# stay unambiguous: "-10--5" -> (-10, -5), "10--5" -> (10, -5).
PRICE_RANGE_PATTERN = re.compile(rf"^\s*({_NUMBER})-({_NUMBER})\s*$")


def parse_price_range(raw: str) -> Tuple[float, float]:
    """
    Parse a "<min>-<max>" price range.

    Args:
        raw: Range string from the priceRange query parameter, e.g. "10-50"

    Returns:
        Tuple (min_price, max_price). The bounds are not reordered and
        min <= max is not checked; an inverted range reaches the store as-is.

    Raises:
        InvalidArgument: If the value is not two finite numbers separated
            by a single "-"

    Example:
        >>> parse_price_range("100-500")
        (100.0, 500.0)
        >>> parse_price_range("-10--5")
        (-10.0, -5.0)
    """
    match = PRICE_RANGE_PATTERN.match(raw or "")
    if not match:
        raise InvalidArgument(f"Invalid price range format: {raw!r}")

    min_price = float(match.group(1))
    max_price = float(match.group(2))

    # Exponents can still overflow to inf ("1e999-5")
    if not (math.isfinite(min_price) and math.isfinite(max_price)):
        raise InvalidArgument(f"Invalid price range format: {raw!r}")

    return min_price, max_price


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    # Empty string and absent are treated identically
    if value is None or value == "":
        return None
    return value


def parse_search_params(
    query: Optional[str] = None,
    category: Optional[str] = None,
    price_range: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build search parameters from raw request values.

    Args:
        query: Free text matched against product names
        category: Exact category label
        price_range: "<min>-<max>" string

    Returns:
        Dictionary:
        {
            "text_query": str or None,
            "category": str or None,
            "price_range": (min, max) or None
        }

    Raises:
        InvalidArgument: If price_range is present but malformed
    """
    raw_range = _blank_to_none(price_range)

    return {
        "text_query": _blank_to_none(query),
        "category": _blank_to_none(category),
        "price_range": parse_price_range(raw_range) if raw_range is not None else None,
    }
