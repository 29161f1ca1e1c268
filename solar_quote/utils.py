"""Numeric and text helpers shared by the quotation services."""

import logging
import math
import re
from typing import Optional, Union

_logger = logging.getLogger(__name__)

Number = Union[int, float]

_MONEY_NOISE = re.compile(r"(₹|rs\.?|inr|,|\s)", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"^\s*[-+]?\d+(\.\d+)?")


def round_half_up(value: float) -> int:
    """Half-up rounding to an integer: 2.5 -> 3, 3.49 -> 3. Not round(), which rounds half to even."""
    return int(math.floor(value + 0.5))


def round2(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def positive_zero(value: float) -> float:
    # -0.0 + 0.0 == +0.0
    return value + 0.0


def format_number(value) -> str:
    """Renders a number the way quotation text expects it: 5.0 -> "5", 5.3 -> "5.3"."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def parse_money(value, field: str = "amount") -> float:
    """
    Parses a money value that may arrive as a string ("₹ 3,00,000", "Rs. 45,000.50").
    Currency symbols, thousands separators and whitespace are stripped first.
    A string that still does not parse becomes 0.0 and a warning is logged.
    """
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)

    cleaned = _MONEY_NOISE.sub("", str(value))
    try:
        return float(cleaned)
    except ValueError:
        _logger.warning("Could not parse %s=%r as money, using 0", field, value)
        return 0.0


def parse_leading_int(value, default: Optional[int] = None) -> Optional[int]:
    """parseInt-style: "540W" -> 540, "1.5" -> 1, "abc" -> default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return default
        return int(value)
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return default
    return int(float(match.group(0)))


def parse_number(value, default: Optional[float] = None) -> Optional[float]:
    """parseFloat-style: "5 kVA" -> 5.0, "" -> default."""
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return default
    return float(match.group(0))


def title_words(text: str) -> str:
    """exide_utl -> Exide Utl, "amara raja" -> Amara Raja."""
    words = re.split(r"[_\s]", text)
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)
