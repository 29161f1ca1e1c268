"""Amount-in-words line printed under the quotation total (Indian numbering)."""

import math

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def _two_digits(n: int) -> str:
    if n < 10:
        return ONES[n]
    if n < 20:
        return TEENS[n - 10]
    tens, ones = divmod(n, 10)
    return TENS[tens] + (f" {ONES[ones]}" if ones else "")


def _three_digits(n: int) -> str:
    if n < 100:
        return _two_digits(n)
    hundreds, rest = divmod(n, 100)
    return f"{ONES[hundreds]} Hundred" + (f" {_two_digits(rest)}" if rest else "")


def _indian_words(n: int) -> str:
    parts = []
    crore, n = divmod(n, CRORE)
    lakh, n = divmod(n, LAKH)
    thousand, remainder = divmod(n, THOUSAND)

    if crore:
        # 1000 crore and above: the crore count is itself spelled in Indian numbering
        parts.append(_indian_words(crore) + " Crore")
    if lakh:
        parts.append(_two_digits(lakh) + " Lakh")
    if thousand:
        parts.append(_two_digits(thousand) + " Thousand")
    if remainder:
        parts.append(_three_digits(remainder))
    return " ".join(parts)


def number_to_words(amount) -> str:
    """
    222000 -> "Rupees Two Lakh Twenty Two Thousand Only".
    Paise are not spelled: fractional amounts are floored. Zero gives "Zero".
    """
    n = int(math.floor(amount))
    if n == 0:
        return "Zero"
    if n < 0:
        return "Rupees Minus " + _indian_words(-n) + " Only"
    return "Rupees " + _indian_words(n) + " Only"
