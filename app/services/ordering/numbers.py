"""Spoken and written quantity parsing."""
import math
from typing import Any, Optional

NUMBER_WORDS = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}

# Regex alternation for quantity tokens, shared with the text extractor
QUANTITY_TOKEN_PATTERN = r"\d+|" + "|".join(NUMBER_WORDS)


def value_of(token: str) -> Optional[int]:
    """
    Map a quantity token to an integer.

    Number words are recognised from "one" to "ten" (case-insensitive).
    Digit strings are parsed without an upper bound.

    Returns:
        The integer value, or None if the token is not a quantity
    """
    if token is None:
        return None
    cleaned = token.strip().lower()
    if cleaned.isdecimal():
        try:
            return int(cleaned)
        except ValueError:
            # Digit runs past the interpreter's int conversion limit
            return None
    return NUMBER_WORDS.get(cleaned)


def coerce_quantity(value: Any) -> int:
    """Coerce any incoming quantity to a positive integer, defaulting to 1."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, float) and not math.isfinite(value):
        return 1
    if isinstance(value, (int, float)):
        quantity = int(value)
    elif isinstance(value, str):
        quantity = value_of(value) or 0
    else:
        quantity = 0
    return quantity if quantity >= 1 else 1
