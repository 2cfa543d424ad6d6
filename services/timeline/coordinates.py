"""E7 fixed-point coordinate decoding"""

from typing import Any

from core.config import settings

E7_MIN_DIGITS = settings.E7_MIN_DIGITS


def decode_e7(value: Any, min_digits: int = E7_MIN_DIGITS) -> float | None:
    """
    Convert an E7 coordinate value to decimal degrees.

    The first two digits of the sign-stripped value are the integer part,
    the rest become decimal places:

        -545841325 -> -54.5841325

    Args:
        value: Raw value from the export (int, digit string, integral float)
        min_digits: Shortest sign-stripped digit string accepted

    Returns:
        Decoded float, or None if the value is missing or malformed.
        Out-of-range results are not rejected.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)

    text = str(value)
    negative = text.startswith("-")
    digits = text[1:] if negative else text

    if len(digits) < min_digits:
        return None
    if not (digits.isascii() and digits.isdigit()):
        return None

    sign = "-" if negative else ""
    return float(f"{sign}{digits[:2]}.{digits[2:]}")
