"""Parsing utilities for numeric wire fields."""

from typing import Any

U64_MAX = 2**64 - 1


def parse_u64(value: Any) -> int:
    """Parse an unsigned 64-bit integer from a decimal string or int.

    Block logs carry heights and timestamps as numeric strings. Only ASCII
    digits are accepted, with an optional leading "+".

    Args:
        value: Decimal numeric string or non-negative int

    Returns:
        int: Parsed integer value

    Raises:
        ValueError: If the value is not numeric or does not fit in 64 bits

    Example:
        >>> parse_u64("10939864")
        10939864
        >>> parse_u64("0x10")
        Traceback (most recent call last):
            ...
        ValueError: invalid digit in numeric field: '0x10'
    """
    if isinstance(value, bool):
        msg = f"expected a numeric string, got {value!r}"
        raise ValueError(msg)

    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        digits = value[1:] if value.startswith("+") else value
        if not digits:
            msg = f"cannot parse integer from empty string: {value!r}"
            raise ValueError(msg)
        if not (digits.isascii() and digits.isdigit()):
            msg = f"invalid digit in numeric field: {value!r}"
            raise ValueError(msg)
        number = int(digits)
    else:
        msg = f"expected a numeric string, got {type(value).__name__}"
        raise ValueError(msg)

    if not 0 <= number <= U64_MAX:
        msg = f"number out of range for an unsigned 64-bit integer: {value!r}"
        raise ValueError(msg)
    return number


__all__ = ["U64_MAX", "parse_u64"]
