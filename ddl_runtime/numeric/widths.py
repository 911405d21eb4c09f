"""Bit-width helpers shared by the fixed-width kinds and the BigInt export path.

Widths are plain positive integers chosen by the generated parser. Every
helper here is a pure function of its arguments.
"""
from __future__ import annotations

from ddl_runtime.internals.errors import raise_error

# Width of the host signed word used by the BigInt fast path.
NATIVE_WORD_BITS = 64


def check_width(width: int) -> int:
    """Validate a bit width and return it unchanged."""
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise_error("RE0001", width=width)
    return width


def mask(width: int) -> int:
    return (1 << width) - 1


def uint_max(width: int) -> int:
    return mask(width)


def sint_min(width: int) -> int:
    return -(1 << (width - 1))


def sint_max(width: int) -> int:
    return (1 << (width - 1)) - 1


def wrap_unsigned(value: int, width: int) -> int:
    """Keep the low ``width`` bits of ``value`` (two's complement for negatives)."""
    return value & mask(width)


def wrap_signed(value: int, width: int) -> int:
    """Keep the low ``width`` bits and read bit ``width - 1`` as the sign."""
    bits = value & mask(width)
    if bits >> (width - 1):
        return bits - (1 << width)
    return bits
