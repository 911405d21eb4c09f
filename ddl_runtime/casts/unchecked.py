"""
Unchecked numeric casts.

Every function here is total: a value that does not fit its target is
truncated to the target's low bits, sign-reinterpreted, or rounded. Callers
that must not lose information use the ``*_maybe`` functions in
:mod:`ddl_runtime.casts.checked`.

Fixed-width casts work on the source's value the way a C++ integer
conversion works on its representation type: the value is reduced modulo
2^out_width and, for signed targets, bit ``out_width - 1`` becomes the sign.
That gives zero extension for unsigned sources, sign extension for signed
sources, and plain low-bit truncation when narrowing.
"""
from __future__ import annotations

import math

from ddl_runtime.internals.errors import raise_error
from ddl_runtime.numeric.fixed import FixedSInt, FixedUInt
from ddl_runtime.numeric.floats import Float32, Float64, narrow_to_binary32
from ddl_runtime.numeric.integer import BigInt


# -----------------------------------------------------------------------------
# Fixed width -> fixed width

def uint_to_uint(x: FixedUInt, out_width: int) -> FixedUInt:
    return FixedUInt(out_width, x.value)


def sint_to_uint(x: FixedSInt, out_width: int) -> FixedUInt:
    return FixedUInt(out_width, x.value)


def uint_to_sint(x: FixedUInt, out_width: int) -> FixedSInt:
    return FixedSInt(out_width, x.value)


def sint_to_sint(x: FixedSInt, out_width: int) -> FixedSInt:
    return FixedSInt(out_width, x.value)


# -----------------------------------------------------------------------------
# Float / double -> fixed width

def _truncate(x: float) -> int:
    """Truncate toward zero; NaN and infinities map to 0."""
    if not math.isfinite(x):
        return 0
    return math.trunc(x)


def float_to_uint(x: Float32, out_width: int) -> FixedUInt:
    return FixedUInt(out_width, _truncate(x.value))


def double_to_uint(x: Float64, out_width: int) -> FixedUInt:
    return FixedUInt(out_width, _truncate(x.value))


def float_to_sint(x: Float32, out_width: int) -> FixedSInt:
    return FixedSInt(out_width, _truncate(x.value))


def double_to_sint(x: Float64, out_width: int) -> FixedSInt:
    return FixedSInt(out_width, _truncate(x.value))


# -----------------------------------------------------------------------------
# Fixed width -> float / double (round to nearest, ties to even)

def uint_to_float(x: FixedUInt) -> Float32:
    return Float32(x.value)


def sint_to_float(x: FixedSInt) -> Float32:
    return Float32(x.value)


def uint_to_double(x: FixedUInt) -> Float64:
    return Float64(x.value)


def sint_to_double(x: FixedSInt) -> Float64:
    return Float64(x.value)


# -----------------------------------------------------------------------------
# Float <-> double

def float_to_double(x: Float32) -> Float64:
    return Float64.from_float(x.value)


def double_to_float(x: Float64) -> Float32:
    return Float32(narrow_to_binary32(x.value))


# -----------------------------------------------------------------------------
# Integers

def uint_to_integer(x: FixedUInt) -> BigInt:
    return BigInt(x.value)


def sint_to_integer(x: FixedSInt) -> BigInt:
    return BigInt(x.value)


def _float_to_integer(x: float, kind: str) -> BigInt:
    if not math.isfinite(x):
        raise_error("RE0006", kind=kind, value=x)
    return BigInt(math.trunc(x))


def float_to_integer(x: Float32) -> BigInt:
    """Truncate toward zero. NaN and infinities raise NonFiniteValueError."""
    return _float_to_integer(x.value, "float")


def double_to_integer(x: Float64) -> BigInt:
    """Truncate toward zero. NaN and infinities raise NonFiniteValueError."""
    return _float_to_integer(x.value, "double")


# borrow: the source keeps its storage
def integer_to_uint(x: BigInt, out_width: int) -> FixedUInt:
    return FixedUInt(out_width, x.export_bits(out_width))


# borrow
def integer_to_sint(x: BigInt, out_width: int) -> FixedSInt:
    return FixedSInt(out_width, x.export_bits(out_width))


# borrow
def integer_to_float(x: BigInt) -> Float32:
    return Float32.from_double(x.to_double())


def integer_to_double(x: BigInt) -> Float64:
    return Float64(x.to_double())
