"""
Checked numeric casts.

Each ``*_maybe`` function validates that the source is exactly representable
in the target, then delegates to the unchecked cast of the same name. A value
that does not fit comes back as ``Maybe.absent()``; none of these functions
raise for an out-of-range value. Range bounds are inclusive.
"""
from __future__ import annotations

import logging
import math

from ddl_runtime.casts import unchecked
from ddl_runtime.numeric import widths
from ddl_runtime.numeric.fixed import FixedSInt, FixedUInt
from ddl_runtime.numeric.floats import Float32, Float64
from ddl_runtime.numeric.integer import BigInt
from ddl_runtime.numeric.maybe import Maybe

logger = logging.getLogger(__name__)


def _absent(cast_name: str, x: object, out_width: int | None = None) -> Maybe:
    if out_width is None:
        logger.debug("%s: %r is not representable", cast_name, x)
    else:
        logger.debug("%s: %r does not fit %d bits", cast_name, x, out_width)
    return Maybe.absent()


# -----------------------------------------------------------------------------
# Fixed width -> fixed width

def uint_to_uint_maybe(x: FixedUInt, out_width: int) -> Maybe[FixedUInt]:
    if out_width >= x.width:
        return Maybe.present(unchecked.uint_to_uint(x, out_width))
    if x.value <= FixedUInt.max_value(out_width):
        return Maybe.present(unchecked.uint_to_uint(x, out_width))
    return _absent("uint_to_uint", x, out_width)


def sint_to_sint_maybe(x: FixedSInt, out_width: int) -> Maybe[FixedSInt]:
    if out_width >= x.width:
        return Maybe.present(unchecked.sint_to_sint(x, out_width))
    lower = FixedSInt.min_value(out_width)
    upper = FixedSInt.max_value(out_width)
    if lower <= x.value <= upper:
        return Maybe.present(unchecked.sint_to_sint(x, out_width))
    return _absent("sint_to_sint", x, out_width)


def uint_to_sint_maybe(x: FixedUInt, out_width: int) -> Maybe[FixedSInt]:
    # one extra bit of headroom absorbs the sign
    if out_width > x.width:
        return Maybe.present(unchecked.uint_to_sint(x, out_width))
    if x.value <= FixedSInt.max_value(out_width):
        return Maybe.present(unchecked.uint_to_sint(x, out_width))
    return _absent("uint_to_sint", x, out_width)


def sint_to_uint_maybe(x: FixedSInt, out_width: int) -> Maybe[FixedUInt]:
    if x.value < 0:
        return _absent("sint_to_uint", x)
    if out_width >= x.width:
        return Maybe.present(unchecked.sint_to_uint(x, out_width))
    if x.value <= FixedUInt.max_value(out_width):
        return Maybe.present(unchecked.sint_to_uint(x, out_width))
    return _absent("sint_to_uint", x, out_width)


# -----------------------------------------------------------------------------
# Float / double -> fixed width: finite, integral and in range

def _integral(x: float) -> bool:
    return math.isfinite(x) and x.is_integer()


def _float_to_fixed_maybe(x: float, cls, out_width: int, cast_name: str) -> Maybe:
    if _integral(x):
        v = int(x)
        if cls.min_value(out_width) <= v <= cls.max_value(out_width):
            return Maybe.present(cls(out_width, v))
    return _absent(cast_name, x, out_width)


def float_to_uint_maybe(x: Float32, out_width: int) -> Maybe[FixedUInt]:
    return _float_to_fixed_maybe(x.value, FixedUInt, out_width, "float_to_uint")


def double_to_uint_maybe(x: Float64, out_width: int) -> Maybe[FixedUInt]:
    return _float_to_fixed_maybe(x.value, FixedUInt, out_width, "double_to_uint")


def float_to_sint_maybe(x: Float32, out_width: int) -> Maybe[FixedSInt]:
    return _float_to_fixed_maybe(x.value, FixedSInt, out_width, "float_to_sint")


def double_to_sint_maybe(x: Float64, out_width: int) -> Maybe[FixedSInt]:
    return _float_to_fixed_maybe(x.value, FixedSInt, out_width, "double_to_sint")


# -----------------------------------------------------------------------------
# Fixed width / integer -> float / double: the rounded value must be exact

def _exact(result, value: int, cast_name: str, source: object) -> Maybe:
    if result.is_finite and int(result.value) == value:
        return Maybe.present(result)
    return _absent(cast_name, source)


def uint_to_float_maybe(x: FixedUInt) -> Maybe[Float32]:
    return _exact(unchecked.uint_to_float(x), x.value, "uint_to_float", x)


def sint_to_float_maybe(x: FixedSInt) -> Maybe[Float32]:
    return _exact(unchecked.sint_to_float(x), x.value, "sint_to_float", x)


def uint_to_double_maybe(x: FixedUInt) -> Maybe[Float64]:
    return _exact(unchecked.uint_to_double(x), x.value, "uint_to_double", x)


def sint_to_double_maybe(x: FixedSInt) -> Maybe[Float64]:
    return _exact(unchecked.sint_to_double(x), x.value, "sint_to_double", x)


def integer_to_float_maybe(x: BigInt) -> Maybe[Float32]:
    return _exact(unchecked.integer_to_float(x), x.value, "integer_to_float", x)


def integer_to_double_maybe(x: BigInt) -> Maybe[Float64]:
    return _exact(unchecked.integer_to_double(x), x.value, "integer_to_double", x)


# -----------------------------------------------------------------------------
# Float <-> double

def float_to_double_maybe(x: Float32) -> Maybe[Float64]:
    return Maybe.present(unchecked.float_to_double(x))


def double_to_float_maybe(x: Float64) -> Maybe[Float32]:
    """Present iff narrowing loses nothing; NaN and infinities pass through."""
    result = unchecked.double_to_float(x)
    if not x.is_finite or result.value == x.value:
        return Maybe.present(result)
    return _absent("double_to_float", x)


# -----------------------------------------------------------------------------
# Integers

def uint_to_integer_maybe(x: FixedUInt) -> Maybe[BigInt]:
    return Maybe.present(unchecked.uint_to_integer(x))


def sint_to_integer_maybe(x: FixedSInt) -> Maybe[BigInt]:
    return Maybe.present(unchecked.sint_to_integer(x))


def float_to_integer_maybe(x: Float32) -> Maybe[BigInt]:
    if not x.is_finite:
        return _absent("float_to_integer", x)
    return Maybe.present(unchecked.float_to_integer(x))


def double_to_integer_maybe(x: Float64) -> Maybe[BigInt]:
    if not x.is_finite:
        return _absent("double_to_integer", x)
    return Maybe.present(unchecked.double_to_integer(x))


def integer_to_uint_maybe(x: BigInt, out_width: int) -> Maybe[FixedUInt]:
    if x.is_natural() and x.bit_length() <= out_width:
        return Maybe.present(FixedUInt(out_width, x.export_bits(out_width)))
    return _absent("integer_to_uint", x, out_width)


def integer_to_sint_maybe(
    x: BigInt, out_width: int, *, native_bits: int = widths.NATIVE_WORD_BITS
) -> Maybe[FixedSInt]:
    """Checked BigInt -> sint<out_width>.

    Values that fit the native signed word are bound-checked directly. Larger
    values can only fit targets wider than the native word; for those the
    value is exported into the ``out_width``-bit representation and read back,
    and the round trip must reproduce it exactly.
    """
    if x.fits_native_word(native_bits):
        v = x.to_native(native_bits)
        if FixedSInt.min_value(out_width) <= v <= FixedSInt.max_value(out_width):
            return Maybe.present(FixedSInt(out_width, v))
        return _absent("integer_to_sint", x, out_width)

    if out_width <= native_bits:
        return _absent("integer_to_sint", x, out_width)

    rep = x.export_bits(out_width)
    with BigInt.from_bits(rep, out_width, signed=True) as check:
        ok = check == x
    logger.debug("integer_to_sint: round trip through %d bits %s",
                 out_width, "matched" if ok else "differed")
    if ok:
        return Maybe.present(FixedSInt(out_width, rep))
    return Maybe.absent()
