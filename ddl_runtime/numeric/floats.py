"""IEEE-754 binary32 / binary64 values.

Storage is ``numpy.float32`` / ``numpy.float64`` so every narrowing goes through
the hardware round-to-nearest-even rule. Python ints of any size are rounded
with a single rounding step (``float(n)`` is already correctly rounded for
binary64; binary32 needs the 24-bit rounding done here first).

NaN payloads survive float <-> double conversions, but a signalling NaN comes
back quiet: the conversions run on the FPU, which sets the quiet bit.
"""
from __future__ import annotations

import math
from typing import Union

import numpy as np

from ddl_runtime.internals.errors import raise_error

Real = Union[int, float, np.floating]

_F32_MANT_BITS = 24
_F32_LIMIT = 1 << 128


def round_int_to_binary64(n: int) -> np.float64:
    """Nearest binary64 to ``n``; values past the range become ±inf."""
    try:
        return np.float64(float(n))
    except OverflowError:
        return np.float64(math.inf if n > 0 else -math.inf)


def round_int_to_binary32(n: int) -> np.float32:
    """Nearest binary32 to ``n`` with ties to even; past the range become ±inf."""
    magnitude = abs(n)
    if magnitude < (1 << 53):
        # exact as binary64, so numpy performs the only rounding
        return np.float32(float(n))
    shift = magnitude.bit_length() - _F32_MANT_BITS
    q, r = divmod(magnitude, 1 << shift)
    half = 1 << (shift - 1)
    if r > half or (r == half and q & 1):
        q += 1
    rounded = q << shift
    if rounded >= _F32_LIMIT:
        return np.float32(math.inf if n > 0 else -math.inf)
    return np.float32(float(rounded if n > 0 else -rounded))


def narrow_to_binary32(x: float) -> np.float32:
    with np.errstate(over="ignore"):
        return np.float32(np.float64(x))


class _Float:
    __slots__ = ("_v",)

    kind_name = "float"
    has_refs = False
    _np_type = np.float32
    _bits_type = np.uint32

    def __init__(self, value: Real = 0.0) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float, np.floating)):
            raise_error("RE0002", kind=self.kind_name, expected="a real number",
                        actual=type(value).__name__)
        self._v = self._coerce(value)

    @classmethod
    def _coerce(cls, value: Real):
        raise NotImplementedError(f"_coerce: {cls.__name__} has no storage format")

    @classmethod
    def from_bits(cls, bits: int):
        raw = np.array([bits], dtype=cls._bits_type).view(cls._np_type)[0]
        out = cls.__new__(cls)
        out._v = raw
        return out

    @property
    def value(self) -> float:
        return float(self._v)

    @property
    def bits(self) -> int:
        return int(np.array([self._v], dtype=self._np_type).view(self._bits_type)[0])

    @property
    def is_nan(self) -> bool:
        return bool(np.isnan(self._v))

    @property
    def is_finite(self) -> bool:
        return bool(np.isfinite(self._v))

    def __float__(self) -> float:
        return float(self._v)

    def __eq__(self, other: object) -> bool:
        # representation equality: NaN == NaN with the same payload, 0.0 != -0.0
        if type(other) is not type(self):
            return NotImplemented
        return self.bits == other.bits

    def __hash__(self) -> int:
        return hash((self.kind_name, self.bits))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class Float32(_Float):
    """IEEE-754 binary32 value."""

    __slots__ = ()
    kind_name = "float"
    _np_type = np.float32
    _bits_type = np.uint32

    @classmethod
    def _coerce(cls, value: Real) -> np.float32:
        if isinstance(value, int):
            return round_int_to_binary32(value)
        return narrow_to_binary32(value)

    @classmethod
    def from_double(cls, x: float) -> "Float32":
        return cls(narrow_to_binary32(x))


class Float64(_Float):
    """IEEE-754 binary64 value."""

    __slots__ = ()
    kind_name = "double"
    _np_type = np.float64
    _bits_type = np.uint64

    @classmethod
    def _coerce(cls, value: Real) -> np.float64:
        if isinstance(value, int):
            return round_int_to_binary64(value)
        return np.float64(value)

    @classmethod
    def from_float(cls, x: Real) -> "Float64":
        # binary32 -> binary64 is exact
        return cls(np.float64(np.float32(x)))
