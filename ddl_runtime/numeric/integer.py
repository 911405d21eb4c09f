"""Arbitrary-precision integers with owned digit storage.

A ``BigInt`` exclusively owns a little-endian ``bytearray`` of magnitude digits.
Binding the same object to two names aliases that storage, which is why casts
that duplicate a BigInt go through :meth:`BigInt.copy`. Storage is released
explicitly, exactly once; reading a released BigInt is an error. Scratch values
are best used as context managers so the release happens on every exit path::

    with BigInt.from_bits(rep, width, signed=True) as check:
        ok = check == original
"""
from __future__ import annotations

from typing import Optional

from ddl_runtime.internals.errors import raise_error
from ddl_runtime.numeric import widths
from ddl_runtime.numeric.floats import round_int_to_binary64


def _to_digits(magnitude: int) -> bytearray:
    return bytearray(magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "little"))


class BigInt:
    """Arbitrary-precision signed integer."""

    __slots__ = ("_digits", "_negative")

    kind_name = "integer"
    has_refs = True

    def __init__(self, value: int = 0) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise_error("RE0002", kind=self.kind_name, expected="an int",
                        actual=type(value).__name__)
        self._negative = value < 0
        self._digits: Optional[bytearray] = _to_digits(abs(value))

    # --- ownership

    @property
    def released(self) -> bool:
        return self._digits is None

    def _storage(self) -> bytearray:
        if self._digits is None:
            raise_error("RE0003")
        return self._digits

    def copy(self) -> "BigInt":
        """Deep copy: the result owns fresh digit storage."""
        out = BigInt.__new__(BigInt)
        out._digits = bytearray(self._storage())
        out._negative = self._negative
        return out

    def release(self) -> None:
        if self._digits is None:
            raise_error("RE0004")
        self._digits = None

    def shares_storage_with(self, other: "BigInt") -> bool:
        return self._digits is not None and self._digits is other._digits

    def __enter__(self) -> "BigInt":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._digits is not None:
            self.release()

    # --- queries

    @property
    def value(self) -> int:
        magnitude = int.from_bytes(self._storage(), "little")
        return -magnitude if self._negative else magnitude

    def is_natural(self) -> bool:
        self._storage()
        return not self._negative

    def bit_length(self) -> int:
        """Minimal number of bits of the magnitude (0 needs 0 bits)."""
        return int.from_bytes(self._storage(), "little").bit_length()

    def fits_native_word(self, bits: int = widths.NATIVE_WORD_BITS) -> bool:
        v = self.value
        return widths.sint_min(bits) <= v <= widths.sint_max(bits)

    def to_native(self, bits: int = widths.NATIVE_WORD_BITS) -> int:
        if not self.fits_native_word(bits):
            raise_error("RE0010", bits=bits)
        return self.value

    def to_double(self) -> float:
        """Nearest binary64 approximation; past the range gives ±inf."""
        return float(round_int_to_binary64(self.value))

    # --- fixed-width representation

    def export_bits(self, width: int) -> int:
        """Low ``width`` bits of the two's-complement representation."""
        widths.check_width(width)
        return widths.wrap_unsigned(self.value, width)

    @classmethod
    def from_bits(cls, bits: int, width: int, signed: bool) -> "BigInt":
        widths.check_width(width)
        if signed:
            return cls(widths.wrap_signed(bits, width))
        return cls(widths.wrap_unsigned(bits, width))

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BigInt):
            return self.value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        if self._digits is None:
            return "BigInt(<released>)"
        return f"BigInt({self.value})"
