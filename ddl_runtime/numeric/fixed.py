"""Fixed-width integer values.

``FixedUInt`` and ``FixedSInt`` are the runtime form of DDL ``uint<N>`` and
``sint<N>`` fields. The width is a construction-time parameter of any positive
size; construction wraps the payload into the N-bit field, so a stored value
is always inside the kind's range:

    FixedUInt(8, 300).value  == 44
    FixedSInt(8, 200).value  == -56
    FixedSInt(5, 0b10000)    -> -16 (sign taken from bit 4, not from storage)

Values are immutable and hold no shared storage.
"""
from __future__ import annotations

from ddl_runtime.internals.errors import raise_error
from ddl_runtime.numeric import widths


class _FixedInt:
    __slots__ = ("_width", "_value")

    kind_name = "fixed"
    has_refs = False

    def __init__(self, width: int, value: int = 0) -> None:
        widths.check_width(width)
        if isinstance(value, bool) or not isinstance(value, int):
            raise_error("RE0002", kind=f"{self.kind_name}<{width}>",
                        expected="an int", actual=type(value).__name__)
        self._width = width
        self._value = self._wrap(value, width)

    @staticmethod
    def _wrap(value: int, width: int) -> int:
        raise NotImplementedError("_wrap: fixed-width base class has no representation")

    @classmethod
    def min_value(cls, width: int) -> int:
        raise NotImplementedError(f"min_value: {cls.__name__} has no signedness")

    @classmethod
    def max_value(cls, width: int) -> int:
        raise NotImplementedError(f"max_value: {cls.__name__} has no signedness")

    @property
    def width(self) -> int:
        return self._width

    @property
    def value(self) -> int:
        """Mathematical value of the field."""
        return self._value

    @property
    def rep(self) -> int:
        """N-bit pattern of the field as a non-negative int."""
        return widths.wrap_unsigned(self._value, self._width)

    @property
    def min(self) -> int:
        return self.min_value(self._width)

    @property
    def max(self) -> int:
        return self.max_value(self._width)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._width == other._width and self._value == other._value

    def __hash__(self) -> int:
        return hash((self.kind_name, self._width, self._value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self._width}>({self._value})"


class FixedUInt(_FixedInt):
    """Unsigned N-bit integer, range [0, 2^N - 1]."""

    __slots__ = ()
    kind_name = "uint"

    @staticmethod
    def _wrap(value: int, width: int) -> int:
        return widths.wrap_unsigned(value, width)

    @classmethod
    def min_value(cls, width: int) -> int:
        return 0

    @classmethod
    def max_value(cls, width: int) -> int:
        return widths.uint_max(width)


class FixedSInt(_FixedInt):
    """Two's-complement N-bit integer, range [-2^(N-1), 2^(N-1) - 1]."""

    __slots__ = ()
    kind_name = "sint"

    @staticmethod
    def _wrap(value: int, width: int) -> int:
        return widths.wrap_signed(value, width)

    @classmethod
    def min_value(cls, width: int) -> int:
        return widths.sint_min(width)

    @classmethod
    def max_value(cls, width: int) -> int:
        return widths.sint_max(width)

    @property
    def is_negative(self) -> bool:
        return self._value < 0
