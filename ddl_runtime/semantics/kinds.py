"""Numeric kind descriptors.

A :class:`Kind` names one of the five runtime numeric kinds; fixed-width kinds
carry their bit width. Kinds map to their value classes, to LLVM IR types for
lowering, and can be parsed from the names used in DDL declarations
(``uint<12>``, ``i32``, ``double``...).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from lark import Lark, Transformer, UnexpectedInput
from lark.exceptions import VisitError
from llvmlite import ir

from ddl_runtime.internals.errors import raise_error
from ddl_runtime.numeric import widths
from ddl_runtime.numeric.fixed import FixedSInt, FixedUInt
from ddl_runtime.numeric.floats import Float32, Float64
from ddl_runtime.numeric.integer import BigInt

GRAMMAR_PATH = Path(__file__).parent / "kinds.lark"


class KindFamily(str, Enum):
    UINT = "uint"
    SINT = "sint"
    FLOAT = "float"
    DOUBLE = "double"
    INTEGER = "integer"

    def __str__(self) -> str:
        return self.value


_FIXED_FAMILIES = (KindFamily.UINT, KindFamily.SINT)

_VALUE_CLASSES = {
    KindFamily.UINT: FixedUInt,
    KindFamily.SINT: FixedSInt,
    KindFamily.FLOAT: Float32,
    KindFamily.DOUBLE: Float64,
    KindFamily.INTEGER: BigInt,
}


@dataclass(frozen=True)
class Kind:
    family: KindFamily
    width: Optional[int] = None  # fixed-width families only

    def __post_init__(self) -> None:
        if self.family in _FIXED_FAMILIES:
            widths.check_width(self.width)
        elif self.width is not None:
            raise_error("RE0007", name=f"{self.family.value}<{self.width}>")

    @property
    def is_fixed(self) -> bool:
        return self.family in _FIXED_FAMILIES

    @property
    def value_class(self) -> type:
        return _VALUE_CLASSES[self.family]

    def make(self, payload):
        """Build a runtime value of this kind from a Python number."""
        if self.is_fixed:
            return self.value_class(self.width, payload)
        return self.value_class(payload)

    def llvm_type(self) -> ir.Type:
        if self.is_fixed:
            return ir.IntType(self.width)
        if self.family == KindFamily.FLOAT:
            return ir.FloatType()
        if self.family == KindFamily.DOUBLE:
            return ir.DoubleType()
        raise_error("RE0009", kind=str(self))

    def __str__(self) -> str:
        if self.is_fixed:
            return f"{self.family.value}<{self.width}>"
        return self.family.value


FLOAT = Kind(KindFamily.FLOAT)
DOUBLE = Kind(KindFamily.DOUBLE)
INTEGER = Kind(KindFamily.INTEGER)


def uint(width: int) -> Kind:
    return Kind(KindFamily.UINT, width)


def sint(width: int) -> Kind:
    return Kind(KindFamily.SINT, width)


def kind_of(value: object) -> Kind:
    """Kind of a runtime numeric value."""
    if isinstance(value, FixedUInt):
        return uint(value.width)
    if isinstance(value, FixedSInt):
        return sint(value.width)
    if isinstance(value, Float32):
        return FLOAT
    if isinstance(value, Float64):
        return DOUBLE
    if isinstance(value, BigInt):
        return INTEGER
    raise_error("RE0002", kind="kind_of", expected="a runtime numeric value",
                actual=type(value).__name__)


class _KindBuilder(Transformer):
    def start(self, items):
        return items[0]

    def fixed(self, items):
        signedness, width = items
        return Kind(KindFamily(str(signedness)), int(width))

    def short_fixed(self, items):
        name = str(items[0])
        family = KindFamily.UINT if name[0] == "u" else KindFamily.SINT
        return Kind(family, int(name[1:]))

    def float_kind(self, _items):
        return FLOAT

    def double_kind(self, _items):
        return DOUBLE

    def integer_kind(self, _items):
        return INTEGER


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark.open(str(GRAMMAR_PATH), parser="lalr")


@lru_cache(maxsize=256)
def parse_kind(text: str) -> Kind:
    """Parse a kind name such as ``uint<12>``, ``i32`` or ``double``."""
    try:
        tree = _parser().parse(text)
    except UnexpectedInput:
        raise_error("RE0007", name=text)
    try:
        return _KindBuilder().transform(tree)
    except VisitError as e:
        raise e.orig_exc from None


def as_kind(target: "Kind | str") -> Kind:
    if isinstance(target, Kind):
        return target
    return parse_kind(target)
