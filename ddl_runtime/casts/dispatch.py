"""
Cast dispatch by kind.

Generated code calls the cast functions directly. Tools that only know the
source value and a target kind name (tests, debuggers, the constant folder)
go through :func:`cast` / :func:`cast_maybe`, which look the pair up in a
dispatch table. A cast to the source's own kind is a reflective cast.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple, Optional, Tuple

from ddl_runtime.casts import checked, unchecked
from ddl_runtime.casts.reflective import refl_cast, refl_cast_maybe
from ddl_runtime.config import DEFAULT_CONFIG, RuntimeConfig
from ddl_runtime.internals.errors import raise_error
from ddl_runtime.numeric.maybe import Maybe
from ddl_runtime.semantics.kinds import Kind, KindFamily, as_kind, kind_of

U, S, F, D, I = (KindFamily.UINT, KindFamily.SINT, KindFamily.FLOAT,
                 KindFamily.DOUBLE, KindFamily.INTEGER)


class CastPair(NamedTuple):
    unchecked: Callable
    checked: Callable


CAST_TABLE: Dict[Tuple[KindFamily, KindFamily], CastPair] = {
    (U, U): CastPair(unchecked.uint_to_uint, checked.uint_to_uint_maybe),
    (S, U): CastPair(unchecked.sint_to_uint, checked.sint_to_uint_maybe),
    (U, S): CastPair(unchecked.uint_to_sint, checked.uint_to_sint_maybe),
    (S, S): CastPair(unchecked.sint_to_sint, checked.sint_to_sint_maybe),
    (F, U): CastPair(unchecked.float_to_uint, checked.float_to_uint_maybe),
    (D, U): CastPair(unchecked.double_to_uint, checked.double_to_uint_maybe),
    (F, S): CastPair(unchecked.float_to_sint, checked.float_to_sint_maybe),
    (D, S): CastPair(unchecked.double_to_sint, checked.double_to_sint_maybe),
    (U, F): CastPair(unchecked.uint_to_float, checked.uint_to_float_maybe),
    (S, F): CastPair(unchecked.sint_to_float, checked.sint_to_float_maybe),
    (U, D): CastPair(unchecked.uint_to_double, checked.uint_to_double_maybe),
    (S, D): CastPair(unchecked.sint_to_double, checked.sint_to_double_maybe),
    (F, D): CastPair(unchecked.float_to_double, checked.float_to_double_maybe),
    (D, F): CastPair(unchecked.double_to_float, checked.double_to_float_maybe),
    (U, I): CastPair(unchecked.uint_to_integer, checked.uint_to_integer_maybe),
    (S, I): CastPair(unchecked.sint_to_integer, checked.sint_to_integer_maybe),
    (F, I): CastPair(unchecked.float_to_integer, checked.float_to_integer_maybe),
    (D, I): CastPair(unchecked.double_to_integer, checked.double_to_integer_maybe),
    (I, U): CastPair(unchecked.integer_to_uint, checked.integer_to_uint_maybe),
    (I, S): CastPair(unchecked.integer_to_sint, checked.integer_to_sint_maybe),
    (I, F): CastPair(unchecked.integer_to_float, checked.integer_to_float_maybe),
    (I, D): CastPair(unchecked.integer_to_double, checked.integer_to_double_maybe),
}


@dataclass(frozen=True)
class Converter:
    """Kind-directed casts under a given runtime configuration."""
    config: RuntimeConfig = DEFAULT_CONFIG

    def cast(self, value, target: "Kind | str"):
        source, target, pair = self._resolve(value, target)
        if pair is None:
            return refl_cast(value)
        if target.is_fixed:
            return pair.unchecked(value, target.width)
        return pair.unchecked(value)

    def cast_maybe(self, value, target: "Kind | str") -> Maybe:
        source, target, pair = self._resolve(value, target)
        if pair is None:
            return refl_cast_maybe(value)
        if source.family == KindFamily.INTEGER and target.family == KindFamily.SINT:
            return pair.checked(value, target.width,
                                native_bits=self.config.native_word_bits)
        if target.is_fixed:
            return pair.checked(value, target.width)
        return pair.checked(value)

    def _resolve(self, value, target) -> Tuple[Kind, Kind, Optional[CastPair]]:
        source = kind_of(value)
        target = as_kind(target)
        if source == target:
            return source, target, None
        pair = CAST_TABLE.get((source.family, target.family))
        if pair is None:
            raise_error("RE0008", source=str(source), target=str(target))
        return source, target, pair


_DEFAULT = Converter()


def cast(value, target: "Kind | str"):
    """Unchecked cast of ``value`` to ``target`` (a Kind or a kind name)."""
    return _DEFAULT.cast(value, target)


def cast_maybe(value, target: "Kind | str") -> Maybe:
    """Checked cast of ``value`` to ``target``; absent when not representable."""
    return _DEFAULT.cast_maybe(value, target)
