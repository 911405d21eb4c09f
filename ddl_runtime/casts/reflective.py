"""Same-type ("reflective") casts.

A reflective cast returns a value of the input's own type that can be bound
independently of the source. Values that own storage (``has_refs``) are deep
copied; immutable values are returned as they are.
"""
from __future__ import annotations

from typing import TypeVar

from ddl_runtime.numeric.maybe import Maybe

T = TypeVar("T")


def has_refs(x: object) -> bool:
    return bool(getattr(x, "has_refs", False))


def refl_cast(x: T) -> T:
    if not has_refs(x):
        return x
    if isinstance(x, Maybe):
        return x.map(refl_cast)
    return x.copy()


def refl_cast_maybe(x: T) -> Maybe[T]:
    return Maybe.present(refl_cast(x))
