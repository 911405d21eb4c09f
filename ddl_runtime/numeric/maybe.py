"""Optional result of a checked cast: present with a value, or absent."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from ddl_runtime.internals.errors import raise_error

T = TypeVar("T")
U = TypeVar("U")


class MaybeTag(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


@dataclass(frozen=True)
class Maybe(Generic[T]):
    """Tagged two-variant result.

    Build with :meth:`present` / :meth:`absent`; an absent result carries no
    payload and no reason (the only reason is "not representable").
    """
    tag: MaybeTag
    _value: Optional[T] = None

    @classmethod
    def present(cls, value: T) -> "Maybe[T]":
        return cls(MaybeTag.PRESENT, value)

    @classmethod
    def absent(cls) -> "Maybe[Any]":
        return _ABSENT

    @property
    def is_present(self) -> bool:
        return self.tag is MaybeTag.PRESENT

    @property
    def is_absent(self) -> bool:
        return self.tag is MaybeTag.ABSENT

    @property
    def has_refs(self) -> bool:
        return self.is_present and getattr(self._value, "has_refs", False)

    def unwrap(self) -> T:
        if self.tag is MaybeTag.ABSENT:
            raise_error("RE0005")
        return self._value

    def value_or(self, default: U) -> "T | U":
        return self._value if self.tag is MaybeTag.PRESENT else default

    def map(self, fn: Callable[[T], U]) -> "Maybe[U]":
        if self.tag is MaybeTag.ABSENT:
            return self
        return Maybe.present(fn(self._value))

    def __repr__(self) -> str:
        if self.tag is MaybeTag.ABSENT:
            return "Maybe.absent()"
        return f"Maybe.present({self._value!r})"


_ABSENT: Maybe[Any] = Maybe(MaybeTag.ABSENT)
