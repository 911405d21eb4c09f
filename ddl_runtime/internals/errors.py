# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, NoReturn, Type


class Category(str, Enum):
    WIDTH    = "width"
    VALUE    = "value"
    STORAGE  = "storage"
    RESULT   = "result"
    KIND     = "kind"
    LOWERING = "lowering"
    CONFIG   = "config"


class DDLRuntimeError(Exception):
    """Base class for caller contract violations raised by the runtime.

    A value that cannot be represented in a cast target is never an error;
    checked casts report it as an absent result.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class InvalidWidthError(DDLRuntimeError, ValueError):
    pass


class InvalidValueError(DDLRuntimeError, TypeError):
    pass


class ReleasedStorageError(DDLRuntimeError):
    pass


class AbsentValueError(DDLRuntimeError):
    pass


class NonFiniteValueError(DDLRuntimeError, ValueError):
    pass


class UnknownKindError(DDLRuntimeError, ValueError):
    pass


class UnsupportedCastError(DDLRuntimeError, TypeError):
    pass


class ConfigError(DDLRuntimeError, ValueError):
    pass


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    text: str
    exc: Type[DDLRuntimeError]
    category: Category = Category.VALUE
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def raise_error(code: str, **kwargs) -> NoReturn:
    """Raise the exception registered for ``code``.

    Args:
        code: Error code (e.g., "RE0001")
        **kwargs: Format parameters for the error message

    Raises:
        DDLRuntimeError: Always, as the subclass registered for the code
    """
    msg = _get(code)
    raise msg.exc(code, _fmt(code, **kwargs))


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

_add(ErrorMessage("RE0001",
    "bit width must be a positive integer, got {width!r}",
    InvalidWidthError, Category.WIDTH,
    "Fixed-width kinds need a width of at least one bit."))

_add(ErrorMessage("RE0002",
    "{kind} expects {expected}, got {actual}",
    InvalidValueError, Category.VALUE,
    "A numeric value was constructed from a payload of the wrong Python type."))

_add(ErrorMessage("RE0003",
    "integer storage used after release",
    ReleasedStorageError, Category.STORAGE,
    "A BigInt was read after its digit storage was released."))

_add(ErrorMessage("RE0004",
    "integer storage released twice",
    ReleasedStorageError, Category.STORAGE,
    "Owned digit storage must be released exactly once."))

_add(ErrorMessage("RE0005",
    "unwrapped an absent result",
    AbsentValueError, Category.RESULT,
    "Check is_present before reading the value of a checked cast."))

_add(ErrorMessage("RE0006",
    "cannot convert non-finite {kind} value {value} to an integer",
    NonFiniteValueError, Category.VALUE,
    "NaN and infinities have no integer counterpart; use the _maybe variant."))

_add(ErrorMessage("RE0007",
    "unknown numeric kind '{name}'",
    UnknownKindError, Category.KIND,
    "Kind names look like uint<8>, sint<12>, u16, i32, float, double, integer."))

_add(ErrorMessage("RE0008",
    "no conversion from {source} to {target}",
    UnsupportedCastError, Category.KIND))

_add(ErrorMessage("RE0009",
    "cannot lower {kind} to LLVM IR",
    UnsupportedCastError, Category.LOWERING,
    "Arbitrary-precision integers have no fixed IR type."))

_add(ErrorMessage("RE0010",
    "value does not fit a {bits}-bit native word",
    InvalidValueError, Category.VALUE,
    "Check fits_native_word() before calling to_native()."))

_add(ErrorMessage("RE0011",
    "invalid runtime configuration: {detail}",
    ConfigError, Category.CONFIG))
