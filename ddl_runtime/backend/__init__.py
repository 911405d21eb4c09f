"""LLVM lowering of numeric casts and constants."""

from .lowering import constant_of, emit_cast

__all__ = [
    'emit_cast',
    'constant_of',
]
