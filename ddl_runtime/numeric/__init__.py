"""Runtime numeric value types.

- widths: bit-width validation, masks and range bounds
- fixed: FixedUInt / FixedSInt
- floats: Float32 / Float64
- integer: BigInt with owned digit storage
- maybe: Maybe, the result of a checked cast
"""

from .fixed import FixedSInt, FixedUInt
from .floats import Float32, Float64
from .integer import BigInt
from .maybe import Maybe, MaybeTag

__all__ = [
    'FixedUInt',
    'FixedSInt',
    'Float32',
    'Float64',
    'BigInt',
    'Maybe',
    'MaybeTag',
]
