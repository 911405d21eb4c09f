"""The cast matrix.

- unchecked: total casts (truncate, reinterpret, round)
- checked: ``*_maybe`` casts returning Maybe
- reflective: same-type casts that never alias owned storage
- dispatch: casts selected by target kind
"""

from .unchecked import (
    double_to_float,
    double_to_integer,
    double_to_sint,
    double_to_uint,
    float_to_double,
    float_to_integer,
    float_to_sint,
    float_to_uint,
    integer_to_double,
    integer_to_float,
    integer_to_sint,
    integer_to_uint,
    sint_to_double,
    sint_to_float,
    sint_to_integer,
    sint_to_sint,
    sint_to_uint,
    uint_to_double,
    uint_to_float,
    uint_to_integer,
    uint_to_sint,
    uint_to_uint,
)
from .checked import (
    double_to_float_maybe,
    double_to_integer_maybe,
    double_to_sint_maybe,
    double_to_uint_maybe,
    float_to_double_maybe,
    float_to_integer_maybe,
    float_to_sint_maybe,
    float_to_uint_maybe,
    integer_to_double_maybe,
    integer_to_float_maybe,
    integer_to_sint_maybe,
    integer_to_uint_maybe,
    sint_to_double_maybe,
    sint_to_float_maybe,
    sint_to_integer_maybe,
    sint_to_sint_maybe,
    sint_to_uint_maybe,
    uint_to_double_maybe,
    uint_to_float_maybe,
    uint_to_integer_maybe,
    uint_to_sint_maybe,
    uint_to_uint_maybe,
)
from .reflective import has_refs, refl_cast, refl_cast_maybe
from .dispatch import CAST_TABLE, Converter, cast, cast_maybe
