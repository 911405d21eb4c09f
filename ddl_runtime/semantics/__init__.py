"""Kind descriptors and the kind-name parser."""

from .kinds import (
    DOUBLE,
    FLOAT,
    INTEGER,
    Kind,
    KindFamily,
    as_kind,
    kind_of,
    parse_kind,
    sint,
    uint,
)

__all__ = [
    'Kind',
    'KindFamily',
    'FLOAT',
    'DOUBLE',
    'INTEGER',
    'uint',
    'sint',
    'kind_of',
    'parse_kind',
    'as_kind',
]
