"""
LLVM IR lowering for unchecked numeric casts.

Generated parsers that are compiled rather than interpreted emit the same
unchecked conversions as IR instructions. The instruction choice mirrors the
Python semantics in :mod:`ddl_runtime.casts.unchecked`:

- fixed -> fixed: ``trunc`` when narrowing, ``sext`` for signed sources and
  ``zext`` for unsigned sources when widening.
- fixed -> float/double: ``sitofp`` / ``uitofp``.
- float/double -> fixed: the binary64 fields are decoded and the significand
  shifted into a word of at least 64 bits, then negated and truncated, so
  every finite value wraps modulo 2^N. NaN and infinities give 0. LLVM's
  ``fptosi`` / ``fptoui`` would be poison outside the target range.
- float <-> double: ``fpext`` / ``fptrunc``.

Arbitrary-precision integers have no IR type and cannot be lowered.
"""
from __future__ import annotations

from llvmlite import ir

from ddl_runtime.internals.errors import raise_error
from ddl_runtime.numeric.fixed import FixedSInt, FixedUInt
from ddl_runtime.numeric.floats import Float32, Float64
from ddl_runtime.semantics.kinds import Kind, KindFamily, kind_of

_FLOATING = (KindFamily.FLOAT, KindFamily.DOUBLE)


def classify_kind_for_cast(kind: Kind) -> str:
    """Category used to pick the lowering: 'int', 'float', or 'unknown'."""
    if kind.is_fixed:
        return 'int'
    if kind.family in _FLOATING:
        return 'float'
    return 'unknown'


def cast_int_to_int(builder: ir.IRBuilder, value: ir.Value, source: Kind, target: Kind) -> ir.Value:
    if source.width == target.width:
        return value
    target_type = target.llvm_type()
    if source.width > target.width:
        return builder.trunc(value, target_type)
    if source.family == KindFamily.SINT:
        return builder.sext(value, target_type)
    return builder.zext(value, target_type)


def cast_int_to_float(builder: ir.IRBuilder, value: ir.Value, source: Kind, target: Kind) -> ir.Value:
    if source.family == KindFamily.SINT:
        return builder.sitofp(value, target.llvm_type())
    return builder.uitofp(value, target.llvm_type())


_I64 = ir.IntType(64)
_F64_EXP_BIAS = 1023
_F64_MANT_BITS = 52


def _i64(n: int) -> ir.Constant:
    return ir.Constant(_I64, n)


def _resize(builder: ir.IRBuilder, value: ir.Value, ty: ir.IntType) -> ir.Value:
    if value.type.width == ty.width:
        return value
    if value.type.width > ty.width:
        return builder.trunc(value, ty)
    return builder.zext(value, ty)


def cast_float_to_int(builder: ir.IRBuilder, value: ir.Value, source: Kind, target: Kind) -> ir.Value:
    """Truncate toward zero and keep the low ``target.width`` bits.

    Decodes the binary64 fields and shifts the significand in integer
    arithmetic, so every finite input wraps like the Python cast. NaN and
    infinities give 0.
    """
    if source.family == KindFamily.FLOAT:
        value = builder.fpext(value, ir.DoubleType())
    work = ir.IntType(max(target.width, 64))
    zero = ir.Constant(work, 0)

    bits = builder.bitcast(value, _I64)
    negative = builder.icmp_signed('<', bits, _i64(0))
    exponent = builder.and_(builder.lshr(bits, _i64(_F64_MANT_BITS)), _i64(0x7FF))
    significand = builder.or_(builder.and_(bits, _i64((1 << _F64_MANT_BITS) - 1)),
                              _i64(1 << _F64_MANT_BITS))

    # below 1.0 truncates to 0; all-ones exponent is NaN or infinity
    below_one = builder.icmp_unsigned('<', exponent, _i64(_F64_EXP_BIAS))
    special = builder.icmp_unsigned('==', exponent, _i64(0x7FF))
    vanishes = builder.or_(below_one, special)

    # value == significand * 2**shift
    shift = builder.sub(exponent, _i64(_F64_EXP_BIAS + _F64_MANT_BITS))
    shifts_left = builder.icmp_signed('>=', shift, _i64(0))

    left_fits = builder.and_(shifts_left, builder.icmp_signed('<', shift, _i64(work.width)))
    left_amount = _resize(builder, builder.select(left_fits, shift, _i64(0)), work)
    left = builder.shl(_resize(builder, significand, work), left_amount)
    left = builder.select(left_fits, left, zero)

    # right shifts that survive the final select are within 1..52
    no_right = builder.or_(shifts_left, vanishes)
    right_amount = builder.select(no_right, _i64(0), builder.neg(shift))
    right = _resize(builder, builder.lshr(significand, right_amount), work)

    magnitude = builder.select(shifts_left, left, right)
    signed = builder.select(negative, builder.neg(magnitude), magnitude)
    result = builder.select(vanishes, zero, signed)
    return _resize(builder, result, target.llvm_type())


def cast_float_to_float(builder: ir.IRBuilder, value: ir.Value, source: Kind, target: Kind) -> ir.Value:
    if source.family == target.family:
        return value
    if target.family == KindFamily.DOUBLE:
        return builder.fpext(value, target.llvm_type())
    return builder.fptrunc(value, target.llvm_type())


_CAST_OPS = {
    ('int', 'int'): cast_int_to_int,
    ('int', 'float'): cast_int_to_float,
    ('float', 'int'): cast_float_to_int,
    ('float', 'float'): cast_float_to_float,
}


def emit_cast(builder: ir.IRBuilder, value: ir.Value, source: Kind, target: Kind) -> ir.Value:
    """Emit the unchecked cast of ``value`` from ``source`` to ``target``.

    Raises:
        UnsupportedCastError: If either kind is the arbitrary-precision integer.
    """
    src_category = classify_kind_for_cast(source)
    dst_category = classify_kind_for_cast(target)
    if src_category == 'unknown':
        raise_error("RE0009", kind=str(source))
    if dst_category == 'unknown':
        raise_error("RE0009", kind=str(target))
    return _CAST_OPS[(src_category, dst_category)](builder, value, source, target)


def constant_of(value) -> ir.Constant:
    """LLVM constant holding a runtime value.

    Fixed-width values are emitted by bit pattern; floats by value.
    """
    if isinstance(value, (FixedUInt, FixedSInt)):
        return ir.Constant(kind_of(value).llvm_type(), value.rep)
    if isinstance(value, (Float32, Float64)):
        return ir.Constant(kind_of(value).llvm_type(), value.value)
    raise_error("RE0009", kind=str(kind_of(value)))
