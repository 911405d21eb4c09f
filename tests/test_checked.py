"""Checked casts: absent instead of lossy."""

from __future__ import annotations

import logging
import math

import pytest

from ddl_runtime.casts import checked as ck
from ddl_runtime.numeric.fixed import FixedSInt, FixedUInt
from ddl_runtime.numeric.floats import Float32, Float64
from ddl_runtime.numeric.integer import BigInt
from ddl_runtime.numeric.maybe import Maybe


class TestUIntToUInt:
    def test_widening_always_present(self):
        assert ck.uint_to_uint_maybe(FixedUInt(8, 255), 8) == Maybe.present(FixedUInt(8, 255))
        assert ck.uint_to_uint_maybe(FixedUInt(8, 255), 9).unwrap() == FixedUInt(9, 255)

    @pytest.mark.parametrize(
        "in_w, value, out_w, ok",
        [
            (16, 255, 8, True),
            (16, 256, 8, False),
            (16, 0, 1, True),
            (16, 1, 1, True),
            (16, 2, 1, False),
            (70, (1 << 64) - 1, 64, True),
            (70, 1 << 64, 64, False),
        ],
    )
    def test_narrowing_bounds(self, in_w, value, out_w, ok):
        result = ck.uint_to_uint_maybe(FixedUInt(in_w, value), out_w)
        assert result.is_present is ok
        if ok:
            assert result.unwrap() == FixedUInt(out_w, value)


class TestSIntToSInt:
    def test_widening_always_present(self):
        assert ck.sint_to_sint_maybe(FixedSInt(8, -128), 16).unwrap() == FixedSInt(16, -128)

    @pytest.mark.parametrize(
        "value, ok",
        [(127, True), (128, False), (-128, True), (-129, False), (0, True)],
    )
    def test_narrowing_bounds_inclusive(self, value, ok):
        assert ck.sint_to_sint_maybe(FixedSInt(16, value), 8).is_present is ok


class TestUIntToSInt:
    def test_strictly_wider_always_present(self):
        assert ck.uint_to_sint_maybe(FixedUInt(8, 255), 9).unwrap() == FixedSInt(9, 255)

    @pytest.mark.parametrize(
        "in_w, value, out_w, ok",
        [
            (8, 127, 8, True),
            (8, 128, 8, False),
            (16, 127, 8, True),
            (16, 128, 8, False),
            (16, 0x7FFF, 16, True),
            (16, 0x8000, 16, False),
        ],
    )
    def test_upper_bound_only(self, in_w, value, out_w, ok):
        assert ck.uint_to_sint_maybe(FixedUInt(in_w, value), out_w).is_present is ok


class TestSIntToUInt:
    @pytest.mark.parametrize("out_w", [1, 8, 16, 64])
    def test_negative_rejected(self, out_w):
        assert ck.sint_to_uint_maybe(FixedSInt(8, -1), out_w).is_absent

    def test_widening_present(self):
        assert ck.sint_to_uint_maybe(FixedSInt(8, 127), 8).unwrap() == FixedUInt(8, 127)
        assert ck.sint_to_uint_maybe(FixedSInt(8, 127), 64).unwrap() == FixedUInt(64, 127)

    @pytest.mark.parametrize("value, ok", [(255, True), (256, False), (0, True)])
    def test_narrowing(self, value, ok):
        assert ck.sint_to_uint_maybe(FixedSInt(16, value), 8).is_present is ok


class TestFloatToFixed:
    @pytest.mark.parametrize(
        "value, ok",
        [(255.0, True), (256.0, False), (0.0, True), (-0.0, True), (1.5, False),
         (-1.0, False), (math.nan, False), (math.inf, False)],
    )
    def test_double_to_uint(self, value, ok):
        assert ck.double_to_uint_maybe(Float64(value), 8).is_present is ok

    @pytest.mark.parametrize(
        "value, ok",
        [(-128.0, True), (127.0, True), (128.0, False), (-129.0, False),
         (-0.25, False), (-math.inf, False)],
    )
    def test_float_to_sint(self, value, ok):
        assert ck.float_to_sint_maybe(Float32(value), 8).is_present is ok

    def test_present_value(self):
        assert ck.float_to_uint_maybe(Float32(42.0), 8).unwrap() == FixedUInt(8, 42)
        assert ck.double_to_sint_maybe(Float64(-7.0), 4).unwrap() == FixedSInt(4, -7)


class TestToFloat:
    def test_exact_values_present(self):
        assert ck.uint_to_float_maybe(FixedUInt(32, 1 << 24)).unwrap().value == float(1 << 24)
        assert ck.sint_to_double_maybe(FixedSInt(64, -(1 << 53))).is_present

    def test_inexact_values_absent(self):
        assert ck.uint_to_float_maybe(FixedUInt(32, (1 << 24) + 1)).is_absent
        assert ck.sint_to_float_maybe(FixedSInt(32, -((1 << 24) + 1))).is_absent
        assert ck.uint_to_double_maybe(FixedUInt(64, (1 << 53) + 1)).is_absent

    def test_overflow_absent(self):
        assert ck.uint_to_float_maybe(FixedUInt(200, 1 << 199)).is_absent
        assert ck.integer_to_double_maybe(BigInt(1 << 1100)).is_absent

    def test_integer_sources(self):
        assert ck.integer_to_float_maybe(BigInt(1 << 100)).is_present
        assert ck.integer_to_float_maybe(BigInt((1 << 100) + 1)).is_absent
        assert ck.integer_to_double_maybe(BigInt(-(1 << 53))).is_present


class TestFloatDouble:
    def test_float_to_double_always_present(self):
        assert ck.float_to_double_maybe(Float32(0.1)).is_present

    def test_double_to_float(self):
        assert ck.double_to_float_maybe(Float64(0.5)).unwrap().value == 0.5
        assert ck.double_to_float_maybe(Float64(0.1)).is_absent
        assert ck.double_to_float_maybe(Float64(1e300)).is_absent

    def test_non_finite_pass_through(self):
        assert ck.double_to_float_maybe(Float64(math.inf)).unwrap().value == math.inf
        assert ck.double_to_float_maybe(Float64(math.nan)).unwrap().is_nan


class TestIntegers:
    def test_fixed_to_integer_always_present(self):
        assert ck.uint_to_integer_maybe(FixedUInt(8, 255)).unwrap() == 255
        assert ck.sint_to_integer_maybe(FixedSInt(8, -1)).unwrap() == -1

    def test_float_to_integer(self):
        assert ck.double_to_integer_maybe(Float64(-9.9)).unwrap() == -9
        assert ck.float_to_integer_maybe(Float32(math.nan)).is_absent
        assert ck.double_to_integer_maybe(Float64(-math.inf)).is_absent

    @pytest.mark.parametrize(
        "value, width, ok",
        [
            (255, 8, True),
            (256, 8, False),
            (0, 1, True),
            (-1, 64, False),
            ((1 << 100) - 1, 100, True),
            (1 << 100, 100, False),
        ],
    )
    def test_integer_to_uint(self, value, width, ok):
        result = ck.integer_to_uint_maybe(BigInt(value), width)
        assert result.is_present is ok
        if ok:
            assert result.unwrap().value == value

    @pytest.mark.parametrize(
        "value, width, ok",
        [
            (127, 8, True),
            (128, 8, False),
            (-128, 8, True),
            (-129, 8, False),
            ((1 << 63) - 1, 64, True),
            (-(1 << 63), 64, True),
            (1 << 63, 64, False),
            (1 << 64, 64, False),
            (1 << 64, 32, False),
            (1 << 64, 65, False),        # one past the 65-bit maximum
            ((1 << 64) - 1, 65, True),
            (-(1 << 64), 65, True),      # 65-bit minimum
            (-(1 << 64) - 1, 65, False),
            (1 << 64, 66, True),
            (1 << 64, 128, True),
            (-(1 << 127), 128, True),
            (1 << 127, 128, False),
        ],
    )
    def test_integer_to_sint(self, value, width, ok):
        result = ck.integer_to_sint_maybe(BigInt(value), width)
        assert result.is_present is ok
        if ok:
            assert result.unwrap() == FixedSInt(width, value)

    def test_integer_to_sint_leaves_source_intact(self):
        x = BigInt(1 << 90)
        assert ck.integer_to_sint_maybe(x, 100).is_present
        assert ck.integer_to_sint_maybe(x, 80).is_absent
        assert not x.released
        assert x == 1 << 90

    def test_integer_to_sint_native_bits_override(self):
        # a 16-bit native word sends 1 << 20 down the round-trip path
        assert ck.integer_to_sint_maybe(BigInt(1 << 20), 32, native_bits=16).is_present
        assert ck.integer_to_sint_maybe(BigInt(1 << 20), 16, native_bits=16).is_absent
        assert ck.integer_to_sint_maybe(BigInt(1 << 31), 32, native_bits=16).is_absent

    def test_slow_path_releases_scratch(self, monkeypatch):
        made = []
        original = BigInt.from_bits.__func__

        def tracking(cls, bits, width, signed):
            scratch = original(cls, bits, width, signed)
            made.append(scratch)
            return scratch

        monkeypatch.setattr(BigInt, "from_bits", classmethod(tracking))
        assert ck.integer_to_sint_maybe(BigInt(1 << 64), 65).is_absent
        assert ck.integer_to_sint_maybe(BigInt(1 << 64), 66).is_present
        assert len(made) == 2
        assert all(scratch.released for scratch in made)


def test_absent_results_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="ddl_runtime.casts.checked"):
        ck.uint_to_uint_maybe(FixedUInt(16, 300), 8)
    assert "does not fit 8 bits" in caplog.text
