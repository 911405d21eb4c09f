"""Error catalog."""

from __future__ import annotations

import pytest

from ddl_runtime.internals import errors as er


def test_catalog_lookup():
    assert er.ERR.RE0001.exc is er.InvalidWidthError
    assert er.ERR["RE0005"].category is er.Category.RESULT
    with pytest.raises(AttributeError):
        er.ERR.RE9999


def test_raise_error_formats_message():
    with pytest.raises(er.InvalidWidthError) as exc:
        er.raise_error("RE0001", width=0)
    assert exc.value.code == "RE0001"
    assert str(exc.value) == "RE0001: bit width must be a positive integer, got 0"
    assert isinstance(exc.value, ValueError)


def test_missing_format_key_is_reported():
    with pytest.raises(KeyError, match="missing text key 'width'"):
        er.raise_error("RE0001")


def test_unknown_code():
    with pytest.raises(KeyError, match="unknown error code"):
        er.raise_error("RE9999")


def test_codes_unique_and_all_documented_exceptions_derive_from_base():
    for code, msg in er.REGISTRY.items():
        assert msg.code == code
        assert issubclass(msg.exc, er.DDLRuntimeError)
