"""
Tests for error kinds and diagnostic rendering.
"""

from henshin.errors import (
    ConfigError,
    ErrorKind,
    FormError,
    HenshinError,
    format_diagnostic,
    format_error,
    marker,
)
from henshin.model import ErrorMarker


def test_messages():
    assert format_error(ErrorKind.BINARY_GENERATOR) == "binary generators illegal in henshin rules"
    assert format_error(ErrorKind.PARAMETERIZED_MODULE) == (
        "parameterized modules are not supported by henshin"
    )


def test_marker():
    m = marker("henshin_module", ErrorKind.PARAMETERIZED_MODULE, 4)
    assert m == ErrorMarker(origin="henshin_module", descriptor=ErrorKind.PARAMETERIZED_MODULE, pos=4)


def test_format_diagnostic():
    m = marker("henshin_module", ErrorKind.BINARY_GENERATOR, 12)
    assert format_diagnostic(m, "src/family.erl") == (
        "src/family.erl:12: henshin_module: binary generators illegal in henshin rules"
    )


def test_format_foreign_diagnostic():
    m = ErrorMarker(origin="erl_parse", descriptor="syntax error", pos=3)
    assert format_diagnostic(m) == "nofile:3: erl_parse: syntax error"


def test_exception_hierarchy():
    assert issubclass(FormError, HenshinError)
    assert issubclass(ConfigError, HenshinError)
