"""
Errors and diagnostics.

Two kinds of problem exist:

    - Violations the transform detects in user code (ErrorKind). These
      never raise; they become ErrorMarker forms in the output.
    - Structural precondition violations (malformed forms, bad
      configuration). These raise HenshinError subclasses.
"""

from enum import Enum
from typing import Any

from henshin.model import ErrorMarker


class HenshinError(Exception):
    """Base class for errors raised by henshin."""
    pass


class FormError(HenshinError):
    """Raised when a form violates the structural precondition."""
    pass


class ConfigError(HenshinError):
    """Raised when transform options are invalid."""
    pass


class ErrorKind(Enum):
    """Violations reported as ErrorMarker forms."""

    BINARY_GENERATOR = "binary_generator"
    PARAMETERIZED_MODULE = "parameterized_module"


_MESSAGES = {
    ErrorKind.BINARY_GENERATOR: "binary generators illegal in henshin rules",
    ErrorKind.PARAMETERIZED_MODULE: "parameterized modules are not supported by henshin",
}


def format_error(kind: ErrorKind) -> str:
    """Human-readable message for an ErrorKind."""
    return _MESSAGES[kind]


def marker(origin: str, kind: ErrorKind, pos: int) -> ErrorMarker:
    """Build the ErrorMarker for `kind` at source position `pos`."""
    return ErrorMarker(origin=origin, descriptor=kind, pos=pos)


def format_diagnostic(error: ErrorMarker, file: str = "nofile") -> str:
    """
    Render an ErrorMarker the way a compiler reports it.

    Example:
        src/family.erl:12: henshin_module: binary generators illegal in henshin rules

    Markers not emitted by this package (their descriptor is not an
    ErrorKind) are rendered with the descriptor as-is.
    """
    descriptor: Any = error.descriptor
    if isinstance(descriptor, ErrorKind):
        message = format_error(descriptor)
    else:
        message = str(descriptor)
    return f"{file}:{error.pos}: {error.origin}: {message}"
