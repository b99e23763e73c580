"""
henshin: rule transform

Rewrites one module's list of top-level forms before compilation:

    - every rule declaration becomes an ordinary function
    - generators in rule bodies become bindings to a runtime support call
    - an export list and an introspection function (henshin_rules/0)
      enumerating every rule by name and arity are spliced in

Violations (parameterized modules, binary generators in rules) are
reported as error-marker forms, never raised.

Quick Start:
    from henshin import parse_transform
    from henshin.serialization import forms_from_yaml

    forms = parse_transform(forms_from_yaml(text))
"""

__version__ = "0.1.0"

from .config import TransformOptions, load_options
from .errors import ConfigError, ErrorKind, FormError, HenshinError, format_error
from .model import NameArity
from .transform import parse_transform

__all__ = [
    "__version__",
    "parse_transform",
    "TransformOptions",
    "load_options",
    "NameArity",
    "ErrorKind",
    "format_error",
    "HenshinError",
    "FormError",
    "ConfigError",
]
