"""
Transform options.

Every name the transform injects into a module is configurable here.
Defaults match the names the henshin runtime library expects.

Runtime support hook contract:
    Every plain generator `X <- Expr` in a rule body is rewritten to
    `X = support_module:support_function(Quote)`, where Quote carries the
    unevaluated Expr (see henshin.serialization.quote_snapshot for its
    data form). The hook must return the same enumerable sequence a
    native generator over Expr would have produced.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Iterator

import yaml

from henshin.errors import ConfigError


@dataclass(frozen=True)
class TransformOptions:
    """
    Properties:
        origin:
            Origin tag of emitted ErrorMarkers, also the file name of the
            position marker that introduces synthetic forms
        introspection_name:
            Name of the generated zero-argument function listing all rules
        support_module / support_function:
            Runtime support hook called by rewritten generators
        placeholder_prefix:
            Prefix of the fresh module name used when a module has no
            module declaration
    """

    origin: str = "henshin_module"
    introspection_name: str = "henshin_rules"
    support_module: str = "henshin_runtime"
    support_function: str = "generate"
    placeholder_prefix: str = "$henshin_anon"


DEFAULT_OPTIONS = TransformOptions()


def placeholder_names(prefix: str) -> Callable[[], str]:
    """
    Fresh-name generator: each call returns the next `prefix_N`.

    One generator is created per transform call, so no state is shared
    between invocations.
    """
    counter: Iterator[int] = itertools.count(1)
    return lambda: f"{prefix}_{next(counter)}"


def options_from_dict(d: Dict[str, Any] | None) -> TransformOptions:
    if not d:
        return TransformOptions()
    if not isinstance(d, dict):
        raise ConfigError(f"Options must be a mapping, got {type(d).__name__}")
    known = {f.name for f in fields(TransformOptions)}
    unknown = set(d) - known
    if unknown:
        raise ConfigError(f"Unknown options: {', '.join(sorted(unknown))}")
    for key, value in d.items():
        if not isinstance(value, str) or not value:
            raise ConfigError(f"Option '{key}' must be a non-empty string")
    return TransformOptions(**d)


def load_options(path: str) -> TransformOptions:
    """Load TransformOptions from a YAML file."""
    try:
        with open(path) as f:
            d = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return options_from_dict(d)
