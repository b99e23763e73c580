"""
Core Form Model Objects

Defines the top-level declarations ("forms") of one module, as produced
by an external parser and consumed by a downstream compiler.

These are pure data classes representing:
    - Attributes (module declaration, file markers, export lists, others)
    - Functions and rules (named sequences of clauses)
    - Error markers (form-shaped diagnostics)
    - End of file

ARCHITECTURAL RULE:
    Every form carries a `kind` tag (FormKind) and a source position
    `pos`. Transformations dispatch on the tag and either preserve the
    position or re-stamp it explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, NamedTuple, Optional, Tuple

from henshin.expressions import Expression


class FormKind(Enum):
    """Tag for every form variant."""

    ATTRIBUTE = "attribute"
    FUNCTION = "function"
    RULE = "rule"
    ERROR_MARKER = "error_marker"
    EOF = "eof"


class NameArity(NamedTuple):
    """
    The (name, parameter-count) identity of a rule or function.

    Tuple ordering gives the canonical sort: by name, then by arity.
    """

    name: str
    arity: int

    def __str__(self) -> str:
        return f"{self.name}/{self.arity}"


class Form:
    """Base class for all forms."""

    kind: ClassVar[FormKind]
    pos: int


@dataclass(frozen=True)
class Attribute(Form):
    """
    A generic attribute, e.g. `-author("someone").` or `-vsn(2).`

    `value` is plain data (str, int, float, bool, None, lists of those).
    Module declarations, file markers and export lists have their own
    variants below; they are still attributes.
    """

    kind: ClassVar[FormKind] = FormKind.ATTRIBUTE

    name: str
    value: Any
    pos: int

    def __post_init__(self):
        if self.name in _DEDICATED_ATTRIBUTES:
            raise ValueError(
                f"'{self.name}' attributes must use {_DEDICATED_ATTRIBUTES[self.name]}"
            )


_DEDICATED_ATTRIBUTES = {
    "module": "ModuleAttribute",
    "file": "FileAttribute",
    "export": "ExportAttribute",
}


@dataclass(frozen=True)
class ModuleAttribute(Form):
    """
    The module declaration.

    Properties:
        module:
            Module name
        parameters:
            None for a plain declaration `-module(m).`
            A tuple of variable names for a parameterized one
            `-module(m, [A, B]).`, which is not supported.
    """

    kind: ClassVar[FormKind] = FormKind.ATTRIBUTE
    name: ClassVar[str] = "module"

    module: str
    parameters: Optional[Tuple[str, ...]]
    pos: int

    @property
    def is_parameterized(self) -> bool:
        return self.parameters is not None


@dataclass(frozen=True)
class FileAttribute(Form):
    """
    A position marker `-file("src/foo.erl", 12).`

    Forms following it report diagnostics relative to `file`/`line`.
    """

    kind: ClassVar[FormKind] = FormKind.ATTRIBUTE
    name: ClassVar[str] = "file"

    file: str
    line: int
    pos: int


@dataclass(frozen=True)
class ExportAttribute(Form):
    """An export declaration `-export([foo/1, bar/0]).`"""

    kind: ClassVar[FormKind] = FormKind.ATTRIBUTE
    name: ClassVar[str] = "export"

    functions: Tuple[NameArity, ...]
    pos: int


@dataclass(frozen=True)
class Clause:
    """
    One pattern/guard/body alternative of a function or rule.

    Properties:
        patterns: parameter patterns; their count is the arity
        guard: optional guard expression
        body: ordered body expressions
    """

    patterns: Tuple[Expression, ...]
    guard: Optional[Expression]
    body: Tuple[Expression, ...]
    pos: int

    @property
    def arity(self) -> int:
        return len(self.patterns)


@dataclass(frozen=True)
class Function(Form):
    """An ordinary function declaration."""

    kind: ClassVar[FormKind] = FormKind.FUNCTION

    name: str
    clauses: Tuple[Clause, ...]
    pos: int

    @property
    def arity(self) -> int:
        return self.clauses[0].arity if self.clauses else 0


@dataclass(frozen=True)
class Rule(Form):
    """
    A rule declaration, e.g. `ancestor(X, Y) :- parent(X, Z), ...`

    Structurally a function. The transform converts every rule into a
    Function of the same name and clauses. Its identity is
    (name, arity); arity comes from the clauses and is expected to be
    uniform across them.
    """

    kind: ClassVar[FormKind] = FormKind.RULE

    name: str
    clauses: Tuple[Clause, ...]
    pos: int


@dataclass(frozen=True)
class ErrorMarker(Form):
    """
    A diagnostic in form position.

    Properties:
        origin: tag of the component that emitted it (routes formatting)
        descriptor: the error kind (an ErrorKind for markers emitted by
            this package, any plain value for pre-existing markers)
        pos: source position the diagnostic refers to

    Its presence makes the downstream compiler fail the build.
    """

    kind: ClassVar[FormKind] = FormKind.ERROR_MARKER

    origin: str
    descriptor: Any
    pos: int


@dataclass(frozen=True)
class Eof(Form):
    """End of file."""

    kind: ClassVar[FormKind] = FormKind.EOF

    pos: int
