"""
Expression System for henshin

Clause patterns, guards and bodies are Abstract Syntax Trees, never
strings. The tree is a closed tagged union: every variant carries an
explicit `kind` tag (ExprKind) and a mandatory source position `pos`.

Transformations dispatch on `kind`, never on the Python class.

ARCHITECTURAL RULE:
    Expressions are immutable values (frozen dataclasses).
    Rewriting an expression always builds a new node.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Tuple, Union


class ExprKind(Enum):
    """Tag for every expression variant."""

    VAR = "var"
    ATOM = "atom"
    LITERAL = "lit"
    TUPLE = "tuple"
    LIST = "list"
    BINARY_OP = "op"
    REMOTE = "remote"
    CALL = "call"
    MATCH = "match"
    GENERATOR = "generate"
    BINARY_GENERATOR = "b_generate"
    QUOTE = "quote"
    OPAQUE = "opaque"


class Expression(ABC):
    """
    Base class for all AST expressions.

    This class is structure only. It exists to give the union a common
    type; every concrete variant defines `kind` and `pos`.
    """

    kind: ClassVar[ExprKind]
    pos: int


@dataclass(frozen=True)
class Var(Expression):
    """A variable, e.g. `X` or `_Acc`."""

    kind: ClassVar[ExprKind] = ExprKind.VAR

    name: str
    pos: int


@dataclass(frozen=True)
class Atom(Expression):
    """A symbolic constant, e.g. `ok` or `'Hello World'`."""

    kind: ClassVar[ExprKind] = ExprKind.ATOM

    name: str
    pos: int


@dataclass(frozen=True)
class Literal(Expression):
    """
    A literal constant: integer, float or string.

    Atoms are NOT literals here; they have their own variant so the
    distinction survives serialization.
    """

    kind: ClassVar[ExprKind] = ExprKind.LITERAL

    value: Union[int, float, str]
    pos: int


@dataclass(frozen=True)
class TupleExpr(Expression):
    """A tuple, e.g. `{foo, 1}`."""

    kind: ClassVar[ExprKind] = ExprKind.TUPLE

    elements: Tuple[Expression, ...]
    pos: int


@dataclass(frozen=True)
class ListExpr(Expression):
    """A proper list, e.g. `[A, B, C]`."""

    kind: ClassVar[ExprKind] = ExprKind.LIST

    elements: Tuple[Expression, ...]
    pos: int


@dataclass(frozen=True)
class BinaryOp(Expression):
    """
    An infix operation, e.g. `X + 1` or `A =:= B`.

    The operator is kept as its source spelling. No operator table is
    enforced; this layer does not type-check expressions.
    """

    kind: ClassVar[ExprKind] = ExprKind.BINARY_OP

    operator: str
    left: Expression
    right: Expression
    pos: int


@dataclass(frozen=True)
class Remote(Expression):
    """A module-qualified function reference, e.g. `lists:map`."""

    kind: ClassVar[ExprKind] = ExprKind.REMOTE

    module: Expression
    function: Expression
    pos: int


@dataclass(frozen=True)
class Call(Expression):
    """
    A function application.

    `function` is usually an Atom (local call) or a Remote.
    """

    kind: ClassVar[ExprKind] = ExprKind.CALL

    function: Expression
    arguments: Tuple[Expression, ...]
    pos: int


@dataclass(frozen=True)
class Match(Expression):
    """A destructuring binding: `Pattern = Body`."""

    kind: ClassVar[ExprKind] = ExprKind.MATCH

    pattern: Expression
    body: Expression
    pos: int


@dataclass(frozen=True)
class Generator(Expression):
    """
    A comprehension-style generator: `Pattern <- Body`.

    Inside a rule body, binds Pattern to successive values produced by
    evaluating Body.
    """

    kind: ClassVar[ExprKind] = ExprKind.GENERATOR

    pattern: Expression
    body: Expression
    pos: int


@dataclass(frozen=True)
class BinaryGenerator(Expression):
    """
    A binary-pattern generator: `Pattern <= Body`.

    Illegal inside rule bodies; the transform neutralizes and flags it.
    """

    kind: ClassVar[ExprKind] = ExprKind.BINARY_GENERATOR

    pattern: Expression
    body: Expression
    pos: int


@dataclass(frozen=True)
class Quote(Expression):
    """
    An unevaluated expression captured verbatim as runtime data.

    Since expressions are immutable, holding the tree is already a
    snapshot. Its data form is `henshin.serialization.quote_snapshot`,
    which is what the runtime support hook receives.
    """

    kind: ClassVar[ExprKind] = ExprKind.QUOTE

    body: Expression
    pos: int


@dataclass(frozen=True)
class Opaque(Expression):
    """
    Any construct this package does not model (records, funs, case...).

    `term` is whatever plain data the external parser produced for it.
    It is passed through untouched.
    """

    kind: ClassVar[ExprKind] = ExprKind.OPAQUE

    term: Any
    pos: int
