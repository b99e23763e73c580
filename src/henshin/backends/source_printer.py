"""
Erlang-style source printer for henshin forms.

Renders a form list back to readable source text, mainly to inspect what
the transform produced.

Supports two modes:
    - PLAIN: forms only, error markers as comments
    - ANNOTATED: each form prefixed with a `%% pos N` comment
"""

import json
import re
from enum import Enum
from typing import Any, List, Sequence

from henshin.errors import ErrorKind, format_error
from henshin.expressions import ExprKind, Expression
from henshin.model import Clause, Form, FormKind


class SourceMode(Enum):
    """Rendering modes for source output."""
    PLAIN = "plain"
    ANNOTATED = "annotated"


_BARE_ATOM = re.compile(r"^[a-z][A-Za-z0-9_@]*$")

INDENT = "    "


def _format_atom(name: str) -> str:
    """Quote an atom unless it is a bare lowercase identifier."""
    if _BARE_ATOM.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _format_string(s: str) -> str:
    # JSON string escaping is a valid subset of Erlang string escaping
    return json.dumps(s)


def _format_term(value: Any) -> str:
    """Render plain attribute data (str, numbers, bools, None, lists)."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return _format_string(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format_term(v) for v in value) + "]"
    if isinstance(value, dict):
        pairs = ", ".join(f"{_format_term(k)} => {_format_term(v)}" for k, v in value.items())
        return "#{" + pairs + "}"
    return _format_string(str(value))


def format_expression(expr: Expression) -> str:
    """Render one expression."""
    k = expr.kind
    if k is ExprKind.VAR:
        return expr.name
    if k is ExprKind.ATOM:
        return _format_atom(expr.name)
    if k is ExprKind.LITERAL:
        if isinstance(expr.value, str):
            return _format_string(expr.value)
        return repr(expr.value)
    if k is ExprKind.TUPLE:
        return "{" + _join(expr.elements) + "}"
    if k is ExprKind.LIST:
        return "[" + _join(expr.elements) + "]"
    if k is ExprKind.BINARY_OP:
        return f"{format_expression(expr.left)} {expr.operator} {format_expression(expr.right)}"
    if k is ExprKind.REMOTE:
        return f"{format_expression(expr.module)}:{format_expression(expr.function)}"
    if k is ExprKind.CALL:
        return f"{format_expression(expr.function)}({_join(expr.arguments)})"
    if k is ExprKind.MATCH:
        return f"{format_expression(expr.pattern)} = {format_expression(expr.body)}"
    if k is ExprKind.GENERATOR:
        return f"{format_expression(expr.pattern)} <- {format_expression(expr.body)}"
    if k is ExprKind.BINARY_GENERATOR:
        return f"{format_expression(expr.pattern)} <= {format_expression(expr.body)}"
    if k is ExprKind.QUOTE:
        return f"quote({format_expression(expr.body)})"
    if k is ExprKind.OPAQUE:
        return _format_term(expr.term)
    return "?"


def _join(exprs: Sequence[Expression]) -> str:
    return ", ".join(format_expression(e) for e in exprs)


def _format_clause(name: str, clause: Clause, arrow: str) -> str:
    head = f"{_format_atom(name)}({_join(clause.patterns)})"
    if clause.guard is not None:
        head += f" when {format_expression(clause.guard)}"
    body = (",\n" + INDENT).join(format_expression(e) for e in clause.body)
    return f"{head} {arrow}\n{INDENT}{body}"


def format_form(form: Form) -> str:
    """Render one form, terminated by a full stop where the language needs one."""
    k = form.kind
    if k is FormKind.ATTRIBUTE:
        if form.name == "module":
            if form.parameters is not None:
                return f"-module({_format_atom(form.module)}, [{', '.join(form.parameters)}])."
            return f"-module({_format_atom(form.module)})."
        if form.name == "file":
            return f"-file({_format_string(form.file)}, {form.line})."
        if form.name == "export":
            entries = ", ".join(f"{_format_atom(na.name)}/{na.arity}" for na in form.functions)
            return f"-export([{entries}])."
        return f"-{_format_atom(form.name)}({_format_term(form.value)})."
    if k in (FormKind.FUNCTION, FormKind.RULE):
        arrow = "->" if k is FormKind.FUNCTION else ":-"
        clauses = ";\n".join(_format_clause(form.name, c, arrow) for c in form.clauses)
        return clauses + "."
    if k is FormKind.ERROR_MARKER:
        if isinstance(form.descriptor, ErrorKind):
            message = format_error(form.descriptor)
        else:
            message = str(form.descriptor)
        return f"%% error: {form.origin}: {message}"
    if k is FormKind.EOF:
        return ""
    return "%% ?"


def generate_source(forms: Sequence[Form], mode: SourceMode = SourceMode.PLAIN) -> str:
    """
    Render a whole form list as source text.

    Args:
        forms: forms to render, in order
        mode: rendering mode (PLAIN, ANNOTATED)

    Returns:
        Source text, one form per paragraph for functions and rules
    """
    lines: List[str] = []
    for form in forms:
        text = format_form(form)
        if not text:
            continue
        if mode == SourceMode.ANNOTATED:
            lines.append(f"%% pos {form.pos}")
        if form.kind in (FormKind.FUNCTION, FormKind.RULE):
            lines.append("")
            lines.append(text)
            lines.append("")
        else:
            lines.append(text)
    return "\n".join(lines) + "\n"


def save_source_file(forms: Sequence[Form], filename: str, mode: SourceMode = SourceMode.PLAIN) -> None:
    """
    Render and save to file.

    Args:
        forms: forms to render
        filename: output file path (.erl extension recommended)
        mode: rendering mode
    """
    source = generate_source(forms, mode=mode)
    with open(filename, 'w') as f:
        f.write(source)


__all__ = ["SourceMode", "format_expression", "format_form", "generate_source", "save_source_file"]
