"""
Serialization helpers for henshin forms and expressions.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This is the boundary with the external parser (forms in) and the
downstream compiler (forms out). The structure is kept stable and
explicit: every node is a dict whose "type" key is the variant tag.

Quote snapshots:
    quote_snapshot(q) is the plain-data form of a quoted expression; it is
    exactly expr_to_dict(q.body). The runtime support hook interprets it.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

import yaml

from henshin.config import DEFAULT_OPTIONS
from henshin.errors import ErrorKind
from henshin.expressions import (
    Atom,
    BinaryGenerator,
    BinaryOp,
    Call,
    ExprKind,
    Expression,
    Generator,
    ListExpr,
    Literal,
    Match,
    Opaque,
    Quote,
    Remote,
    TupleExpr,
    Var,
)
from henshin.model import (
    Attribute,
    Clause,
    Eof,
    ErrorMarker,
    ExportAttribute,
    FileAttribute,
    Form,
    FormKind,
    Function,
    ModuleAttribute,
    NameArity,
    Rule,
)


def _require_mapping(d: Any, what: str) -> None:
    if not isinstance(d, dict):
        raise TypeError(f"Expected a mapping for {what}, got {type(d).__name__}")


def _require_list(items: Any, what: str) -> None:
    if not isinstance(items, list):
        raise TypeError(f"Expected a list for {what}, got {type(items).__name__}")


def expr_to_dict(expr: Expression | None) -> Any:
    if expr is None:
        return None
    k = expr.kind
    d: Dict[str, Any] = {"type": k.value, "pos": expr.pos}
    if k in (ExprKind.VAR, ExprKind.ATOM):
        d["name"] = expr.name
    elif k is ExprKind.LITERAL:
        d["value"] = expr.value
    elif k in (ExprKind.TUPLE, ExprKind.LIST):
        d["elements"] = [expr_to_dict(e) for e in expr.elements]
    elif k is ExprKind.BINARY_OP:
        d["operator"] = expr.operator
        d["left"] = expr_to_dict(expr.left)
        d["right"] = expr_to_dict(expr.right)
    elif k is ExprKind.REMOTE:
        d["module"] = expr_to_dict(expr.module)
        d["function"] = expr_to_dict(expr.function)
    elif k is ExprKind.CALL:
        d["function"] = expr_to_dict(expr.function)
        d["arguments"] = [expr_to_dict(a) for a in expr.arguments]
    elif k in (ExprKind.MATCH, ExprKind.GENERATOR, ExprKind.BINARY_GENERATOR):
        d["pattern"] = expr_to_dict(expr.pattern)
        d["body"] = expr_to_dict(expr.body)
    elif k is ExprKind.QUOTE:
        d["body"] = expr_to_dict(expr.body)
    elif k is ExprKind.OPAQUE:
        d["term"] = expr.term
    else:
        raise TypeError(f"Unsupported Expression type: {type(expr)}")
    return d


def expr_from_dict(d: Any) -> Expression | None:
    if d is None:
        return None
    _require_mapping(d, "expression")
    t = d.get("type")
    pos = d.get("pos", 0)
    if t == "var":
        return Var(d["name"], pos)
    if t == "atom":
        return Atom(d["name"], pos)
    if t == "lit":
        return Literal(d["value"], pos)
    if t == "tuple":
        return TupleExpr(_exprs(d.get("elements", [])), pos)
    if t == "list":
        return ListExpr(_exprs(d.get("elements", [])), pos)
    if t == "op":
        return BinaryOp(d["operator"], expr_from_dict(d["left"]), expr_from_dict(d["right"]), pos)
    if t == "remote":
        return Remote(expr_from_dict(d["module"]), expr_from_dict(d["function"]), pos)
    if t == "call":
        return Call(expr_from_dict(d["function"]), _exprs(d.get("arguments", [])), pos)
    if t == "match":
        return Match(expr_from_dict(d["pattern"]), expr_from_dict(d["body"]), pos)
    if t == "generate":
        return Generator(expr_from_dict(d["pattern"]), expr_from_dict(d["body"]), pos)
    if t == "b_generate":
        return BinaryGenerator(expr_from_dict(d["pattern"]), expr_from_dict(d["body"]), pos)
    if t == "quote":
        return Quote(expr_from_dict(d["body"]), pos)
    if t == "opaque":
        return Opaque(d.get("term"), pos)
    raise TypeError(f"Unsupported expression dict type: {t}")


def _exprs(items: Sequence[Any]) -> tuple:
    _require_list(items, "expression list")
    return tuple(expr_from_dict(item) for item in items)


def quote_snapshot(quote: Quote) -> Dict[str, Any]:
    """Plain-data snapshot of a quoted expression, as passed to the runtime hook."""
    return expr_to_dict(quote.body)


def clause_to_dict(c: Clause) -> Dict[str, Any]:
    return {
        "patterns": [expr_to_dict(p) for p in c.patterns],
        "guard": expr_to_dict(c.guard),
        "body": [expr_to_dict(e) for e in c.body],
        "pos": c.pos,
    }


def clause_from_dict(d: Dict[str, Any]) -> Clause:
    _require_mapping(d, "clause")
    return Clause(
        patterns=_exprs(d.get("patterns", [])),
        guard=expr_from_dict(d.get("guard")),
        body=_exprs(d.get("body", [])),
        pos=d.get("pos", 0),
    )


def _descriptor_to_data(descriptor: Any) -> Any:
    if isinstance(descriptor, ErrorKind):
        return descriptor.value
    return descriptor


def _descriptor_from_data(value: Any, origin: str, own_origin: str) -> Any:
    # Only markers this package emitted carry an ErrorKind
    if origin != own_origin:
        return value
    try:
        return ErrorKind(value)
    except ValueError:
        return value


def form_to_dict(f: Form) -> Dict[str, Any]:
    k = f.kind
    if k is FormKind.ATTRIBUTE:
        d: Dict[str, Any] = {"type": "attribute", "name": f.name, "pos": f.pos}
        if f.name == "module":
            d["module"] = f.module
            d["parameters"] = list(f.parameters) if f.parameters is not None else None
        elif f.name == "file":
            d["file"] = f.file
            d["line"] = f.line
        elif f.name == "export":
            d["functions"] = [[na.name, na.arity] for na in f.functions]
        else:
            d["value"] = f.value
        return d
    if k in (FormKind.FUNCTION, FormKind.RULE):
        return {
            "type": k.value,
            "name": f.name,
            "clauses": [clause_to_dict(c) for c in f.clauses],
            "pos": f.pos,
        }
    if k is FormKind.ERROR_MARKER:
        return {
            "type": "error_marker",
            "origin": f.origin,
            "descriptor": _descriptor_to_data(f.descriptor),
            "pos": f.pos,
        }
    if k is FormKind.EOF:
        return {"type": "eof", "pos": f.pos}
    raise TypeError(f"Unsupported Form type: {type(f)}")


def form_from_dict(d: Dict[str, Any], origin: str = DEFAULT_OPTIONS.origin) -> Form:
    """
    Build a form from its dict representation.

    `origin` is the tag of this transform's own error markers; descriptors
    of markers from any other origin are kept verbatim.
    """
    _require_mapping(d, "form")
    t = d.get("type")
    pos = d.get("pos", 0)
    if t == "attribute":
        name = d["name"]
        if name == "module":
            params = d.get("parameters")
            return ModuleAttribute(
                module=d["module"],
                parameters=tuple(params) if params is not None else None,
                pos=pos,
            )
        if name == "file":
            return FileAttribute(file=d["file"], line=d.get("line", 1), pos=pos)
        if name == "export":
            functions = tuple(NameArity(n, a) for n, a in d.get("functions", []))
            return ExportAttribute(functions=functions, pos=pos)
        return Attribute(name=name, value=d.get("value"), pos=pos)
    if t == "function":
        return Function(name=d["name"], clauses=_clauses(d), pos=pos)
    if t == "rule":
        return Rule(name=d["name"], clauses=_clauses(d), pos=pos)
    if t == "error_marker":
        return ErrorMarker(
            origin=d["origin"],
            descriptor=_descriptor_from_data(d.get("descriptor"), d["origin"], origin),
            pos=pos,
        )
    if t == "eof":
        return Eof(pos=pos)
    raise TypeError(f"Unsupported form dict type: {t}")


def _clauses(d: Dict[str, Any]) -> tuple:
    clauses = d.get("clauses", [])
    _require_list(clauses, "clause list")
    return tuple(clause_from_dict(c) for c in clauses)


def forms_to_dict(forms: Sequence[Form]) -> List[Dict[str, Any]]:
    return [form_to_dict(f) for f in forms]


def forms_from_dict(
    items: Sequence[Dict[str, Any]] | None, origin: str = DEFAULT_OPTIONS.origin
) -> List[Form]:
    if items is None:
        return []
    _require_list(items, "form list")
    return [form_from_dict(d, origin) for d in items]


def forms_to_json(forms: Sequence[Form]) -> str:
    return json.dumps(forms_to_dict(forms), sort_keys=True)


def forms_from_json(s: str, origin: str = DEFAULT_OPTIONS.origin) -> List[Form]:
    d = json.loads(s)
    return forms_from_dict(d, origin)


def forms_to_yaml(forms: Sequence[Form]) -> str:
    return yaml.safe_dump(forms_to_dict(forms))


def forms_from_yaml(s: str, origin: str = DEFAULT_OPTIONS.origin) -> List[Form]:
    d = yaml.safe_load(s)
    return forms_from_dict(d, origin)
