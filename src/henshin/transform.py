"""
Rule transform: rewrites one module's forms before compilation.

Pipeline (each stage consumes the previous stage's result):

    1. analyze_module            locate the module declaration
    2. split_leading_attributes  header attributes vs body forms
    3. analyze_rules             every rule identity, sorted and unique
    4. transform_rules           rules become functions, generators
                                 become bindings
    5. assemble                  splice in markers, export list and the
                                 introspection function

The whole transform is a pure function of its input. Violations in the
user's code never raise: they are reported as ErrorMarker forms in the
output so one pass surfaces every problem.

PRECONDITION:
    The input has not already been processed by this transform. A
    UserWarning is issued when the introspection function is already
    present; the transform still runs unchanged.
"""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from henshin.config import DEFAULT_OPTIONS, TransformOptions, placeholder_names
from henshin.errors import ErrorKind, FormError, marker
from henshin.expressions import (
    Atom,
    BinaryGenerator,
    Call,
    ExprKind,
    Expression,
    Generator,
    ListExpr,
    Literal,
    Match,
    Quote,
    Remote,
    TupleExpr,
)
from henshin.model import (
    Clause,
    ErrorMarker,
    ExportAttribute,
    FileAttribute,
    Form,
    FormKind,
    Function,
    NameArity,
    Rule,
)

logger = logging.getLogger(__name__)

# Marker in effect when no -file attribute precedes the module declaration
DEFAULT_FILE_MARKER = FileAttribute(file="nofile", line=1, pos=0)

# Position stamped on every synthetic form
SYNTHETIC_POS = 1


# =========================================================================
# 1. MODULE ANALYZER
# =========================================================================

@dataclass
class ModuleAnalysis:
    """
    Result of scanning for the module declaration.

    Properties:
        file_marker: last -file marker seen before the declaration
        module_name: declared name, or a fresh placeholder if none
        prefix: forms up to and including the module declaration
        remainder: everything after the prefix
        errors: zero or one parameterized_module marker
    """

    file_marker: FileAttribute
    module_name: str
    prefix: List[Form]
    remainder: List[Form]
    errors: List[ErrorMarker]


def analyze_module(
    forms: Sequence[Form],
    origin: str = DEFAULT_OPTIONS.origin,
    fresh_name: Optional[Callable[[], str]] = None,
) -> ModuleAnalysis:
    """
    Scan from the start for the (at most one) module declaration.

    File markers and pre-existing error markers may precede it. Any other
    form ends the scan: the module has no declaration and gets a fresh
    placeholder name from `fresh_name`.
    """
    file_marker = DEFAULT_FILE_MARKER
    before: List[Form] = []

    for form in forms:
        if form.kind is FormKind.ATTRIBUTE:
            if form.name == "module":
                before.append(form)
                remainder = list(forms[len(before):])
                errors: List[ErrorMarker] = []
                if form.is_parameterized:
                    errors.append(marker(origin, ErrorKind.PARAMETERIZED_MODULE, form.pos))
                logger.debug("module %s found at %d", form.module, form.pos)
                return ModuleAnalysis(file_marker, form.module, before, remainder, errors)
            if form.name == "file":
                file_marker = form
                before.append(form)
                continue
            break
        elif form.kind is FormKind.ERROR_MARKER:
            before.append(form)
            continue
        break

    if fresh_name is None:
        fresh_name = placeholder_names(DEFAULT_OPTIONS.placeholder_prefix)
    name = fresh_name()
    logger.debug("no module declaration, using placeholder %s", name)
    return ModuleAnalysis(file_marker, name, before, list(forms[len(before):]), [])


# =========================================================================
# 2. ATTRIBUTE-RUN SPLITTER
# =========================================================================

def split_leading_attributes(
    forms: Sequence[Form], file_marker: FileAttribute
) -> Tuple[FileAttribute, List[Form], List[Form]]:
    """
    Split off the contiguous run of attributes at the front of `forms`.

    Attributes after the first non-attribute stay in the body, in order.
    """
    count = 0
    for form in forms:
        if form.kind is not FormKind.ATTRIBUTE:
            break
        count += 1
    return file_marker, list(forms[:count]), list(forms[count:])


# =========================================================================
# 3. RULE COLLECTOR
# =========================================================================

def rule_identity(rule: Rule) -> NameArity:
    """
    (name, arity) of a rule.

    Raises:
        FormError: the rule has no clauses, or clauses of differing arity
    """
    if not rule.clauses:
        raise FormError(f"Rule '{rule.name}' at {rule.pos} has no clauses")
    arities = {clause.arity for clause in rule.clauses}
    if len(arities) > 1:
        raise FormError(
            f"Rule '{rule.name}' at {rule.pos} has clauses of differing arity: "
            f"{sorted(arities)}"
        )
    return NameArity(rule.name, arities.pop())


def analyze_rules(forms: Sequence[Form]) -> List[NameArity]:
    """Every rule identity in `forms`, deduplicated, sorted by name then arity."""
    return sorted({rule_identity(form) for form in forms if form.kind is FormKind.RULE})


# =========================================================================
# 4. RULE TRANSFORMER
# =========================================================================

def transform_binary_generator(gen: BinaryGenerator) -> Match:
    """`P <= E` becomes the plain binding `P = E`."""
    return Match(pattern=gen.pattern, body=gen.body, pos=gen.pos)


def transform_generator(gen: Generator, options: TransformOptions = DEFAULT_OPTIONS) -> Match:
    """`P <- E` becomes `P = support_module:support_function(quote(E))`."""
    pos = gen.pos
    hook = Remote(
        module=Atom(options.support_module, pos),
        function=Atom(options.support_function, pos),
        pos=pos,
    )
    call = Call(function=hook, arguments=(Quote(body=gen.body, pos=pos),), pos=pos)
    return Match(pattern=gen.pattern, body=call, pos=pos)


def transform_clause(
    clause: Clause, options: TransformOptions = DEFAULT_OPTIONS
) -> Tuple[Clause, List[ErrorMarker]]:
    body: List[Expression] = []
    errors: List[ErrorMarker] = []
    for expr in clause.body:
        if expr.kind is ExprKind.BINARY_GENERATOR:
            body.append(transform_binary_generator(expr))
            errors.append(marker(options.origin, ErrorKind.BINARY_GENERATOR, expr.pos))
        elif expr.kind is ExprKind.GENERATOR:
            body.append(transform_generator(expr, options))
        else:
            body.append(expr)
    new_clause = Clause(
        patterns=clause.patterns,
        guard=clause.guard,
        body=tuple(body),
        pos=clause.pos,
    )
    return new_clause, errors


def transform_rule(
    rule: Rule, options: TransformOptions = DEFAULT_OPTIONS
) -> Tuple[Function, List[ErrorMarker]]:
    """
    Convert a rule into a function with the same name, clauses and position.

    Returns the function and the markers for every binary generator found,
    in clause/body order.
    """
    clauses: List[Clause] = []
    errors: List[ErrorMarker] = []
    for clause in rule.clauses:
        new_clause, clause_errors = transform_clause(clause, options)
        clauses.append(new_clause)
        errors.extend(clause_errors)
    function = Function(name=rule.name, clauses=tuple(clauses), pos=rule.pos)
    return function, errors


def transform_rules(
    forms: Sequence[Form], options: TransformOptions = DEFAULT_OPTIONS
) -> Tuple[List[Form], List[ErrorMarker]]:
    """
    Transform every rule in `forms`; other forms pass through unchanged.

    Returns the transformed forms and all markers emitted. Each rule's
    markers are also placed in the forms right after its function, so the
    first list is ready to emit as-is.
    """
    out: List[Form] = []
    errors: List[ErrorMarker] = []
    for form in forms:
        if form.kind is FormKind.RULE:
            function, rule_errors = transform_rule(form, options)
            out.append(function)
            out.extend(rule_errors)
            errors.extend(rule_errors)
        else:
            out.append(form)
    return out, errors


# =========================================================================
# 5. FORM ASSEMBLER
# =========================================================================

def file_form(file: str) -> FileAttribute:
    """Position marker pointing at line 1 of `file`."""
    return FileAttribute(file=file, line=1, pos=SYNTHETIC_POS)


def export_form(rules: Sequence[NameArity], options: TransformOptions = DEFAULT_OPTIONS) -> ExportAttribute:
    """Export the introspection function and every rule."""
    introspection = NameArity(options.introspection_name, 0)
    return ExportAttribute(functions=(introspection,) + tuple(rules), pos=SYNTHETIC_POS)


def introspection_form(rules: Sequence[NameArity], options: TransformOptions = DEFAULT_OPTIONS) -> Function:
    """`henshin_rules() -> [{Name, Arity}, ...].`"""
    pos = SYNTHETIC_POS
    entries = tuple(
        TupleExpr(elements=(Atom(name, pos), Literal(arity, pos)), pos=pos)
        for name, arity in rules
    )
    clause = Clause(patterns=(), guard=None, body=(ListExpr(elements=entries, pos=pos),), pos=pos)
    return Function(name=options.introspection_name, clauses=(clause,), pos=pos)


def assemble(
    module: ModuleAnalysis,
    file_marker: FileAttribute,
    attributes: Sequence[Form],
    rules: Sequence[NameArity],
    body: Sequence[Form],
    options: TransformOptions = DEFAULT_OPTIONS,
) -> List[Form]:
    """
    Compose the output forms.

    Each group of synthetic forms is introduced by a marker naming this
    transform and followed by one restoring the source file, so later
    diagnostics against the real forms keep their locations.
    """
    this_file = file_form(options.origin)
    return (
        list(module.prefix)
        + list(module.errors)
        + [this_file]
        + [export_form(rules, options)]
        + [module.file_marker]
        + list(attributes)
        + [this_file]
        + [introspection_form(rules, options)]
        + [file_marker]
        + list(body)
    )


def is_already_processed(forms: Sequence[Form], options: TransformOptions = DEFAULT_OPTIONS) -> bool:
    """True if `forms` already define the introspection function."""
    return any(
        form.kind is FormKind.FUNCTION
        and form.name == options.introspection_name
        and form.arity == 0
        for form in forms
    )


def parse_transform(forms: Sequence[Form], options: TransformOptions = DEFAULT_OPTIONS) -> List[Form]:
    """
    Rewrite one module's forms.

    Args:
        forms: the module's forms, in source order
        options: names injected into the module

    Returns:
        The rewritten forms. Detected violations appear as ErrorMarker
        forms; nothing is raised for them.

    Raises:
        FormError: a rule is structurally malformed
    """
    if is_already_processed(forms, options):
        warnings.warn(
            f"Forms already define {options.introspection_name}/0; "
            "they appear to have been transformed before",
            UserWarning,
        )

    module = analyze_module(forms, options.origin, placeholder_names(options.placeholder_prefix))
    file_marker, attributes, rest = split_leading_attributes(module.remainder, module.file_marker)
    rules = analyze_rules(forms)
    body, rule_errors = transform_rules(rest, options)

    logger.debug(
        "module %s: %d rule(s), %d error marker(s)",
        module.module_name,
        len(rules),
        len(module.errors) + len(rule_errors),
    )
    return assemble(module, file_marker, attributes, rules, body, options)
