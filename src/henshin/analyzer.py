"""
Form Analyzer: inventory and early warnings for a module's forms.

This module provides lightweight, read-only analysis of a form list:
    - Form counts per kind
    - Rule identities and generator usage
    - Pre-existing diagnostics
    - Warning flags for input the transform is not meant to see

IMPORTANT: This does NOT modify the forms and never raises for
malformed rules; it reports them instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from henshin.config import DEFAULT_OPTIONS, TransformOptions
from henshin.expressions import ExprKind
from henshin.model import Form, FormKind, NameArity
from henshin.transform import is_already_processed


@dataclass
class FormReport:
    """Inventory report for one module's forms."""

    module_name: str | None = None
    total_forms: int = 0
    forms_by_kind: Dict[str, int] = field(default_factory=dict)

    rules: List[NameArity] = field(default_factory=list)
    duplicate_rules: Set[NameArity] = field(default_factory=set)
    generators: int = 0
    binary_generators: int = 0

    existing_errors: int = 0
    already_processed: bool = False

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_forms(forms: Sequence[Form], options: TransformOptions = DEFAULT_OPTIONS) -> FormReport:
    """
    Inventory a form list before (or after) transforming it.

    Returns a FormReport with counts and warnings.
    """
    report = FormReport(total_forms=len(forms))
    seen: Set[NameArity] = set()

    for form in forms:
        kind = form.kind.value
        report.forms_by_kind[kind] = report.forms_by_kind.get(kind, 0) + 1

        if form.kind is FormKind.ATTRIBUTE and form.name == "module" and report.module_name is None:
            report.module_name = form.module
            if form.is_parameterized:
                report.add_warning(f"Parameterized module declaration at {form.pos}")

        elif form.kind is FormKind.ERROR_MARKER:
            report.existing_errors += 1

        elif form.kind is FormKind.RULE:
            arities = sorted({clause.arity for clause in form.clauses})
            if len(arities) != 1:
                report.add_warning(
                    f"Rule {form.name} at {form.pos} has no single arity: {arities}"
                )
                continue
            identity = NameArity(form.name, arities[0])
            if identity in seen:
                report.duplicate_rules.add(identity)
            seen.add(identity)
            for clause in form.clauses:
                for expr in clause.body:
                    if expr.kind is ExprKind.GENERATOR:
                        report.generators += 1
                    elif expr.kind is ExprKind.BINARY_GENERATOR:
                        report.binary_generators += 1

    report.rules = sorted(seen)
    report.already_processed = is_already_processed(forms, options)

    if report.module_name is None:
        report.add_warning("No module declaration")
    if report.duplicate_rules:
        report.add_warning(
            f"Duplicate rule declarations: {', '.join(str(na) for na in sorted(report.duplicate_rules))}"
        )
    if report.binary_generators:
        report.add_warning(f"Binary generators in rule bodies: {report.binary_generators}")
    if report.already_processed:
        report.add_warning(
            f"{options.introspection_name}/0 already defined: forms look already transformed"
        )

    return report
