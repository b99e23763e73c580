"""
Tests for the Form Analyzer.

Tests verify that the analyzer correctly:
    - Counts forms per kind
    - Lists rule identities and flags duplicates
    - Counts generators and binary generators in rule bodies
    - Warns about missing/parameterized modules and reprocessed input
"""

from henshin.analyzer import analyze_forms
from henshin.examples import build_example_family_module
from henshin.expressions import Atom, Var
from henshin.model import Clause, ErrorMarker, ModuleAttribute, NameArity, Rule
from henshin.transform import parse_transform


def test_example_module_inventory():
    report = analyze_forms(build_example_family_module())

    assert report.module_name == "family"
    assert report.total_forms == 9
    assert report.forms_by_kind["rule"] == 3
    assert report.forms_by_kind["function"] == 1
    assert report.rules == [
        NameArity("ancestor", 2),
        NameArity("parent", 2),
        NameArity("sibling", 2),
    ]
    assert report.generators == 1
    assert report.binary_generators == 0
    assert not report.already_processed
    assert report.warnings == []


def test_errors_flagged():
    report = analyze_forms(build_example_family_module(with_errors=True))

    assert report.binary_generators == 1
    assert any("Parameterized module" in w for w in report.warnings)
    assert any("Binary generators" in w for w in report.warnings)


def test_duplicate_rules():
    clause = Clause((Var("X", 1),), None, (Atom("true", 1),), 1)
    forms = [
        ModuleAttribute("m", None, 1),
        Rule("foo", (clause,), 2),
        Rule("foo", (clause,), 3),
    ]
    report = analyze_forms(forms)

    assert report.rules == [NameArity("foo", 1)]
    assert report.duplicate_rules == {NameArity("foo", 1)}


def test_malformed_rule_reported_not_raised():
    forms = [ModuleAttribute("m", None, 1), Rule("empty", (), 2)]
    report = analyze_forms(forms)

    assert report.rules == []
    assert any("empty" in w for w in report.warnings)


def test_missing_module():
    report = analyze_forms([])
    assert report.module_name is None
    assert "No module declaration" in report.warnings


def test_existing_errors_counted():
    forms = [ErrorMarker("erl_parse", "bad", 1), ModuleAttribute("m", None, 2)]
    assert analyze_forms(forms).existing_errors == 1


def test_already_processed():
    out = parse_transform(build_example_family_module())
    report = analyze_forms(out)

    assert report.already_processed
    assert report.forms_by_kind.get("rule", 0) == 0
