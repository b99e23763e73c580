"""
Tests for henshin Core Form Model Objects

These tests verify:
    - Form creation and kind tags
    - Dedicated attribute variants
    - Arity and identity helpers
"""

import pytest
from henshin.expressions import Atom, Var
from henshin.model import (
    Attribute,
    Clause,
    Eof,
    ErrorMarker,
    ExportAttribute,
    FileAttribute,
    FormKind,
    Function,
    ModuleAttribute,
    NameArity,
    Rule,
)


class TestAttributes:
    """Test attribute forms."""

    def test_generic_attribute(self):
        attr = Attribute(name="author", value="someone", pos=2)
        assert attr.kind is FormKind.ATTRIBUTE
        assert attr.name == "author"

    @pytest.mark.parametrize("name", ["module", "file", "export"])
    def test_dedicated_names_rejected(self, name):
        """module/file/export attributes have their own variants."""
        with pytest.raises(ValueError):
            Attribute(name=name, value=None, pos=1)

    def test_module_attribute(self):
        plain = ModuleAttribute(module="m", parameters=None, pos=1)
        param = ModuleAttribute(module="m", parameters=("A",), pos=1)
        assert plain.kind is FormKind.ATTRIBUTE
        assert plain.name == "module"
        assert not plain.is_parameterized
        assert param.is_parameterized

    def test_empty_parameter_list_is_parameterized(self):
        """`-module(m, []).` still has a parameter list."""
        assert ModuleAttribute(module="m", parameters=(), pos=1).is_parameterized

    def test_file_attribute(self):
        f = FileAttribute(file="a.erl", line=7, pos=1)
        assert f.name == "file"
        assert f.kind is FormKind.ATTRIBUTE

    def test_export_attribute(self):
        e = ExportAttribute(functions=(NameArity("f", 1),), pos=1)
        assert e.name == "export"
        assert e.functions[0].arity == 1


class TestFunctionsAndRules:
    """Test function and rule forms."""

    def test_clause_arity(self):
        c = Clause((Var("A", 1), Var("B", 1)), None, (Atom("ok", 1),), 1)
        assert c.arity == 2

    def test_function_arity(self):
        c = Clause((Var("A", 1),), None, (Atom("ok", 1),), 1)
        f = Function(name="f", clauses=(c,), pos=1)
        assert f.kind is FormKind.FUNCTION
        assert f.arity == 1

    def test_rule_kind(self):
        r = Rule(name="r", clauses=(), pos=1)
        assert r.kind is FormKind.RULE
        assert r.kind is not FormKind.FUNCTION


class TestNameArity:
    """Test rule identities."""

    def test_ordering(self):
        """Sorted by name first, then arity."""
        items = [NameArity("foo", 2), NameArity("bar", 5), NameArity("foo", 1)]
        assert sorted(items) == [NameArity("bar", 5), NameArity("foo", 1), NameArity("foo", 2)]

    def test_str(self):
        assert str(NameArity("foo", 2)) == "foo/2"

    def test_equal_to_plain_tuple(self):
        assert NameArity("foo", 2) == ("foo", 2)


class TestOtherForms:

    def test_error_marker(self):
        m = ErrorMarker(origin="erl_lint", descriptor="undefined function", pos=4)
        assert m.kind is FormKind.ERROR_MARKER
        assert m.pos == 4

    def test_eof(self):
        assert Eof(pos=9).kind is FormKind.EOF
