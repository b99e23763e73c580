"""
Tests for the source printer backend.

These tests verify that forms are rendered as readable Erlang-style
source, before and after the transform.

Tests cover:
    - Attributes (module, file, export, generic)
    - Rules and functions, guards, multiple clauses
    - Generators, quotes and bindings
    - Atom quoting and string escaping
    - Error markers and annotated mode
"""

from henshin.errors import ErrorKind
from henshin.examples import build_example_family_module
from henshin.expressions import (
    Atom,
    BinaryGenerator,
    Generator,
    Literal,
    Match,
    Opaque,
    Quote,
    TupleExpr,
    Var,
)
from henshin.model import (
    Attribute,
    Eof,
    ErrorMarker,
    ExportAttribute,
    FileAttribute,
    ModuleAttribute,
    NameArity,
)
from henshin.backends.source_printer import (
    SourceMode,
    format_expression,
    format_form,
    generate_source,
    save_source_file,
)
from henshin.transform import parse_transform


class TestAttributes:

    def test_module(self):
        assert format_form(ModuleAttribute("family", None, 1)) == "-module(family)."

    def test_parameterized_module(self):
        form = ModuleAttribute("family", ("A", "B"), 1)
        assert format_form(form) == "-module(family, [A, B])."

    def test_file(self):
        assert format_form(FileAttribute("src/a.erl", 3, 1)) == '-file("src/a.erl", 3).'

    def test_export(self):
        form = ExportAttribute((NameArity("henshin_rules", 0), NameArity("foo", 2)), 1)
        assert format_form(form) == "-export([henshin_rules/0, foo/2])."

    def test_generic(self):
        assert format_form(Attribute("vsn", 1, 2)) == "-vsn(1)."
        assert format_form(Attribute("author", "Ann", 2)) == '-author("Ann").'
        assert format_form(Attribute("flags", [True, None], 2)) == "-flags([true, undefined])."


class TestExpressions:

    def test_atom_quoting(self):
        assert format_expression(Atom("ok", 1)) == "ok"
        assert format_expression(Atom("Hello World", 1)) == "'Hello World'"
        assert format_expression(Atom("it's", 1)) == "'it\\'s'"

    def test_string_escaping(self):
        assert format_expression(Literal('say "hi"', 1)) == '"say \\"hi\\""'

    def test_generators(self):
        assert format_expression(Generator(Var("X", 1), Var("L", 1), 1)) == "X <- L"
        assert format_expression(BinaryGenerator(Var("X", 1), Var("B", 1), 1)) == "X <= B"

    def test_match_and_quote(self):
        expr = Match(Var("X", 1), Quote(TupleExpr((Atom("a", 1), Literal(1, 1)), 1), 1), 1)
        assert format_expression(expr) == "X = quote({a, 1})"

    def test_opaque(self):
        assert format_expression(Opaque(["x", 1], 1)) == '["x", 1]'


class TestWholeModule:

    def test_rules_render_with_turnstile(self):
        source = generate_source(build_example_family_module())
        assert "-module(family)." in source
        assert "ancestor(A, D) :-\n    parent(A, D);" in source
        assert "sibling(A, B) when A =/= B :-" in source
        assert "count(L) ->\n    length(L)." in source

    def test_transformed_module(self):
        source = generate_source(parse_transform(build_example_family_module()))
        assert ":-" not in source
        assert "-export([henshin_rules/0, ancestor/2, parent/2, sibling/2])." in source
        assert "henshin_rules() ->\n    [{ancestor, 2}, {parent, 2}, {sibling, 2}]." in source
        assert "{P, C} = henshin_runtime:generate(quote(family_db:parents()))" in source
        assert '-file("henshin_module", 1).' in source

    def test_error_markers_as_comments(self):
        marker = ErrorMarker("henshin_module", ErrorKind.BINARY_GENERATOR, 4)
        assert format_form(marker) == (
            "%% error: henshin_module: binary generators illegal in henshin rules"
        )

    def test_eof_not_rendered(self):
        assert generate_source([Eof(pos=3)]) == "\n"

    def test_annotated_mode(self):
        source = generate_source([ModuleAttribute("m", None, 7)], mode=SourceMode.ANNOTATED)
        assert source.splitlines() == ["%% pos 7", "-module(m)."]

    def test_save_source_file(self, tmp_path):
        path = tmp_path / "family.erl"
        forms = build_example_family_module()
        save_source_file(forms, str(path))
        assert path.read_text() == generate_source(forms)
