"""Tests for the interface discovery patterns."""

from __future__ import annotations

import pytest

from goimpl.parsing.queries import SyntaxQueryEngine, render_type_parameters
from goimpl.parsing.treesitter import get_parser


def _tree(source: str):
    return get_parser().parse(source.encode()).tree


@pytest.fixture
def engine() -> SyntaxQueryEngine:
    return SyntaxQueryEngine()


class TestRenderTypeParameters:
    def test_empty_renders_empty_string(self) -> None:
        assert render_type_parameters([]) == ""

    def test_joins_with_comma_space(self) -> None:
        assert render_type_parameters(["T", "K comparable"]) == "[T, K comparable]"

    def test_single(self) -> None:
        assert render_type_parameters(["T"]) == "[T]"


class TestFindInterfaceDeclarations:
    def test_finds_interfaces_in_source_order(self, engine: SyntaxQueryEngine) -> None:
        tree = _tree(
            "package p\n"
            "type B interface{ b() }\n"
            "type S struct{}\n"
            "type A interface{ a() }\n"
        )

        decls = engine.find_interface_declarations(tree)

        names = [d.child_by_field_name("name").text.decode() for d in decls]
        assert names == ["B", "A"]
        assert all(d.type == "type_spec" for d in decls)

    def test_grouped_declaration_yields_each_spec(self, engine: SyntaxQueryEngine) -> None:
        tree = _tree(
            "package p\n"
            "type (\n"
            "\tGetter[T any] interface{ Get() T }\n"
            "\tPlain interface{ Do() }\n"
            "\tNotIface int\n"
            ")\n"
        )

        decls = engine.find_interface_declarations(tree)

        names = [d.child_by_field_name("name").text.decode() for d in decls]
        assert names == ["Getter", "Plain"]

    def test_no_interfaces(self, engine: SyntaxQueryEngine) -> None:
        tree = _tree("package p\ntype S struct{ x int }\nfunc f() {}\n")

        assert engine.find_interface_declarations(tree) == []

    def test_methods_are_not_interface_declarations(self, engine: SyntaxQueryEngine) -> None:
        tree = _tree(
            "package p\n"
            "type Foo struct{}\n"
            "\n"
            "func (f *Foo) Write(p []byte) (n int, err error) {\n"
            '\tpanic("not implemented")\n'
            "}\n"
        )

        assert engine.find_interface_declarations(tree) == []


class TestGenericNameAndParams:
    def test_generic_interface(self, engine: SyntaxQueryEngine, generic_file) -> None:
        tree = _tree(generic_file.read_text())
        decls = engine.find_interface_declarations(tree)

        found = engine.find_generic_name_and_params(decls[0])

        assert found is not None
        name, params = found
        assert name == "Store"
        assert params.type == "type_parameter_list"

    def test_non_generic_interface_returns_none(
        self, engine: SyntaxQueryEngine, generic_file
    ) -> None:
        tree = _tree(generic_file.read_text())
        closer = engine.find_interface_declarations(tree)[1]

        assert engine.find_generic_name_and_params(closer) is None

    def test_each_grouped_spec_matched_on_its_own(
        self, engine: SyntaxQueryEngine, generic_file
    ) -> None:
        tree = _tree(generic_file.read_text())
        getter, plain = engine.find_interface_declarations(tree)[2:]

        found = engine.find_generic_name_and_params(getter)

        assert found is not None
        assert found[0] == "Getter"
        assert engine.find_generic_name_and_params(plain) is None


class TestExtractTypeParameterNames:
    @pytest.mark.parametrize(
        ("params", "expected"),
        [
            ("[T any]", ["T"]),
            ("[K comparable, V any]", ["K", "V"]),
            ("[K, V any]", ["K", "V"]),
            ("[S ~[]E, E any]", ["S", "E"]),
        ],
    )
    def test_names_in_declaration_order(
        self, engine: SyntaxQueryEngine, params: str, expected: list[str]
    ) -> None:
        tree = _tree(f"package p\ntype I{params} interface{{ M() }}\n")
        decl = engine.find_interface_declarations(tree)[0]
        found = engine.find_generic_name_and_params(decl)
        assert found is not None

        names = engine.extract_type_parameter_names(found[1])

        assert names == expected
        assert render_type_parameters(names) == "[" + ", ".join(expected) + "]"
