"""
AST Test Suite
==============

Tests for AST node semantics, the visitor base class and the tree
printer.
"""

import dataclasses

import pytest
from ranni.errors import SourceLocation
from ranni.syntax.parser import parse_source
from ranni.syntax.ast import (
    ASTPrinter,
    ASTVisitor,
    Identifier,
    IntLiteral,
    FloatLiteral,
    Lookup,
    Record,
    BodyBlock,
)


def render(source: str) -> str:
    return ASTPrinter().print(parse_source(source))


# =============================================================================
# Node Semantics
# =============================================================================

class TestNodes:
    """Equality, immutability and repr of nodes."""

    def test_location_ignored_in_equality(self):
        a = IntLiteral(1, location=SourceLocation("a.rni", 1, 1))
        b = IntLiteral(1, location=SourceLocation("b.rni", 9, 9))
        assert a == b

    def test_location_hidden_from_repr(self):
        node = IntLiteral(1, location=SourceLocation("a.rni", 1, 1))
        assert repr(node) == "IntLiteral(value=1)"

    def test_location_defaults_to_none(self):
        assert Lookup(Identifier("x")).location is None

    def test_nodes_are_frozen(self):
        node = IntLiteral(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.value = 2

    def test_different_variants_not_equal(self):
        assert IntLiteral(1) != FloatLiteral(1.0)

    def test_children_are_tuples(self):
        tree = parse_source("(1 2 x = 3)")
        assert isinstance(tree.positional, tuple)
        assert isinstance(tree.named, tuple)

    def test_nodes_hashable(self):
        tree = parse_source("(1 2)")
        assert hash(tree) == hash(Record((IntLiteral(1), IntLiteral(2))))

    def test_repr_dump(self):
        tree = parse_source("let x = 5 x")
        assert repr(tree) == (
            "Let(assign=Assign(name=Identifier(name='x'), hint=None, "
            "value=IntLiteral(value=5)), "
            "rest=Lookup(ident=Identifier(name='x')), qualifier=None)"
        )


# =============================================================================
# Visitor Tests
# =============================================================================

class LookupCollector(ASTVisitor):
    def __init__(self):
        self.names = []

    def visit_Lookup(self, node):
        self.names.append(node.ident.name)


class IntSummer(ASTVisitor):
    def __init__(self):
        self.total = 0

    def visit_IntLiteral(self, node):
        self.total += node.value


class TestVisitor:
    """ASTVisitor dispatch and generic traversal."""

    def test_collects_in_source_order(self):
        collector = LookupCollector()
        collector.visit(parse_source("f(a b) + c"))
        assert collector.names == ["a", "b", "c"]

    def test_walks_every_form(self):
        source = (
            "let x: T = 1 "
            "pragma p = 2 "
            "struct { fn (y z = 3) R => 4 } + (5 n = 6)"
        )
        summer = IntSummer()
        summer.visit(parse_source(source))
        assert summer.total == 21

    def test_visit_returns_handler_result(self):
        class Doubler(ASTVisitor):
            def visit_IntLiteral(self, node):
                return node.value * 2

        assert Doubler().visit(IntLiteral(21)) == 42


# =============================================================================
# Printer Tests
# =============================================================================

class TestPrinter:
    """Indented tree output."""

    def test_let(self):
        assert render("let x: Int = 1 + 2 x") == "\n".join([
            "Let",
            "  Assign x",
            "    Hint",
            "      Lookup Int",
            "    Value",
            "      Add",
            "        Int 1",
            "        Int 2",
            "  Rest",
            "    Lookup x",
        ])

    def test_func(self):
        assert render("fn (x) x") == "\n".join([
            "Func",
            "  Args",
            "    Record",
            "      Lookup x",
            "  Arrow",
            "    Lookup x",
        ])

    def test_func_with_return_type(self):
        assert render("fn Int { }") == "\n".join([
            "Func",
            "  Returns",
            "    Lookup Int",
            "  Body (empty)",
        ])

    def test_call(self):
        assert render("f(1.5 k = 2)") == "\n".join([
            "Call f",
            "  Record",
            "    Float 1.5",
            "    Assign k",
            "      Value",
            "        Int 2",
        ])

    def test_qualified_let(self):
        assert render("let case c").splitlines()[0] == "Let (case)"

    def test_pragma_struct(self):
        assert render("pragma p struct => 1") == "\n".join([
            "Pragma",
            "  Assign p",
            "  Rest",
            "    Struct",
            "      Arrow",
            "        Int 1",
        ])

    def test_body(self):
        assert ASTPrinter().print(BodyBlock((IntLiteral(1),))) == "Body\n  Int 1"

    def test_printer_reusable(self):
        printer = ASTPrinter()
        printer.print(parse_source("{ 1 2 }"))
        assert printer.print(IntLiteral(7)) == "Int 7"

    def test_operator_names(self):
        assert render("a ^ b").splitlines()[0] == "Exp"
        assert render("a % b").splitlines()[0] == "Mod"

    def test_binding_chain(self):
        assert render("let a = 1 pragma p let case c a") == "\n".join([
            "Let",
            "  Assign a",
            "    Value",
            "      Int 1",
            "  Rest",
            "    Pragma",
            "      Assign p",
            "      Rest",
            "        Let (case)",
            "          Assign c",
            "          Rest",
            "            Lookup a",
        ])

    def test_chain_inside_block(self):
        assert render("{ let a a 2 }") == "\n".join([
            "Body",
            "  Let",
            "    Assign a",
            "    Rest",
            "      Lookup a",
            "  Int 2",
        ])

    def test_long_chain(self):
        count = 2000
        source = " ".join(f"let v{i} = {i}" for i in range(count)) + " v0"
        lines = render(source).splitlines()
        assert len(lines) == 5 * count + 1
        assert lines[-1].strip() == "Lookup v0"
        assert lines[-1].startswith("  " * (2 * count))


class TestLongChains:
    """Traversal of deeply right-nested binding chains."""

    def test_generic_visit(self):
        count = 2000
        source = " ".join(f"let v{i} = {i}" for i in range(count)) + " v0"
        summer = IntSummer()
        summer.visit(parse_source(source))
        assert summer.total == sum(range(count))

    def test_generic_visit_order(self):
        collector = LookupCollector()
        collector.visit(parse_source("let a = b let c: T = d e"))
        assert collector.names == ["b", "T", "d", "e"]
