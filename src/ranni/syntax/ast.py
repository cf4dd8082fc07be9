"""
Ranni Abstract Syntax Tree (AST) Definitions
============================================

This module defines the AST node types produced by the ranni parser.
The tree is built once, bottom-up, and never mutated afterwards;
consumers such as a type checker or an evaluator build new data from it.

Node Hierarchy
--------------
ASTNode (base)
├── Identifier - a name
├── Hint - ': expr' annotation
├── Assign - name, optional hint, optional value
└── Expression
    ├── Literal
    │   ├── IntLiteral - unsigned 64-bit integer
    │   └── FloatLiteral - 64-bit float
    ├── Lookup - reference to a name
    ├── Block
    │   ├── ArrowBlock - '=> expr'
    │   └── BodyBlock - '{ expr* }'
    ├── Record - '(' positional+ named* ')'
    ├── Func - 'fn' record? ret? block
    ├── FunCall - name immediately followed by a record
    ├── Let - 'let' qualifier? assign rest?
    ├── Pragma - 'pragma' assign rest?
    ├── Struct - 'struct' block
    └── BinaryExpression - left op right

Design Notes
------------
- All nodes are frozen dataclasses; child sequences are tuples
- Optional children are None when absent, never sentinel values
- Each node stores its source location for diagnostics; the location is
  keyword-only and excluded from equality and repr, so two trees parsed
  from differently spaced text compare equal
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional

from ranni.errors import SourceLocation


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts (keyword-only)
    """
    location: Optional[SourceLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for every variant of the ranni expression sum type."""
    pass


# =============================================================================
# Building Blocks
# =============================================================================

@dataclass(frozen=True)
class Identifier(ASTNode):
    """
    A name, as written in the source.

    Attributes:
        name: The identifier text
    """
    name: str


@dataclass(frozen=True)
class Hint(ASTNode):
    """
    Type or value annotation introduced by ':'.

    Attributes:
        value: The annotation expression
    """
    value: Expression


@dataclass(frozen=True)
class Assign(ASTNode):
    """
    One binding target: used by let, pragma and named record fields.

        x
        x: Int
        x = 5
        x: Int = 5

    Attributes:
        name: The bound name
        hint: Optional annotation
        value: Optional initializer
    """
    name: Identifier
    hint: Optional[Hint] = None
    value: Optional[Expression] = None


# =============================================================================
# Literals and Names
# =============================================================================

@dataclass(frozen=True)
class Literal(Expression):
    """Base class for numeric literals."""
    pass


@dataclass(frozen=True)
class IntLiteral(Literal):
    """Unsigned 64-bit integer literal."""
    value: int


@dataclass(frozen=True)
class FloatLiteral(Literal):
    """64-bit floating point literal."""
    value: float


@dataclass(frozen=True)
class Lookup(Expression):
    """
    Reference to a name.

    Attributes:
        ident: The referenced identifier
    """
    ident: Identifier


# =============================================================================
# Blocks
# =============================================================================

@dataclass(frozen=True)
class Block(Expression):
    """Base class for the two block forms: the value(s) produced by a scope."""
    pass


@dataclass(frozen=True)
class ArrowBlock(Block):
    """
    Arrow form: '=> expr'.

    Attributes:
        value: The single trailing expression
    """
    value: Expression


@dataclass(frozen=True)
class BodyBlock(Block):
    """
    Body form: '{ expr* }'.

    Attributes:
        body: The expressions in source order (may be empty)
    """
    body: tuple[Expression, ...] = ()


# =============================================================================
# Compound Expressions
# =============================================================================

@dataclass(frozen=True)
class Record(Expression):
    """
    Parenthesised group of positional and named entries.

    Models argument lists, tuples and struct-literal-like values alike:

        (1 2)
        (a b c = 3)

    Attributes:
        positional: Positional expressions (at least one)
        named: Named assignments following the positional entries
    """
    positional: tuple[Expression, ...]
    named: tuple[Assign, ...] = ()


@dataclass(frozen=True)
class Func(Expression):
    """
    Function literal.

        fn (x) x
        fn (x y) Int => x + y
        fn { 42 }

    Attributes:
        args: Optional parameter record
        ret: Optional return-type expression
        body: The function body
    """
    args: Optional[Record]
    ret: Optional[Expression]
    body: Block


@dataclass(frozen=True)
class FunCall(Expression):
    """
    Call of a named function: an identifier immediately followed by a
    record.

    Attributes:
        callee: The called name
        args: The argument record
    """
    callee: Identifier
    args: Record


class LetQualifier(Enum):
    """Opaque let qualifiers; their meaning belongs to later stages."""
    CASE = auto()       # let case ...
    METHOD = auto()     # let method ...


@dataclass(frozen=True)
class Let(Expression):
    """
    Binding followed by the rest of the enclosing sequence.

        let x = 5 x + 1

    Attributes:
        assign: The binding
        rest: Expression evaluated with the binding in scope; None when
            the binding is the last form of its sequence
        qualifier: Optional 'case' / 'method' tag
    """
    assign: Assign
    rest: Optional[Expression] = None
    qualifier: Optional[LetQualifier] = None


@dataclass(frozen=True)
class Pragma(Expression):
    """
    Compiler directive; shaped like Let without a qualifier.

    Attributes:
        assign: The directive name and value
        rest: Remainder of the enclosing sequence, if any
    """
    assign: Assign
    rest: Optional[Expression] = None


@dataclass(frozen=True)
class Struct(Expression):
    """
    Struct definition: 'struct' followed by a block.

    Attributes:
        body: The struct body
    """
    body: Block


# =============================================================================
# Binary Arithmetic
# =============================================================================

class BinaryOperator(Enum):
    """Binary arithmetic operator types."""
    ADD = auto()        # +
    SUB = auto()        # no source syntax, see parser.BINARY_OPERATORS
    MUL = auto()        # *
    DIV = auto()        # /
    MOD = auto()        # %
    EXP = auto()        # ^


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Binary operation expression (a op b).

    Chains are left-nested: '1 * 2 * 3' is Mul(Mul(1, 2), 3).

    Attributes:
        operator: The binary operator
        left: Left operand expression
        right: Right operand expression
    """
    operator: BinaryOperator
    left: Expression
    right: Expression


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care
    about; everything else falls through to generic_visit, which walks
    the children.

    Usage:
        class LookupCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_Lookup(self, node):
                self.names.append(node.ident.name)

        collector = LookupCollector()
        collector.visit(tree)
    """

    def visit(self, node: ASTNode) -> Any:
        """
        Visit a node by dispatching to the appropriate method.

        Args:
            node: The AST node to visit

        Returns:
            The result of the visit method (varies by node type)
        """
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """
        Visit all children of the node in field order.

        Children without a visit_* method of their own are walked here
        with an explicit stack, so long right-nested chains such as
        let sequences do not grow the call stack.
        """
        stack = list(reversed(_children(node)))
        while stack:
            child = stack.pop()
            visitor = getattr(self, f"visit_{child.__class__.__name__}", None)
            if visitor is not None:
                visitor(child)
            else:
                stack.extend(reversed(_children(child)))


def _children(node: ASTNode) -> list[ASTNode]:
    """Direct child nodes of node, in field order."""
    children = []
    for field_value in node.__dict__.values():
        if isinstance(field_value, ASTNode):
            children.append(field_value)
        elif isinstance(field_value, tuple):
            children.extend(item for item in field_value if isinstance(item, ASTNode))
    return children


# =============================================================================
# AST Tree Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Indented tree dump of an AST, for diagnostics.

    Usage:
        printer = ASTPrinter()
        print(printer.print(tree))

    Output for 'let x: Int = 1 + 2 x':

        Let
          Assign x
            Hint
              Lookup Int
            Value
              Add
                Int 1
                Int 2
          Rest
            Lookup x
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        """Emit a line with current indentation."""
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def _section(self, title: str, node: Optional[ASTNode]) -> None:
        """Emit a titled child, skipped when the child is absent."""
        if node is None:
            return
        self._emit(title)
        self._indent()
        self.visit(node)
        self._dedent()

    def visit_IntLiteral(self, node: IntLiteral):
        self._emit(f"Int {node.value}")

    def visit_FloatLiteral(self, node: FloatLiteral):
        self._emit(f"Float {node.value!r}")

    def visit_Identifier(self, node: Identifier):
        self._emit(f"Ident {node.name}")

    def visit_Lookup(self, node: Lookup):
        self._emit(f"Lookup {node.ident.name}")

    def visit_Hint(self, node: Hint):
        self._section("Hint", node.value)

    def visit_Assign(self, node: Assign):
        self._emit(f"Assign {node.name.name}")
        self._indent()
        self._visit_optional(node.hint)
        self._section("Value", node.value)
        self._dedent()

    def visit_ArrowBlock(self, node: ArrowBlock):
        self._emit("Arrow")
        self._indent()
        self.visit(node.value)
        self._dedent()

    def visit_BodyBlock(self, node: BodyBlock):
        self._emit("Body" if node.body else "Body (empty)")
        self._indent()
        for expr in node.body:
            self.visit(expr)
        self._dedent()

    def visit_Record(self, node: Record):
        self._emit("Record")
        self._indent()
        for expr in node.positional:
            self.visit(expr)
        for assign in node.named:
            self.visit(assign)
        self._dedent()

    def visit_Func(self, node: Func):
        self._emit("Func")
        self._indent()
        self._section("Args", node.args)
        self._section("Returns", node.ret)
        self.visit(node.body)
        self._dedent()

    def visit_FunCall(self, node: FunCall):
        self._emit(f"Call {node.callee.name}")
        self._indent()
        self.visit(node.args)
        self._dedent()

    def visit_Let(self, node: Let):
        self._visit_binding_chain(node)

    def visit_Pragma(self, node: Pragma):
        self._visit_binding_chain(node)

    def _visit_binding_chain(self, node) -> None:
        """Print a let/pragma and every binding reached through its rest."""
        depth = 0
        while True:
            if isinstance(node, Pragma):
                self._emit("Pragma")
            elif node.qualifier is not None:
                self._emit(f"Let ({node.qualifier.name.lower()})")
            else:
                self._emit("Let")
            self._indent()
            self.visit(node.assign)
            depth += 1

            if node.rest is None:
                break
            self._emit("Rest")
            self._indent()
            depth += 1
            if not isinstance(node.rest, (Let, Pragma)):
                self.visit(node.rest)
                break
            node = node.rest

        self.indent_level -= depth

    def visit_Struct(self, node: Struct):
        self._emit("Struct")
        self._indent()
        self.visit(node.body)
        self._dedent()

    def visit_BinaryExpression(self, node: BinaryExpression):
        self._emit(node.operator.name.capitalize())
        self._indent()
        self.visit(node.left)
        self.visit(node.right)
        self._dedent()

    def _visit_optional(self, node: Optional[ASTNode]) -> None:
        if node is not None:
            self.visit(node)
