"""
Ranni Recursive Descent Parser
==============================

This module implements the parser for the ranni expression language.
It takes the token list produced by the lexer and builds an AST.

Grammar (Simplified EBNF)
-------------------------
program   ::= expr EOF
expr      ::= primary (binop primary)*
primary   ::= INTEGER | FLOAT
            | IDENTIFIER record                  (function call)
            | IDENTIFIER                         (lookup)
            | 'let' ('case' | 'method')? assign expr?
            | 'pragma' assign expr?
            | 'fn' record? (block | expr block | expr)
            | 'struct' block
            | record
            | block
block     ::= '=>' expr | '{' expr* '}'
assign    ::= IDENTIFIER (':' expr)? ('=' expr)?
record    ::= '(' expr+ assign* ')'

Every alternative is chosen by its leading token, so the parser never
backtracks. Whitespace and commas have already been dropped by the lexer.

Operator Precedence (lowest to highest)
---------------------------------------
1.  additive        +
2.  multiplicative  * / %
3.  exponent        ^

All levels are left-associative: '2 ^ 3 ^ 2' is '(2 ^ 3) ^ 2'.

Error Reporting
---------------
Errors raised inside a rule propagate unchanged, so the reported error is
the most specific one. Constructs that are complete but invalid (an empty
record, a positional entry after named ones) are recorded and parsing
continues. All collected errors are raised together at the end as a
RanniCompilationError.

Example Usage
-------------
>>> from ranni.syntax.parser import parse_source
>>> parse_source("1 + 2 * 3")
BinaryExpression(operator=<BinaryOperator.ADD: 1>, left=IntLiteral(value=1), \
right=BinaryExpression(operator=<BinaryOperator.MUL: 3>, left=IntLiteral(value=2), \
right=IntLiteral(value=3)))
"""

from typing import Optional

from ranni.syntax.lexer import Token, TokenType
from ranni.syntax.ast import (
    Expression,
    Identifier,
    Hint,
    Assign,
    IntLiteral,
    FloatLiteral,
    Lookup,
    Block,
    ArrowBlock,
    BodyBlock,
    Record,
    Func,
    FunCall,
    Let,
    LetQualifier,
    Pragma,
    Struct,
    BinaryExpression,
    BinaryOperator,
)
from ranni.syntax.errors import (
    ErrorCollector,
    RanniSyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    EmptyRecordError,
    PositionalAfterNamedError,
    TrailingInputError,
)


# =============================================================================
# Operator Tables
# =============================================================================

# Token to operator mapping. BinaryOperator.SUB has no entry: the language
# spells subtraction with the same '+' symbol as addition and addition
# takes precedence, so SUB is unreachable from source text.
BINARY_OPERATORS: dict[TokenType, BinaryOperator] = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
    TokenType.PERCENT: BinaryOperator.MOD,
    TokenType.CARET: BinaryOperator.EXP,
}

# Higher binds tighter
PRECEDENCE: dict[BinaryOperator, int] = {
    BinaryOperator.ADD: 1,
    BinaryOperator.SUB: 1,
    BinaryOperator.MUL: 2,
    BinaryOperator.DIV: 2,
    BinaryOperator.MOD: 2,
    BinaryOperator.EXP: 3,
}

LET_QUALIFIERS: dict[TokenType, LetQualifier] = {
    TokenType.CASE: LetQualifier.CASE,
    TokenType.METHOD: LetQualifier.METHOD,
}

# Tokens that can begin an expression
EXPRESSION_START = frozenset({
    TokenType.INTEGER,
    TokenType.FLOAT,
    TokenType.IDENTIFIER,
    TokenType.LET,
    TokenType.PRAGMA,
    TokenType.FN,
    TokenType.STRUCT,
    TokenType.LPAREN,
    TokenType.LBRACE,
    TokenType.ARROW,
})

BLOCK_START = frozenset({TokenType.ARROW, TokenType.LBRACE})


class Parser:
    """
    Recursive descent parser for ranni.

    Parses a list of tokens into a single root expression. Binary
    arithmetic is handled by precedence climbing in _parse_expression;
    every other form has its own _parse_* method.

    Attributes:
        tokens: List of tokens to parse (ending with EOF)
        filename: Source filename for error reporting
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
        errors: Optional[ErrorCollector] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer
            filename: Source filename for error messages
            source_lines: Original source lines for error context
            errors: Collector for parse errors (a private one if None)
        """
        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []

        # Current position in token stream
        self._pos = 0

        self._errors = errors if errors is not None else ErrorCollector()

    def parse(self) -> Expression:
        """
        Parse the token stream into an AST.

        Returns:
            The root expression of the program

        Raises:
            RanniCompilationError: If any error was collected
        """
        root = None

        try:
            root = self._parse_expression()
            if not self._at_end():
                token = self._peek()
                raise TrailingInputError(
                    token.describe(),
                    token.location,
                    self._get_source_line(token.line),
                    span=token.span,
                )
        except RanniSyntaxError as e:
            self._errors.add(e)

        self._errors.raise_if_errors()

        return root

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self._peek().type == TokenType.EOF

    def _peek(self, offset: int = 0) -> Token:
        """Look at token at current position + offset."""
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        if not self._at_end():
            token = self.tokens[self._pos]
            self._pos += 1
            return token
        return self.tokens[-1]

    def _check(self, *types: TokenType) -> bool:
        """Check if current token is one of the given types."""
        return self._peek().type in types

    def _match(self, *types: TokenType) -> Optional[Token]:
        """
        Consume current token if it matches one of the types.

        Returns:
            The consumed token, or None if no match
        """
        if self._check(*types):
            return self._advance()
        return None

    def _expect(
        self,
        token_type: TokenType,
        expected: str,
        hint: Optional[str] = None,
    ) -> Token:
        """
        Expect and consume a specific token type.

        Args:
            token_type: The expected token type
            expected: Description of what was expected, for the message
            hint: Optional hint attached to the error

        Returns:
            The consumed token

        Raises:
            MissingTokenError: If the expected token is not found
        """
        if self._check(token_type):
            return self._advance()

        current = self._peek()
        raise MissingTokenError(
            expected,
            current.describe(),
            current.location,
            self._get_source_line(current.line),
            hint=hint,
            span=current.span,
        )

    def _starts_expression(self) -> bool:
        return self._peek().type in EXPRESSION_START

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Expression Parsing (Precedence Climbing)
    # =========================================================================

    def _parse_expression(self, min_precedence: int = 1) -> Expression:
        """
        Parse a maximal arithmetic expression.

        Args:
            min_precedence: Weakest operator this call may consume
        """
        return self._parse_operators(self._parse_primary(), min_precedence)

    def _parse_operators(self, left: Expression, min_precedence: int) -> Expression:
        """
        Fold every following operator of at least min_precedence into left.

        The right operand is parsed with a strictly higher threshold, which
        makes equal-precedence chains nest to the left.
        """
        while True:
            operator = BINARY_OPERATORS.get(self._peek().type)
            if operator is None or PRECEDENCE[operator] < min_precedence:
                break

            self._advance()
            right = self._parse_expression(PRECEDENCE[operator] + 1)
            left = BinaryExpression(
                operator,
                left,
                right,
                location=left.location,
            )

        return left

    def _parse_primary(self) -> Expression:
        """Parse any non-binary expression, dispatching on the leading token."""
        token = self._peek()

        if token.type == TokenType.INTEGER:
            self._advance()
            return IntLiteral(token.value, location=token.location)

        if token.type == TokenType.FLOAT:
            self._advance()
            return FloatLiteral(token.value, location=token.location)

        if token.type == TokenType.IDENTIFIER:
            return self._parse_name()

        if token.type in (TokenType.LET, TokenType.PRAGMA):
            return self._parse_bindings()

        if token.type == TokenType.FN:
            return self._parse_func()

        if token.type == TokenType.STRUCT:
            return self._parse_struct()

        if token.type == TokenType.LPAREN:
            return self._parse_record()

        if token.type in BLOCK_START:
            return self._parse_block()

        raise UnexpectedTokenError(
            token.describe(),
            expected="expression",
            location=token.location,
            source_line=self._get_source_line(token.line),
            span=token.span,
        )

    # =========================================================================
    # Names and Calls
    # =========================================================================

    def _parse_identifier(self, expected: str = "identifier") -> Identifier:
        token = self._expect(TokenType.IDENTIFIER, expected)
        return Identifier(token.value, location=token.location)

    def _parse_name(self) -> Expression:
        """
        Parse a lookup or a function call.

        An identifier directly followed by '(' is a call; the record is
        its argument list.
        """
        ident = self._parse_identifier()

        if self._check(TokenType.LPAREN):
            args = self._parse_record()
            return FunCall(ident, args, location=ident.location)

        return Lookup(ident, location=ident.location)

    # =========================================================================
    # Bindings
    # =========================================================================

    def _parse_assign(self) -> Assign:
        """Parse 'name (: hint)? (= value)?'."""
        name = self._parse_identifier("binding name")

        hint = None
        colon = self._match(TokenType.COLON)
        if colon:
            hint = Hint(self._parse_expression(), location=colon.location)

        value = None
        if self._match(TokenType.ASSIGN):
            value = self._parse_expression()

        return Assign(name, hint, value, location=name.location)

    def _parse_rest(self) -> Optional[Expression]:
        """Parse the optional expression following a binding."""
        if self._starts_expression():
            return self._parse_expression()
        return None

    def _parse_binding_head(self) -> tuple[Token, Optional[LetQualifier], Assign]:
        """Parse 'let qualifier? assign' or 'pragma assign', without the rest."""
        keyword = self._advance()

        qualifier = None
        if keyword.type == TokenType.LET:
            qualifier_token = self._match(*LET_QUALIFIERS)
            if qualifier_token:
                qualifier = LET_QUALIFIERS[qualifier_token.type]

        return keyword, qualifier, self._parse_assign()

    def _parse_bindings(self) -> Expression:
        """
        Parse a chain of let/pragma bindings and the expression ending it.

            let a = 1 let b = 2 pragma p a + b

        Each binding's rest is the next binding, so the chain nests to the
        right. The heads are collected in a loop and the nodes are built
        innermost first, keeping the call depth constant for programs made
        of thousands of bindings.
        """
        heads = [self._parse_binding_head()]
        while self._check(TokenType.LET, TokenType.PRAGMA):
            heads.append(self._parse_binding_head())

        node = self._make_binding(heads.pop(), self._parse_rest())
        while heads:
            # The inner binding was parsed as an expression, so operators
            # after a rest-less binding apply to it
            node = self._make_binding(heads.pop(), self._parse_operators(node, 1))

        return node

    def _make_binding(
        self,
        head: tuple[Token, Optional[LetQualifier], Assign],
        rest: Optional[Expression],
    ) -> Expression:
        keyword, qualifier, assign = head
        if keyword.type == TokenType.PRAGMA:
            return Pragma(assign, rest, location=keyword.location)
        return Let(assign, rest, qualifier, location=keyword.location)

    # =========================================================================
    # Blocks, Records and Compounds
    # =========================================================================

    def _parse_block(self) -> Block:
        """Parse '=> expr' or '{ expr* }'."""
        arrow = self._match(TokenType.ARROW)
        if arrow:
            value = self._parse_expression()
            return ArrowBlock(value, location=arrow.location)

        if not self._check(TokenType.LBRACE):
            current = self._peek()
            raise MissingTokenError(
                "block ('{' or '=>')",
                current.describe(),
                current.location,
                self._get_source_line(current.line),
                span=current.span,
            )

        open_brace = self._advance()
        body = []
        while self._starts_expression():
            body.append(self._parse_expression())

        self._expect(
            TokenType.RBRACE,
            "'}'",
            hint=f"to close the block opened at {open_brace.location}",
        )

        return BodyBlock(tuple(body), location=open_brace.location)

    def _at_named_field(self) -> bool:
        """Check for 'name:' or 'name=' which starts the named section."""
        return (
            self._check(TokenType.IDENTIFIER)
            and self._peek(1).type in (TokenType.COLON, TokenType.ASSIGN)
        )

    def _parse_record(self) -> Record:
        """
        Parse '(' positional+ named* ')'.

        An empty positional section and positional entries after named
        ones are recorded as errors without aborting the parse.
        """
        open_paren = self._expect(TokenType.LPAREN, "'('")

        positional = []
        while self._starts_expression() and not self._at_named_field():
            positional.append(self._parse_expression())

        named = []
        while self._starts_expression():
            if self._check(TokenType.IDENTIFIER):
                named.append(self._parse_assign())
                continue

            # Positional entry after named ones: record and keep going
            token = self._peek()
            self._errors.add(PositionalAfterNamedError(
                token.location,
                self._get_source_line(token.line),
            ))
            self._parse_expression()

        self._expect(
            TokenType.RPAREN,
            "')'",
            hint=f"to close the record opened at {open_paren.location}",
        )

        if not positional:
            self._errors.add(EmptyRecordError(
                open_paren.location,
                self._get_source_line(open_paren.line),
            ))

        return Record(tuple(positional), tuple(named), location=open_paren.location)

    def _parse_func(self) -> Func:
        """
        Parse a function literal.

        After the optional parameter record:
        - a block is the body:                   fn (x) => x
        - an expression then a block is ret+body: fn (x) Int => x
        - a lone expression is an arrow body:     fn (x) x
        """
        fn_token = self._expect(TokenType.FN, "'fn'")

        args = None
        if self._check(TokenType.LPAREN):
            args = self._parse_record()

        if self._check(*BLOCK_START):
            body = self._parse_block()
            return Func(args, None, body, location=fn_token.location)

        if not self._starts_expression():
            current = self._peek()
            raise MissingTokenError(
                "function body",
                current.describe(),
                current.location,
                self._get_source_line(current.line),
                hint="write the body as '=> expr' or '{ ... }'",
                span=current.span,
            )

        expr = self._parse_expression()

        if self._check(*BLOCK_START):
            body = self._parse_block()
            return Func(args, expr, body, location=fn_token.location)

        return Func(
            args,
            None,
            ArrowBlock(expr, location=expr.location),
            location=fn_token.location,
        )

    def _parse_struct(self) -> Struct:
        """Parse 'struct' block."""
        struct_token = self._expect(TokenType.STRUCT, "'struct'")
        body = self._parse_block()
        return Struct(body, location=struct_token.location)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    max_errors: int = 100,
) -> Expression:
    """
    Parse ranni source code into an AST.

    Runs the same pipeline as Compiler.compile_source: lexical errors are
    all collected first, and when there are any the parse is not attempted.

    Args:
        source: The ranni source code
        filename: Source filename for error messages
        max_errors: Maximum number of errors to collect

    Returns:
        The root expression of the AST

    Raises:
        RanniCompilationError: If lexing or parsing fails
    """
    from ranni.compiler import Compiler, CompilerOptions

    options = CompilerOptions(max_errors=max_errors, default_filename=filename)
    return Compiler(options).compile_source(source, filename).ast
