"""
Ranni Syntax
============

Lexer, parser and AST for the ranni expression language.

Pipeline
--------
    Source → Lexer → Tokens → Parser → AST

Usage
-----
>>> from ranni.syntax import parse_source, ASTPrinter
>>> tree = parse_source("fn (x) x")
>>> print(ASTPrinter().print(tree))
Func
  Args
    Record
      Lookup x
  Arrow
    Lookup x
"""

from ranni.syntax.errors import (
    RanniSyntaxError,
    RanniCompilationError,
    LexicalError,
    InvalidCharacterError,
    IntegerRangeError,
    UnexpectedTokenError,
    MissingTokenError,
    EmptyRecordError,
    PositionalAfterNamedError,
    TrailingInputError,
    ErrorCollector,
)
from ranni.syntax.lexer import Lexer, Token, TokenType
from ranni.syntax.parser import Parser, parse_source
from ranni.syntax.ast import (
    ASTNode,
    Expression,
    Identifier,
    Hint,
    Assign,
    Literal,
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
    ASTVisitor,
    ASTPrinter,
)

__all__ = [
    # Errors
    "RanniSyntaxError",
    "RanniCompilationError",
    "LexicalError",
    "InvalidCharacterError",
    "IntegerRangeError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "EmptyRecordError",
    "PositionalAfterNamedError",
    "TrailingInputError",
    "ErrorCollector",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    # Parser
    "Parser",
    "parse_source",
    # AST Nodes
    "ASTNode",
    "Expression",
    "Identifier",
    "Hint",
    "Assign",
    "Literal",
    "IntLiteral",
    "FloatLiteral",
    "Lookup",
    "Block",
    "ArrowBlock",
    "BodyBlock",
    "Record",
    "Func",
    "FunCall",
    "Let",
    "LetQualifier",
    "Pragma",
    "Struct",
    "BinaryExpression",
    "BinaryOperator",
    "ASTVisitor",
    "ASTPrinter",
]
