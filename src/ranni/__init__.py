"""
Ranni - Front-End for the Ranni Expression Language
===================================================

This package provides the syntax front-end for ranni, a small
expression-oriented language where everything (bindings, functions,
structs, blocks) is an expression.

Main Components
---------------
- **syntax**: lexer, recursive descent parser and AST
    Converts source text into a tree of frozen dataclass nodes

- **compiler**: front-end driver
    Runs lex and parse with configurable options and error limits

- **cli**: the ``ranni`` command
    ``ranni compile`` dumps the AST, ``ranni lsp`` runs the language server

- **lsp**: language server lifecycle stub

Quick Start
-----------
    >>> from ranni import parse_source
    >>> parse_source("1 + 2 * 3")
    BinaryExpression(operator=<BinaryOperator.ADD: 1>, ...)

Or use the command-line tool:
    $ ranni compile main.rni
    $ echo "let x = 5 x" | ranni compile -
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from ranni.errors import RanniError, SourceLocation
from ranni.syntax import (
    RanniSyntaxError,
    RanniCompilationError,
    ErrorCollector,
    Lexer,
    Parser,
    parse_source,
    ASTPrinter,
    ASTVisitor,
)
from ranni.compiler import (
    Compiler,
    CompilerOptions,
    CompilerResult,
    compile_source,
    compile_file,
)

__all__ = [
    "__version__",
    # Errors
    "RanniError",
    "SourceLocation",
    "RanniSyntaxError",
    "RanniCompilationError",
    "ErrorCollector",
    # Front-end
    "Lexer",
    "Parser",
    "parse_source",
    "ASTPrinter",
    "ASTVisitor",
    # Driver
    "Compiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_source",
    "compile_file",
]
