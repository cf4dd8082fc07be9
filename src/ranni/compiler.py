"""
Ranni Compiler Driver
=====================

This module provides the front-end interface for ranni. It runs the
stages that exist today:

    Source → Lex → Parse → AST

Later stages (type checking, evaluation) consume the AST returned here.

Usage
-----
Command line:
    $ ranni compile main.rni

Programmatic:
    >>> from ranni import compile_source
    >>> result = compile_source("let x = 5 x")
    >>> result.ast
    Let(assign=Assign(name=Identifier(name='x'), hint=None, \
value=IntLiteral(value=5)), rest=Lookup(ident=Identifier(name='x')), qualifier=None)

Error Handling
--------------
Every lexical error in the input is collected before parsing. When any
exist the parse is skipped; otherwise the parser adds its own errors to
the same collector. Either way a failed compilation raises one
RanniCompilationError listing everything that was found.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ranni.syntax.ast import Expression
from ranni.syntax.errors import ErrorCollector
from ranni.syntax.lexer import Lexer, Token
from ranni.syntax.parser import Parser

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        max_errors: Stop collecting after this many errors
        default_filename: Name used in diagnostics for in-memory source
    """
    max_errors: int = 100
    default_filename: str = "<input>"

    def __post_init__(self):
        if self.max_errors < 1:
            raise ValueError(f"max_errors must be at least 1, got {self.max_errors}")


class Compiler:
    """
    Ranni front-end.

    Example:
        compiler = Compiler(CompilerOptions(max_errors=10))
        result = compiler.compile_file("main.rni")
        print(result.ast)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()
        self._errors = ErrorCollector(max_errors=self.options.max_errors)

    def compile_source(self, source: str, filename: Optional[str] = None) -> "CompilerResult":
        """
        Compile ranni source text to an AST.

        Args:
            source: Ranni source code string
            filename: Source filename for error messages
                (defaults to options.default_filename)

        Returns:
            CompilerResult holding the AST

        Raises:
            RanniCompilationError: If lexing or parsing fails
        """
        filename = filename or self.options.default_filename
        self._errors.clear()
        result = CompilerResult(filename=filename)

        logger.debug("Compiling %s (%d characters)", filename, len(source))

        tokens = self._lex(source, filename)
        result.token_count = len(tokens)
        logger.debug("Lexed %d tokens", len(tokens))

        if self._errors.has_errors():
            logger.debug(
                "Skipping parse: %d lexical error(s)", self._errors.error_count()
            )
            self._errors.raise_if_errors()

        result.ast = self._parse(tokens, filename, source.splitlines())

        logger.debug("Parsed %s successfully", filename)
        return result

    def compile_file(self, filepath: str) -> "CompilerResult":
        """
        Compile a ranni source file.

        Args:
            filepath: Path to the source file

        Returns:
            CompilerResult holding the AST

        Raises:
            RanniCompilationError: If lexing or parsing fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def _lex(self, source: str, filename: str) -> list[Token]:
        """Tokenize source, collecting lexical errors."""
        lexer = Lexer(source, filename, self._errors)
        return list(lexer.tokenize())

    def _parse(self, tokens: list[Token], filename: str, source_lines: list[str]) -> Expression:
        """Parse tokens into an AST."""
        parser = Parser(tokens, filename, source_lines, self._errors)
        return parser.parse()


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        ast: Root expression
        token_count: Number of tokens lexed, EOF included
    """
    filename: str = ""
    ast: Optional[Expression] = None
    token_count: int = 0


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_source(source: str, filename: str = "<input>") -> "CompilerResult":
    """
    Compile ranni source code with default options.

    Raises:
        RanniCompilationError: If compilation fails
    """
    return Compiler().compile_source(source, filename)


def compile_file(filepath: str) -> "CompilerResult":
    """
    Compile a ranni source file with default options.

    Raises:
        RanniCompilationError: If compilation fails
        FileNotFoundError: If source file not found
    """
    return Compiler().compile_file(filepath)
