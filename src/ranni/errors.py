"""
Ranni Error Hierarchy
=====================

This module defines the root of the exception hierarchy for the ranni
tool-chain. All exceptions inherit from RanniError, allowing callers to
catch every ranni-related error with a single except clause if desired.

Exception Hierarchy
-------------------
RanniError (base)
├── RanniSyntaxError (ranni.syntax.errors) - lexer and parser errors
│   ├── LexicalError - no token pattern matches
│   ├── UnexpectedTokenError / MissingTokenError - grammar violations
│   └── TrailingInputError - input left over after the program
└── RanniCompilationError (ranni.syntax.errors) - aggregate of the above

Design Philosophy
-----------------
Each exception captures source location information (filename, line,
column) when applicable, so messages can point at the offending text:

    filename:line:column: error: description
        source_line_text
            ^^^^^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class RanniError(Exception):
    """
    Base exception for all ranni errors.

        try:
            parse_source(text)
        except RanniError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens, AST nodes and errors all refer to source text through this
    class. It is frozen so a location can be shared freely between a
    token and the nodes built from it.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
