"""
Ranni Syntax Error Hierarchy
============================

This module defines the exceptions raised while turning ranni source text
into an AST, plus the collector that gathers them for batch reporting.

Exception Hierarchy
-------------------
RanniSyntaxError (base for all lexer and parser errors)
├── LexicalError - no token pattern matches at a position
│   ├── InvalidCharacterError - unexpected character(s)
│   └── IntegerRangeError - integer literal outside unsigned 64-bit range
├── UnexpectedTokenError - a token that no rule accepts here
├── MissingTokenError - a required leaf token is absent
├── EmptyRecordError - record without positional entries
├── PositionalAfterNamedError - positional record entry after named ones
└── TrailingInputError - unconsumed input after the program

RanniCompilationError is the aggregate raised once parsing finishes with
at least one collected error. Its ``errors`` attribute holds the ordered
list of individual errors.

Error Message Format
--------------------
    main.rni:1:3: error: expected ')'
        (1
          ^
    hint: to close the record opened at main.rni:1:1
"""

from typing import Optional, List

from ranni.errors import RanniError, SourceLocation


# =============================================================================
# Base Syntax Exception
# =============================================================================

class RanniSyntaxError(RanniError):
    """
    Base exception for all lexer and parser errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
        span: Number of characters the error covers (caret width)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        span: int = 1,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        self.span = max(1, span)
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            main.rni:2:9: error: unexpected token '}'
                let x = }
                        ^
            hint: expected expression
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret run under the offending text
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}{'^' * self.span}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class RanniCompilationError(RanniError):
    """
    Aggregate error carrying every error collected during one parse.

    The message is the pre-formatted collector report, so printing the
    exception shows all errors followed by a summary line.

    Attributes:
        errors: The individual errors, in the order they were found
    """

    def __init__(self, errors: List[RanniSyntaxError], report: str):
        self.errors = list(errors)
        super().__init__(report)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(RanniSyntaxError):
    """No token pattern matches at a position in the source."""
    pass


class InvalidCharacterError(LexicalError):
    """
    One or more characters that cannot start any token.

    Consecutive invalid characters are reported as a single error whose
    span covers the whole run.
    """

    def __init__(
        self,
        chars: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.chars = chars
        if len(chars) == 1:
            message = f"invalid character '{chars}' (0x{ord(chars):02X})"
        else:
            message = f"invalid characters '{chars}'"

        hint = None
        if chars.startswith("-"):
            hint = "'-' is only valid as the sign of a numeric literal"

        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
            span=len(chars),
        )


class IntegerRangeError(LexicalError):
    """
    Integer literal that does not fit an unsigned 64-bit value.

    Example:
        let x = -5              // negative integers are not representable
        let y = 18446744073709551616
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"integer literal '{text}' is out of range for an unsigned 64-bit value",
            location=location,
            hint="use a float literal (e.g. -5.0) for negative values",
            source_line=source_line,
            span=len(text),
        )


# =============================================================================
# Structural Errors
# =============================================================================

class UnexpectedTokenError(RanniSyntaxError):
    """
    Unexpected token during parsing.

    Raised when the parser encounters a token that doesn't match any
    grammar rule at the current position.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        span: int = 1,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected {found}",
            location=location,
            hint=hint,
            source_line=source_line,
            span=span,
        )


class MissingTokenError(RanniSyntaxError):
    """
    Required token is missing.

    Raised when a required leaf token (like ')' or '}') is not found
    where expected.
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
        span: int = 1,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, found {found}",
            location=location,
            hint=hint,
            source_line=source_line,
            span=span,
        )


class EmptyRecordError(RanniSyntaxError):
    """
    Record without any positional entry.

    Records need at least one positional expression, even when named
    fields are present:

        ()          // error
        (x = 1)     // error
        (0 x = 1)   // ok
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "record needs at least one positional entry",
            location=location,
            hint="named fields must follow at least one positional expression",
            source_line=source_line,
        )


class PositionalAfterNamedError(RanniSyntaxError):
    """Positional record entry following named entries."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "positional entry after named fields",
            location=location,
            hint="move positional entries before the first 'name = value'",
            source_line=source_line,
        )


# =============================================================================
# Exhaustion Errors
# =============================================================================

class TrailingInputError(RanniSyntaxError):
    """
    Input remaining after a complete top-level expression.

    A program is exactly one expression; sequences are written as
    let/pragma chains or inside a '{ }' block.
    """

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        span: int = 1,
    ):
        self.found = found
        super().__init__(
            f"unexpected {found} after end of program",
            location=location,
            hint="a program is a single expression; wrap sequences in '{ }'",
            source_line=source_line,
            span=span,
        )


# =============================================================================
# Error Collection (for multi-error reporting)
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The lexer and parser record errors here instead of stopping at the
    first one whenever the input is still structurally usable.

    Example:
        collector = ErrorCollector(max_errors=100)
        tokens = list(Lexer(source, errors=collector).tokenize())
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before stopping
        """
        self.errors: List[RanniSyntaxError] = []
        self.max_errors = max_errors

    def add(self, error: RanniSyntaxError) -> None:
        """Add an error to the collection, dropping it once max_errors is reached."""
        if self.should_stop():
            return
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def should_stop(self) -> bool:
        """Return True if max_errors has been reached."""
        return len(self.errors) >= self.max_errors

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """Format all errors for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()

    def raise_if_errors(self) -> None:
        """Raise a RanniCompilationError if any errors were collected."""
        if self.has_errors():
            raise RanniCompilationError(self.errors, self.report())
