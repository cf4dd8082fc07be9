"""
Ranni Lexer (Tokenizer)
=======================

This module implements the lexer for the ranni expression language.
It converts source text into a stream of tokens for the parser.

Token Categories
----------------
- Keywords: fn, let, pragma, struct, case, method
- Identifiers: [A-Za-z_][A-Za-z0-9_]*
- Integers: -?[0-9][0-9_]*
- Floats: -?[0-9][0-9_]*.[0-9][0-9_]*(e[0-9]+)?
- Symbols: => = : ( ) { } + * / % ^

Separators
----------
Whitespace and commas are interchangeable separators and may appear
between any two tokens. They never reach the parser, so ``(1, 2)`` and
``(1 2)`` produce the same token stream.

Number Formats
--------------
| Literal     | Kind    | Value  |
|-------------|---------|--------|
| 42          | INTEGER | 42     |
| 1_000_000   | INTEGER | 1000000|
| 3.14        | FLOAT   | 3.14   |
| -2.5e3      | FLOAT   | -2500.0|

The sign belongs to the literal; there is no unary minus. Integers are
unsigned 64-bit, so a negative integer literal is a lexical error.

Example Usage
-------------
>>> from ranni.syntax.lexer import Lexer
>>> for token in Lexer("let x = 5 x").tokenize():
...     print(token)
Token(LET, 'let', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(ASSIGN, '=', 1:7)
Token(INTEGER, 5, 1:9)
Token(IDENTIFIER, 'x', 1:11)
Token(EOF, 1:12)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from ranni.errors import SourceLocation
from ranni.syntax.errors import (
    ErrorCollector,
    IntegerRangeError,
    InvalidCharacterError,
)


# Largest value an integer literal may hold
MAX_INTEGER = 2 ** 64 - 1


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the ranni language.

    Keywords are distinguished from identifiers so grammar rules can
    dispatch on the leading token alone.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Names
    INTEGER = auto()        # Unsigned integer literals
    FLOAT = auto()          # Float literals

    # === Keywords ===
    FN = auto()             # fn
    LET = auto()            # let
    PRAGMA = auto()         # pragma
    STRUCT = auto()         # struct
    CASE = auto()           # case (let qualifier)
    METHOD = auto()         # method (let qualifier)

    # === Arithmetic Operators ===
    PLUS = auto()           # +
    STAR = auto()           # *
    SLASH = auto()          # /
    PERCENT = auto()        # %
    CARET = auto()          # ^

    # === Binding and Annotation ===
    ASSIGN = auto()         # =
    ARROW = auto()          # =>
    COLON = auto()          # :

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }


# =============================================================================
# Keyword and Symbol Tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "fn": TokenType.FN,
    "let": TokenType.LET,
    "pragma": TokenType.PRAGMA,
    "struct": TokenType.STRUCT,
    "case": TokenType.CASE,
    "method": TokenType.METHOD,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "^": TokenType.CARET,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Represents a single token from ranni source code.

    Attributes:
        type: The TokenType classification
        value: Converted value (str for names and symbols, int or float
            for literals, None for EOF)
        text: The raw source text of the token
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | int | float | None
    text: str
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            if isinstance(self.value, (int, float)):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def span(self) -> int:
        """Number of source characters covered by this token."""
        return max(1, len(self.text))

    def describe(self) -> str:
        """Human-readable description for 'expected X, found Y' messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.text}'"
        if self.type in (TokenType.INTEGER, TokenType.FLOAT):
            return f"number '{self.text}'"
        if self.type in KEYWORDS.values():
            return f"keyword '{self.text}'"
        return f"'{self.text}'"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes ranni source code.

    Lexical errors do not stop tokenization: each one is recorded in the
    error collector, the offending characters are skipped and scanning
    resumes, so a single run reports every lexical error in the input.

    Usage:
        collector = ErrorCollector()
        tokens = list(Lexer(source_text, filename, collector).tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
        errors: Collector receiving lexical errors
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    # Characters allowed after the first digit of a number
    DIGIT_CHARS = string.digits + "_"

    # Insignificant separators
    SEPARATORS = " \t\n\r\f\v,"

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        errors: Optional[ErrorCollector] = None,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: The ranni source code to tokenize
            filename: Name of the source file (for error messages)
            errors: Collector for lexical errors (a private one if None)
        """
        self.source = source
        self.filename = filename
        self.errors = errors if errors is not None else ErrorCollector()

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1

        # Track line start position for error reporting
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects representing each lexical element, always
            terminated by an EOF token
        """
        while not self._at_end():
            self._skip_separators()

            if self._at_end() or self.errors.should_stop():
                break

            token = self._scan_token()
            if token is not None:
                yield token

        yield self._make_token(TokenType.EOF, None, "")

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """
        Consume and return the current character, advancing position.

        Updates line and column tracking for error reporting.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _is_digit(self, char: str) -> bool:
        return char != "" and char in string.digits

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        value: str | int | float | None,
        text: str,
        start_line: Optional[int] = None,
        start_column: Optional[int] = None,
    ) -> Token:
        """
        Create a token with current or specified position.

        Args:
            token_type: The type of token
            value: The converted token value
            text: Raw source text of the token
            start_line: Override line number (for multi-char tokens)
            start_column: Override column number
        """
        return Token(
            type=token_type,
            value=value,
            text=text,
            line=start_line or self._line,
            column=start_column or self._column,
            filename=self.filename,
        )

    # =========================================================================
    # Separator Handling
    # =========================================================================

    def _skip_separators(self) -> None:
        """Skip a run of whitespace and commas."""
        while not self._at_end() and self._peek() in self.SEPARATORS:
            self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Optional[Token]:
        """
        Scan the next token from source.

        Returns:
            The next Token, or None if the characters at the current
            position were invalid (the error is recorded)
        """
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if self._is_digit(char) or (char == "-" and self._is_digit(self._peek(1))):
            return self._scan_number(start_line, start_column)

        if char == "=":
            self._advance()
            if self._peek() == ">":
                self._advance()
                return self._make_token(TokenType.ARROW, "=>", "=>", start_line, start_column)
            return self._make_token(TokenType.ASSIGN, "=", "=", start_line, start_column)

        if char in SINGLE_CHAR_TOKENS:
            self._advance()
            return self._make_token(SINGLE_CHAR_TOKENS[char], char, char, start_line, start_column)

        self._scan_invalid(start_line, start_column)
        return None

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or keyword.

        Keywords are distinguished by checking the complete name against
        the keyword table, so ``letter`` is an identifier and ``let`` is
        not.
        """
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)

        if name in KEYWORDS:
            return self._make_token(KEYWORDS[name], name, name, start_line, start_column)

        return self._make_token(TokenType.IDENTIFIER, name, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Optional[Token]:
        """
        Scan an integer or float literal.

        A literal is a float when the integer part is followed by '.' and
        a digit; an exponent ('e' and digits) is only recognized after a
        fractional part. Digit-group underscores are stripped before
        conversion.
        """
        chars = []
        if self._peek() == "-":
            chars.append(self._advance())

        chars.append(self._advance())
        while self._peek() and self._peek() in self.DIGIT_CHARS:
            chars.append(self._advance())

        is_float = self._peek() == "." and self._is_digit(self._peek(1))
        if is_float:
            chars.append(self._advance())  # consume .
            while self._peek() and self._peek() in self.DIGIT_CHARS:
                chars.append(self._advance())

            if self._peek() == "e" and self._is_digit(self._peek(1)):
                chars.append(self._advance())  # consume e
                while self._is_digit(self._peek()):
                    chars.append(self._advance())

        text = "".join(chars)
        digits = text.replace("_", "")

        if is_float:
            return self._make_token(TokenType.FLOAT, float(digits), text, start_line, start_column)

        value = int(digits)
        if value < 0 or value > MAX_INTEGER:
            self.errors.add(IntegerRangeError(
                text,
                SourceLocation(self.filename, start_line, start_column),
                self._get_current_line(),
            ))
            return None

        return self._make_token(TokenType.INTEGER, value, text, start_line, start_column)

    def _scan_invalid(self, start_line: int, start_column: int) -> None:
        """
        Consume a run of characters that cannot start a token and record
        one error covering all of them.
        """
        source_line = self._get_current_line()
        chars = [self._advance()]

        while not self._at_end() and not self._starts_token():
            chars.append(self._advance())

        self.errors.add(InvalidCharacterError(
            "".join(chars),
            SourceLocation(self.filename, start_line, start_column),
            source_line,
        ))

    def _starts_token(self) -> bool:
        """Check if the current character begins a separator or a token."""
        char = self._peek()
        if char in self.SEPARATORS or char in self.IDENT_START or self._is_digit(char):
            return True
        if char == "-":
            return self._is_digit(self._peek(1))
        return char == "=" or char in SINGLE_CHAR_TOKENS

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]
