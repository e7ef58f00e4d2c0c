"""
Token definitions for the exprtree lexer.

This module defines the token types produced while scanning an arithmetic
expression:
- Integer literals (negative literals are folded in by the lexer)
- Arithmetic operators (+, -, *, /)
- Parentheses
- AST references (transient, created by the parser's reduction pass)

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in an exprtree expression.
    """

    # Literals
    NUMBER = auto()                 # 42, -7

    # Operators
    PLUS = auto()                   # +
    MINUS = auto()                  # - (only when followed by whitespace)
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /

    # Punctuation
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )

    # Parser-internal: carries an already-built sub-tree through the fold.
    # Never produced by the lexer.
    AST_REF = auto()


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, lexeme (raw text), semantic value and source
    location. ``value`` is the integer for NUMBER tokens and the owned AST
    node for AST_REF tokens; it is None for everything else.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed/semantic value
    location: SourceLocation        # Source location

    def __str__(self) -> str:
        if self.type == TokenType.AST_REF:
            return f"{self.type.name}({self.value!r})"
        if self.value is not None and str(self.value) != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_operand(self) -> bool:
        """Check if this token can stand as an operand of a binary operator."""
        return self.type in OPERAND_TYPES

    @property
    def is_paren(self) -> bool:
        return self.type in (TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN)


# Lookup tables used by the lexer and parser

# Single-character operators and punctuation. '-' is handled separately
# because it may start a negative literal.
OPERATORS = {
    "+": TokenType.PLUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

WHITESPACE = frozenset(" \t\r\n")

DIGITS = frozenset("0123456789")

OPERAND_TYPES = frozenset({TokenType.NUMBER, TokenType.AST_REF})
