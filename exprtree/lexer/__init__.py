"""
exprtree Lexer Package

Implements the lexical analyzer (tokenizer) for arithmetic expressions.

Key Features:
- Integer literals, including negative literals written as "-5"
- Operators + - * / and parentheses
- Space-sensitive minus: "- 5" is an operator, "-5" is a literal
- Source location tracking for error messages

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string
from .errors import LexerError, Diagnostic

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "LexerError",
    "Diagnostic",
    "tokenize_string",
]
