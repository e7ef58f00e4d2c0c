"""
Error handling for the exprtree parser.

Every parser error stops the parse: no partial tree is ever returned.

Author: xwest
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnbalancedParenError(ParseError):
    """A '(' without its ')' in range, or a ')' without an opening '('."""
    pass


class UnexpectedTokenError(ParseError):
    """A token in a position the reducer or the fold cannot handle."""
    pass


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P010": "Unexpected end of input",
    "P012": "Mismatched parentheses",
}


def _describe(token: Token) -> str:
    if token.type == TokenType.NUMBER:
        return f"number {token.value}"
    if token.type == TokenType.AST_REF:
        return "sub-expression"
    return f"'{token.lexeme}'"


def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> UnexpectedTokenError:
    """Create an error for an unexpected token."""
    expected_str = expected.name if isinstance(expected, TokenType) else expected
    found_str = _describe(found)

    suggestions = []
    if found.type in (TokenType.MULTIPLY, TokenType.DIVIDE):
        suggestions.append("Multiplication and division are not supported yet")
    elif found.type == TokenType.MINUS:
        suggestions.append("Write negative literals without a space, e.g. '-5'")

    return UnexpectedTokenError(
        message=f"Expected {expected_str}, found {found_str}",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position, but found {found_str} instead.",
        suggestions=suggestions
    )


def create_unclosed_paren_error(open_token: Token) -> UnbalancedParenError:
    """Create an error for a '(' whose ')' cannot be found in range."""
    return UnbalancedParenError(
        message="Unclosed delimiter '('",
        location=open_token.location,
        token=open_token,
        code="P012",
        help_text=f"The opening '(' at {open_token.location} was never closed.",
        suggestions=["Add a closing ')'", "Check for missing delimiters"]
    )


def create_unopened_paren_error(close_token: Token) -> UnbalancedParenError:
    """Create an error for a ')' with no matching '('."""
    return UnbalancedParenError(
        message="Unmatched delimiter ')'",
        location=close_token.location,
        token=close_token,
        code="P012",
        help_text=f"The closing ')' at {close_token.location} has no matching '('.",
        suggestions=["Remove the extra ')'", "Add an opening '('"]
    )


def create_unexpected_eof_error(expected: str, location: SourceLocation) -> ParseError:
    """Create an error for unexpected end of input."""
    return ParseError(
        message=f"Unexpected end of input, expected {expected}",
        location=location,
        code="P010",
        help_text=f"The parser reached the end of the expression while expecting {expected}.",
        suggestions=[f"Add the missing {expected}"]
    )
