"""
Error handling for the exprtree lexer.

Provides error reporting with source location information and
suggestions for characters that look like supported operators.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer meets a character it cannot tokenize.

    The scan stops at the first such character; no partial token list is
    returned.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        character: Optional[str] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.character = character
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorRecovery:
    """
    Suggestion helpers for lexer errors.
    """

    # Look-alike characters people paste in from documents and calculators
    OPERATOR_ALTERNATIVES = {
        '×': ['*'],
        '⋅': ['*'],
        'x': ['*'],
        'X': ['*'],
        '÷': ['/'],
        ':': ['/'],
        '−': ['-'],
        '–': ['-'],
        '—': ['-'],
        '⊕': ['+'],
        '[': ['('],
        '{': ['('],
        ']': [')'],
        '}': [')'],
    }

    @staticmethod
    def suggest_operator_alternatives(char: str) -> List[str]:
        """Suggest supported operators for a character that resembles one."""
        return list(ErrorRecovery.OPERATOR_ALTERNATIVES.get(char, []))


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    suggestions = ErrorRecovery.suggest_operator_alternatives(char)

    if suggestions:
        help_text = f"Did you mean {', '.join(repr(s) for s in suggestions)}?"
    elif char.isprintable():
        help_text = ("Only digits, whitespace, parentheses and the operators "
                     "+ - * / are allowed in an expression.")
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        character=char,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )
