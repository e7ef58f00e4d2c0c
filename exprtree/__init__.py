"""
exprtree Package

Parses integer arithmetic expressions into abstract syntax trees.

Architecture:
    exprtree/
    ├── lexer/           # Tokenization
    └── parser/          # Reduction, additive folding, AST nodes, printing

Example:
    >>> from exprtree import parse_expression, render
    >>> render(parse_expression("1 + 2 - 3"))
    '((1 + 2) - 3)'

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@exprtree.org"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, LexerError, tokenize_string
from .parser import (
    Parser, parse_expression, render, print_ast, destroy,
    ASTNode, ASTNodeType, Main, Negative, Number, Add, Subtract, Multiply, Divide,
    ParseError, UnbalancedParenError, UnexpectedTokenError,
)

__all__ = [
    # Pipeline
    "Lexer",
    "Parser",
    "tokenize_string",
    "parse_expression",

    # Tree
    "ASTNode", "ASTNodeType",
    "Main", "Negative", "Number", "Add", "Subtract", "Multiply", "Divide",
    "destroy",
    "render",
    "print_ast",

    # Tokens
    "Token",
    "TokenType",

    # Errors
    "LexerError",
    "ParseError",
    "UnbalancedParenError",
    "UnexpectedTokenError",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
