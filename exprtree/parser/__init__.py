"""
exprtree Parser Package

Turns a token list into an expression tree.

Key Features:
- Pass 0 reduction of negated numbers and negated parenthesized groups
- Left-associative folding of + and -
- Single-owner AST nodes with explicit destroy()
- Pretty-printing via a visitor

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse_expression, find_matching_close
from .printer import ExpressionPrinter, render, print_ast
from .errors import ParseError, UnbalancedParenError, UnexpectedTokenError

__all__ = [
    # Core parser
    "Parser", "parse_expression", "find_matching_close",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor",
    "Main", "Negative", "Number", "BinaryOp",
    "Add", "Subtract", "Multiply", "Divide",
    "destroy",

    # Printing
    "ExpressionPrinter", "render", "print_ast",

    # Error handling
    "ParseError", "UnbalancedParenError", "UnexpectedTokenError",
]
