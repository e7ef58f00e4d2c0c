"""
Pretty-printer for exprtree ASTs.

Output grammar:
    main() = <expr>
    (<left> + <right>)   (<left> - <right>)   (<left> * <right>)   (<left> / <right>)
    - <body>             - (- <body>) when the body is itself a negation
    <decimal integer>

Negation is printed with a space after the minus so the text lexes back to a
unary minus operator instead of a negative literal. A negated negation is
wrapped in parentheses since unary minus only applies to a number or a group.

Author: xwest
"""

import sys
from typing import Optional, TextIO

from .ast_nodes import ASTVisitor, ASTNode, ASTNodeType, BinaryOp


class ExpressionPrinter(ASTVisitor):
    """Renders a tree to text by recursive descent over the visitor interface."""

    def visit(self, node: ASTNode) -> str:
        if node.node_type == ASTNodeType.MAIN:
            return f"main() = {node.body.accept(self)}"

        if node.node_type == ASTNodeType.NUMBER:
            return str(node.value)

        if node.node_type == ASTNodeType.NEGATIVE:
            # Unary minus only takes a number or a group, so nest negations in parens
            if node.body.node_type == ASTNodeType.NEGATIVE:
                return f"- ({node.body.accept(self)})"
            return f"- {node.body.accept(self)}"

        if isinstance(node, BinaryOp):
            return f"({node.left.accept(self)} {node.operator} {node.right.accept(self)})"

        raise TypeError(f"Cannot render node type {node.node_type.value}")


def render(node: ASTNode) -> str:
    """Render a tree using the exprtree output grammar."""
    return node.accept(ExpressionPrinter())


def print_ast(node: ASTNode, file: Optional[TextIO] = None):
    """Write the rendered tree to file (stdout by default), without a newline."""
    stream = file if file is not None else sys.stdout
    stream.write(render(node))
