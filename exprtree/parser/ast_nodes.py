"""
Abstract Syntax Tree node definitions for exprtree.

Every node exclusively owns its children: there is no sharing, no cycles and
no parent back-reference. Nodes are built bottom-up by the parser and torn
down top-down by destroy(). Each node supports the visitor pattern.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any, Tuple
from enum import Enum

from ..lexer.tokens import SourceLocation, TokenType


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level wrapper (printing only)
    MAIN = "Main"

    # Unary
    NEGATIVE = "Negative"

    # Literals
    NUMBER = "Number"

    # Binary operators
    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, location: Optional[SourceLocation] = None):
        self.node_type = node_type
        self.location = location
        self.released = False

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    @abstractmethod
    def _key(self) -> Tuple:
        """Structural identity used for equality (location excluded)."""
        pass

    def release(self):
        """Drop references to children and mark this node as released."""
        self.released = True

    def __eq__(self, other) -> bool:
        if not isinstance(other, ASTNode):
            return NotImplemented
        return self.node_type == other.node_type and self._key() == other._key()

    # Structural equality makes nodes unhashable
    __hash__ = None

    def __str__(self) -> str:
        if self.location is not None:
            return f"{self.node_type.value}@{self.location}"
        return self.node_type.value


def _require_node(node: Any, role: str, owner: str) -> 'ASTNode':
    if not isinstance(node, ASTNode):
        raise TypeError(f"{owner} {role} must be an ASTNode, got {type(node).__name__}")
    return node


# ============================================================================
# Leaves
# ============================================================================

class Number(ASTNode):
    """Integer literal."""
    value: int

    def __init__(self, value: int, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.NUMBER, location)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def _key(self) -> Tuple:
        return (self.value,)

    def __repr__(self) -> str:
        return f"Number({self.value})"


# ============================================================================
# Single-body nodes
# ============================================================================

class UnaryNode(ASTNode):
    """Base class for nodes that own a single body expression."""
    body: Optional[ASTNode]

    def __init__(self, node_type: ASTNodeType, body: ASTNode,
                 location: Optional[SourceLocation] = None):
        super().__init__(node_type, location)
        self.body = _require_node(body, "body", node_type.value)

    def children(self) -> List[ASTNode]:
        return [self.body] if self.body is not None else []

    def _key(self) -> Tuple:
        return (self.body,)

    def release(self):
        self.body = None
        super().release()

    def __repr__(self) -> str:
        return f"{self.node_type.value}({self.body!r})"


class Negative(UnaryNode):
    """Unary negation of a sub-expression."""

    def __init__(self, body: ASTNode, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.NEGATIVE, body, location)


class Main(UnaryNode):
    """Top-level wrapper rendered as "main() = <body>". Never built by the parser."""

    def __init__(self, body: ASTNode, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.MAIN, body, location)


# ============================================================================
# Binary operators
# ============================================================================

class BinaryOp(ASTNode):
    """Binary operation expression."""
    left: Optional[ASTNode]
    right: Optional[ASTNode]

    def __init__(self, node_type: ASTNodeType, left: ASTNode, right: ASTNode,
                 location: Optional[SourceLocation] = None):
        super().__init__(node_type, location)
        self.left = _require_node(left, "left operand", node_type.value)
        self.right = _require_node(right, "right operand", node_type.value)

    @property
    def operator(self) -> str:
        return OPERATOR_SYMBOLS[self.node_type]

    def children(self) -> List[ASTNode]:
        return [child for child in (self.left, self.right) if child is not None]

    def _key(self) -> Tuple:
        return (self.left, self.right)

    def release(self):
        self.left = None
        self.right = None
        super().release()

    def __repr__(self) -> str:
        return f"{self.node_type.value}({self.left!r}, {self.right!r})"


class Add(BinaryOp):
    def __init__(self, left: ASTNode, right: ASTNode, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.ADD, left, right, location)


class Subtract(BinaryOp):
    def __init__(self, left: ASTNode, right: ASTNode, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.SUBTRACT, left, right, location)


class Multiply(BinaryOp):
    """Reserved: the grammar does not produce multiplication yet."""

    def __init__(self, left: ASTNode, right: ASTNode, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.MULTIPLY, left, right, location)


class Divide(BinaryOp):
    """Reserved: the grammar does not produce division yet."""

    def __init__(self, left: ASTNode, right: ASTNode, location: Optional[SourceLocation] = None):
        super().__init__(ASTNodeType.DIVIDE, left, right, location)


OPERATOR_SYMBOLS = {
    ASTNodeType.ADD: "+",
    ASTNodeType.SUBTRACT: "-",
    ASTNodeType.MULTIPLY: "*",
    ASTNodeType.DIVIDE: "/",
}

# Operator tokens the additive fold turns into nodes
BINARY_NODES = {
    TokenType.PLUS: Add,
    TokenType.MINUS: Subtract,
}


def destroy(node: ASTNode) -> int:
    """
    Release a tree, children before parents.

    Returns the number of nodes released. Each node must be destroyed exactly
    once; destroying a tree twice, or destroying None, is not supported.
    """
    released = 0
    for child in node.children():
        released += destroy(child)
    node.release()
    return released + 1
