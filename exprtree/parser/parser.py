"""
exprtree Parser Implementation

Two passes over the lexer's flat token list:

  pass 0 (reduce)  collapses unary minus applied to a number or to a
                   parenthesized group into a single AST_REF token, parsing
                   the group recursively
  pass 1/2 (fold)  left-folds the remaining + and - operators into a tree

Multiplication and division are tokenized but the grammar does not consume
them; they are rejected in pass 0.

Author: xwest
"""

import logging
from typing import List, Optional, Tuple

from ..lexer.tokens import Token, TokenType, SourceLocation
from .ast_nodes import ASTNode, Number, Negative, BINARY_NODES
from .errors import (
    create_unexpected_token_error, create_unclosed_paren_error,
    create_unopened_paren_error, create_unexpected_eof_error
)

logger = logging.getLogger(__name__)


# Tokens after which a '-' is a unary minus rather than a binary operator
UNARY_CONTEXT = frozenset({TokenType.PLUS, TokenType.MINUS, TokenType.LEFT_PAREN})

# Tokens pass 0 copies through unchanged
PASSTHROUGH = frozenset({TokenType.NUMBER, TokenType.PLUS, TokenType.MINUS, TokenType.AST_REF})


def find_matching_close(tokens: List[Token], open_index: int) -> Optional[int]:
    """
    Return the index of the ')' matching the '(' at open_index, or None.

    Depth counting handles nested groups; the scan runs to the end of the
    token list.
    """
    depth = 1
    for i in range(open_index + 1, len(tokens)):
        token_type = tokens[i].type
        if token_type == TokenType.LEFT_PAREN:
            depth += 1
        elif token_type == TokenType.RIGHT_PAREN:
            depth -= 1

        if depth == 0:
            return i

    return None


class Parser:
    """
    exprtree expression parser.

    Reduces negated sub-expressions, then folds additive operators into a
    left-associative tree. The first error aborts the parse.
    """

    def __init__(self, tokens: List[Token], filename: str = "<string>"):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer
            filename: Name used for locations when there is no token to point at
        """
        self.tokens = tokens
        self.filename = filename

    def parse(self) -> ASTNode:
        """
        Parse the token list into an AST.

        Returns:
            Root node of the expression tree

        Raises:
            ParseError: If parsing fails
        """
        root = self._parse_range(0, len(self.tokens))
        logger.debug("Parsed %d tokens into %r", len(self.tokens), root)
        return root

    def find_matching_close(self, open_index: int) -> Optional[int]:
        """Index of the ')' matching the '(' at open_index, or None."""
        return find_matching_close(self.tokens, open_index)

    # Pass 0

    def reduce(self, start: int = 0, end: Optional[int] = None) -> List[Token]:
        """
        Collapse negated numbers and negated groups in tokens[start:end].

        Returns a new token list in which each such span is replaced by a
        single AST_REF token. Bare parenthesized groups are kept as-is, but
        their parentheses must balance within the range.
        """
        if end is None:
            end = len(self.tokens)

        reduced: List[Token] = []
        depth = 0
        i = start

        while i < end:
            token = self.tokens[i]

            if token.type == TokenType.MINUS and self._is_unary_position(reduced):
                node, next_index = self._reduce_negation(i, end)
                lexeme = " ".join(t.lexeme for t in self.tokens[i:next_index])
                reduced.append(Token(TokenType.AST_REF, lexeme, node, token.location))
                logger.debug("Reduced tokens %d..%d to %r", i, next_index - 1, node)
                i = next_index
                continue

            if token.type in PASSTHROUGH:
                reduced.append(token)
            elif token.type == TokenType.LEFT_PAREN:
                close_index = self.find_matching_close(i)
                if close_index is None or close_index >= end:
                    raise create_unclosed_paren_error(token)
                depth += 1
                reduced.append(token)
            elif token.type == TokenType.RIGHT_PAREN:
                if depth == 0:
                    raise create_unopened_paren_error(token)
                depth -= 1
                reduced.append(token)
            else:
                raise create_unexpected_token_error("number, '+', '-' or parenthesis", token)

            i += 1

        return reduced

    def _is_unary_position(self, reduced: List[Token]) -> bool:
        return not reduced or reduced[-1].type in UNARY_CONTEXT

    def _reduce_negation(self, minus_index: int, end: int) -> Tuple[ASTNode, int]:
        """Build the Negative node for the unary '-' at minus_index.

        Returns the node and the index just past the consumed span.
        """
        minus = self.tokens[minus_index]
        operand_index = minus_index + 1

        if operand_index >= end:
            raise create_unexpected_eof_error("a number or '(' after '-'", minus.location)

        operand = self.tokens[operand_index]

        if operand.type == TokenType.NUMBER:
            body = Number(operand.value, operand.location)
            return Negative(body, minus.location), operand_index + 1

        if operand.type == TokenType.LEFT_PAREN:
            close_index = self.find_matching_close(operand_index)
            if close_index is None or close_index >= end:
                raise create_unclosed_paren_error(operand)
            body = self._parse_range(operand_index + 1, close_index)
            return Negative(body, minus.location), close_index + 1

        raise create_unexpected_token_error("a number or '(' after '-'", operand)

    # Pass 1/2

    def fold(self, tokens: List[Token]) -> Optional[ASTNode]:
        """
        Left-fold '+' and '-' in an already reduced token list.

        Only indices 1 .. len - 2 are examined, so the first and last tokens
        are never treated as operators. Returns None when no operator was
        found; the caller then falls back to the single operand.
        """
        root: Optional[ASTNode] = None

        for i in range(1, len(tokens) - 1):
            token = tokens[i]
            node_class = BINARY_NODES.get(token.type)
            if node_class is None:
                continue

            left = root if root is not None else self._operand(tokens[i - 1])
            right = self._operand(tokens[i + 1])
            root = node_class(left, right, token.location)

        return root

    def _operand(self, token: Token) -> ASTNode:
        """Turn an operand token into a node: AST_REF unwraps, NUMBER becomes a leaf."""
        if token.type == TokenType.AST_REF:
            return token.value
        if token.type == TokenType.NUMBER:
            return Number(token.value, token.location)
        raise create_unexpected_token_error("a number or sub-expression", token)

    # Helpers

    def _parse_range(self, start: int, end: int) -> ASTNode:
        """Reduce then fold tokens[start:end] into a single node."""
        reduced = self.reduce(start, end)
        root = self.fold(reduced)
        if root is None:
            root = self._single_operand(reduced, end)
        return root

    def _single_operand(self, reduced: List[Token], end: int) -> ASTNode:
        """Result for a range without operators: exactly one operand, optionally parenthesized."""
        operands = []
        for token in reduced:
            if token.is_operand:
                operands.append(token)
            elif not token.is_paren:
                raise create_unexpected_token_error("a number or sub-expression", token)

        if not operands:
            raise create_unexpected_eof_error("an expression", self._location_at(end))
        if len(operands) > 1:
            raise create_unexpected_token_error("an operator", operands[1])

        return self._operand(operands[0])

    def _location_at(self, index: int) -> SourceLocation:
        if index < len(self.tokens):
            return self.tokens[index].location
        if self.tokens:
            return self.tokens[-1].location
        return SourceLocation(self.filename, 1, 1, 0)


def parse_expression(source: str, filename: str = "<string>") -> ASTNode:
    """
    Convenience function to parse an expression string.

    Args:
        source: Expression text
        filename: Filename for error reporting

    Returns:
        Root AST node (a bare expression, never a Main wrapper)

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    tokens = tokenize_string(source, filename)
    parser = Parser(tokens, filename)
    return parser.parse()
