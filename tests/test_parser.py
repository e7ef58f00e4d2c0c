"""
Test suite for the exprtree parser.

Tests cover:
- Literals and left-associative addition/subtraction
- Pass 0 reduction of negated numbers and negated groups
- Paren matching and balance errors
- The fold's first/last token convention and the single-operand fallback

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from exprtree.lexer.lexer import tokenize_string
from exprtree.lexer.tokens import Token, TokenType, SourceLocation
from exprtree.lexer.errors import LexerError
from exprtree.parser.parser import Parser, parse_expression, find_matching_close
from exprtree.parser.ast_nodes import Main, Negative, Number, Add, Subtract
from exprtree.parser.errors import ParseError, UnbalancedParenError, UnexpectedTokenError


LOC = SourceLocation("<test>", 1, 1, 0)


def tok(token_type, lexeme, value=None):
    return Token(token_type, lexeme, value, LOC)


class TestLiterals(unittest.TestCase):
    """Single-literal expressions."""

    def test_plain_numbers(self):
        for n in [0, 1, 9, 10, 123, 98765]:
            with self.subTest(n=n):
                self.assertEqual(parse_expression(str(n)), Number(n))

    def test_negative_literals(self):
        for n in [0, 1, 9, 10, 123, 98765]:
            with self.subTest(n=n):
                self.assertEqual(parse_expression(f"-{n}"), Number(-n))

    def test_parenthesized_literal(self):
        self.assertEqual(parse_expression("(5)"), Number(5))
        self.assertEqual(parse_expression("((5))"), Number(5))

    def test_returns_bare_expression(self):
        self.assertNotIsInstance(parse_expression("1 + 2"), Main)


class TestAdditiveFold(unittest.TestCase):
    """Addition and subtraction."""

    def test_addition(self):
        self.assertEqual(parse_expression("1 + 2"), Add(Number(1), Number(2)))

    def test_subtraction(self):
        self.assertEqual(parse_expression("5 - 3"), Subtract(Number(5), Number(3)))

    def test_left_associativity(self):
        self.assertEqual(
            parse_expression("1 + 2 - 3"),
            Subtract(Add(Number(1), Number(2)), Number(3))
        )

    def test_long_chain(self):
        self.assertEqual(
            parse_expression("10 - 4 - 3 + 1"),
            Add(Subtract(Subtract(Number(10), Number(4)), Number(3)), Number(1))
        )

    def test_negative_literal_operand(self):
        self.assertEqual(parse_expression("1 + -2"), Add(Number(1), Number(-2)))

    def test_outer_parentheses(self):
        self.assertEqual(parse_expression("(1 + 2)"), Add(Number(1), Number(2)))

    def test_leading_group(self):
        self.assertEqual(
            parse_expression("((1 + 2) - 3)"),
            Subtract(Add(Number(1), Number(2)), Number(3))
        )
        self.assertEqual(
            parse_expression("(1 + 2) + 3"),
            Add(Add(Number(1), Number(2)), Number(3))
        )

    def test_operator_locations(self):
        tree = parse_expression("1 + 2 - 3")
        self.assertEqual(tree.location.column, 7)
        self.assertEqual(tree.left.location.column, 3)


class TestNegation(unittest.TestCase):
    """Pass 0 reduction of unary minus."""

    def test_negated_number(self):
        self.assertEqual(parse_expression("- 5"), Negative(Number(5)))

    def test_negated_group(self):
        self.assertEqual(
            parse_expression("- (1 + 2)"),
            Negative(Add(Number(1), Number(2)))
        )

    def test_negated_group_from_tokens(self):
        tokens = [
            tok(TokenType.MINUS, "-"),
            tok(TokenType.LEFT_PAREN, "("),
            tok(TokenType.NUMBER, "1", 1),
            tok(TokenType.PLUS, "+"),
            tok(TokenType.NUMBER, "2", 2),
            tok(TokenType.RIGHT_PAREN, ")"),
        ]
        self.assertEqual(Parser(tokens).parse(), Negative(Add(Number(1), Number(2))))

    def test_negated_single_value_group(self):
        self.assertEqual(parse_expression("- (7)"), Negative(Number(7)))

    def test_negated_group_as_operand(self):
        self.assertEqual(
            parse_expression("- (1 + 2) + 3"),
            Add(Negative(Add(Number(1), Number(2))), Number(3))
        )

    def test_nested_negated_groups(self):
        self.assertEqual(
            parse_expression("- (- (1 + 2) - 4)"),
            Negative(Subtract(Negative(Add(Number(1), Number(2))), Number(4)))
        )

    def test_unary_minus_after_operator(self):
        self.assertEqual(parse_expression("1 + - 2"), Add(Number(1), Negative(Number(2))))
        self.assertEqual(parse_expression("1 - - 2"), Subtract(Number(1), Negative(Number(2))))

    def test_unary_minus_after_open_paren(self):
        self.assertEqual(
            parse_expression("(- 5 + 1)"),
            Add(Negative(Number(5)), Number(1))
        )

    def test_minus_paren_without_space_quirk(self):
        """'-(' lexes as NUMBER(0) and the fold never looks at the first token."""
        self.assertEqual(parse_expression("-(1 + 2)"), Add(Number(1), Number(2)))


class TestReduce(unittest.TestCase):
    """Direct checks of the reduction pass."""

    def test_reduce_replaces_negation_span(self):
        reduced = Parser(tokenize_string("- 5 + 1")).reduce()
        self.assertEqual([t.type for t in reduced],
                         [TokenType.AST_REF, TokenType.PLUS, TokenType.NUMBER])
        self.assertEqual(reduced[0].value, Negative(Number(5)))

    def test_reduce_keeps_bare_groups(self):
        reduced = Parser(tokenize_string("(1 + 2)")).reduce()
        self.assertEqual([t.type for t in reduced], [
            TokenType.LEFT_PAREN, TokenType.NUMBER, TokenType.PLUS,
            TokenType.NUMBER, TokenType.RIGHT_PAREN,
        ])

    def test_reduce_sub_range(self):
        parser = Parser(tokenize_string("(- 3 + 4)"))
        reduced = parser.reduce(1, 5)
        self.assertEqual([t.type for t in reduced],
                         [TokenType.AST_REF, TokenType.PLUS, TokenType.NUMBER])

    def test_reduce_logs_reductions(self):
        with self.assertLogs("exprtree.parser.parser", level="DEBUG") as logs:
            Parser(tokenize_string("- 5")).reduce()
        self.assertTrue(any("Reduced" in line for line in logs.output))


class TestFold(unittest.TestCase):
    """Direct checks of the folding pass."""

    def test_fold_without_operator_returns_none(self):
        parser = Parser([])
        self.assertIsNone(parser.fold([]))
        self.assertIsNone(parser.fold([tok(TokenType.NUMBER, "1", 1)]))

    def test_fold_skips_first_token(self):
        tokens = tokenize_string("+ 1 + 2")
        self.assertEqual(Parser(tokens).fold(tokens), Add(Number(1), Number(2)))

    def test_fold_skips_last_token(self):
        """A trailing operator after a complete fold is ignored."""
        self.assertEqual(parse_expression("1 + 2 +"), Add(Number(1), Number(2)))

    def test_fold_unwraps_ast_ref(self):
        node = Negative(Number(4))
        tokens = [
            tok(TokenType.AST_REF, "- 4", node),
            tok(TokenType.MINUS, "-"),
            tok(TokenType.NUMBER, "1", 1),
        ]
        root = Parser(tokens).fold(tokens)
        self.assertEqual(root, Subtract(Negative(Number(4)), Number(1)))
        self.assertIs(root.left, node)


class TestParenMatcher(unittest.TestCase):
    """find_matching_close depth counting."""

    def setUp(self):
        # 0 1 2 3 4 5 6 7 8 9 10
        # ( 1 + ( 2 - 3 ) ) + 4
        self.tokens = tokenize_string("(1 + (2 - 3)) + 4")

    def test_outer_group(self):
        self.assertEqual(find_matching_close(self.tokens, 0), 8)

    def test_inner_group(self):
        self.assertEqual(find_matching_close(self.tokens, 3), 7)

    def test_method_delegates(self):
        self.assertEqual(Parser(self.tokens).find_matching_close(0), 8)

    def test_not_found(self):
        self.assertIsNone(find_matching_close(tokenize_string("((1)"), 0))


class TestParseErrors(unittest.TestCase):
    """Failure modes; the first error aborts the parse."""

    def test_unclosed_paren(self):
        with self.assertRaises(UnbalancedParenError) as ctx:
            parse_expression("(1 + 2")
        self.assertEqual(ctx.exception.code, "P012")
        self.assertEqual(ctx.exception.token.type, TokenType.LEFT_PAREN)

    def test_unopened_paren(self):
        with self.assertRaises(UnbalancedParenError):
            parse_expression("1 + 2)")

    def test_unclosed_negated_group(self):
        with self.assertRaises(UnbalancedParenError):
            parse_expression("- (1 + 2")

    def test_negated_group_closing_outside_range(self):
        # tokens: - ( 1 + 2 ) ; the ')' at index 5 lies past the range end
        parser = Parser(tokenize_string("- (1 + 2)"))
        with self.assertRaises(UnbalancedParenError):
            parser.reduce(0, 4)

    def test_unclosed_outer_group_around_negation(self):
        with self.assertRaises(UnbalancedParenError):
            parse_expression("(- (1 + 2)")

    def test_multiplication_not_supported(self):
        with self.assertRaises(UnexpectedTokenError) as ctx:
            parse_expression("2 * 3")
        self.assertEqual(ctx.exception.token.type, TokenType.MULTIPLY)

    def test_division_not_supported(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_expression("6 / 3")

    def test_first_error_wins(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_expression("1 * (2")

    def test_empty_input(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("")
        self.assertEqual(ctx.exception.code, "P010")

    def test_empty_group(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("()")
        self.assertEqual(ctx.exception.code, "P010")

    def test_dangling_unary_minus(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression("- ")
        self.assertEqual(ctx.exception.code, "P010")

    def test_two_operands_without_operator(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_expression("1 2")

    def test_trailing_minus_literal(self):
        # "1 -" lexes as 1 followed by the literal -0
        with self.assertRaises(UnexpectedTokenError):
            parse_expression("1 -")

    def test_lone_operator(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_expression("+ 1")

    def test_unary_minus_before_operator(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_expression("- + 1")

    def test_bare_group_as_right_operand(self):
        with self.assertRaises(UnexpectedTokenError):
            parse_expression("1 + (2 + 3)")

    def test_lexer_errors_propagate(self):
        with self.assertRaises(LexerError):
            parse_expression("1 & 2")

    def test_parse_error_is_not_lexer_error(self):
        self.assertFalse(issubclass(ParseError, LexerError))
        self.assertTrue(issubclass(UnbalancedParenError, ParseError))
        self.assertTrue(issubclass(UnexpectedTokenError, ParseError))


if __name__ == "__main__":
    unittest.main()
