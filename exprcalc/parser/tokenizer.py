"""
Infix to postfix compiler.

Scans an expression left to right and converts it to a list of tokens in
postfix order using the shunting-yard algorithm. A small state machine
tracks whether an operand or an operator is expected next, which is how
unary minus/plus are told apart from the binary operators.

Identifiers are resolved while compiling: symbols through the evaluator's
symbol resolver, and ``name(args)`` calls through its function resolver.
Function arguments are evaluated recursively as independent expressions.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..errors import ExpressionError, ExpressionSyntaxError
from ..math.value import Value, parse_integer
from .cursor import TextCursor
from .operators import ADD, NEGATE, OPERATORS, SUBTRACT, get_operator_info
from .tokens import LeftParenToken, OperandToken, OperatorToken, Token

if TYPE_CHECKING:
    from ..evaluator import ExpressionEvaluator


class State(Enum):
    """What the compiler has just seen."""

    NONE = 0
    OPERAND = 1
    OPERATOR = 2
    UNARY_OPERATOR = 3


# Error messages
ERR_INVALID_OPERAND = "Invalid operand"
ERR_OPERAND_EXPECTED = "Operand expected"
ERR_OPERATOR_EXPECTED = "Operator expected"
ERR_UNMATCHED_CLOSING_PAREN = "Closing parenthesis without matching open parenthesis"
ERR_MULTIPLE_DECIMAL_POINTS = "Operand contains multiple decimal points"
ERR_UNEXPECTED_CHARACTER = 'Unexpected character encountered "{0}"'
ERR_CLOSING_PAREN_EXPECTED = "Closing parenthesis expected"
ERR_CLOSING_QUOTE_EXPECTED = "Closing quote expected"

QUOTE_CHARS = "\"'"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_number_char(char: str) -> bool:
    return _is_digit(char) or char == "."


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _is_operator(char: str) -> bool:
    # NEGATE is internal only and never matches input text
    return char != NEGATE and char in OPERATORS


class Tokenizer:
    """
    Compiles one expression into postfix tokens.

    A Tokenizer is created per expression; it keeps no state between calls
    to tokenize() other than the evaluator it reports identifiers to and
    the nesting depth of the expression being compiled.
    """

    def __init__(self, evaluator: ExpressionEvaluator, depth: int = 0):
        """
        Initialize tokenizer.

        Args:
            evaluator: Evaluator used to resolve symbols, call functions and
                evaluate function arguments
            depth: Function-argument nesting depth of the expression (0 = top level)
        """
        self.evaluator = evaluator
        self.depth = depth

    def tokenize(self, expression: str) -> list[Token]:
        """
        Convert an infix expression to a postfix token list.

        Args:
            expression: The expression to compile

        Returns:
            Operand and operator tokens in postfix order

        Raises:
            ExpressionSyntaxError: If the expression is malformed
            ExpressionError: If an identifier cannot be resolved
        """
        tokens: list[Token] = []
        stack: list[OperatorToken | LeftParenToken] = []
        state = State.NONE
        paren_count = 0

        cursor = TextCursor(expression)

        while not cursor.end_of_text:
            char = cursor.peek()

            if char.isspace():
                cursor.move_ahead()

            elif char == "(":
                # Cannot follow operand
                if state == State.OPERAND:
                    raise ExpressionSyntaxError(ERR_OPERATOR_EXPECTED, cursor.index)
                # Allow additional unary operators after "("
                if state == State.UNARY_OPERATOR:
                    state = State.OPERATOR
                stack.append(LeftParenToken())
                paren_count += 1
                cursor.move_ahead()

            elif char == ")":
                if state != State.OPERAND:
                    raise ExpressionSyntaxError(ERR_OPERAND_EXPECTED, cursor.index)
                if paren_count == 0:
                    raise ExpressionSyntaxError(ERR_UNMATCHED_CLOSING_PAREN, cursor.index)
                # Pop operators until the matching "("
                token = stack.pop()
                while not isinstance(token, LeftParenToken):
                    tokens.append(token)
                    token = stack.pop()
                paren_count -= 1
                cursor.move_ahead()

            elif _is_operator(char):
                if state == State.OPERAND:
                    # Binary operator: pop operators that bind at least as tightly
                    info = get_operator_info(char)
                    while (
                        stack
                        and isinstance(stack[-1], OperatorToken)
                        and stack[-1].precedence >= info.precedence
                    ):
                        tokens.append(stack.pop())
                    stack.append(OperatorToken(info))
                    state = State.OPERATOR
                elif state == State.UNARY_OPERATOR:
                    # No two unary operators in a row
                    raise ExpressionSyntaxError(ERR_OPERAND_EXPECTED, cursor.index)
                elif char == SUBTRACT:
                    stack.append(OperatorToken(get_operator_info(NEGATE)))
                    state = State.UNARY_OPERATOR
                elif char == ADD:
                    # Unary plus is a no-op
                    state = State.UNARY_OPERATOR
                else:
                    raise ExpressionSyntaxError(ERR_OPERAND_EXPECTED, cursor.index)
                cursor.move_ahead()

            elif _is_number_char(char):
                if state == State.OPERAND:
                    raise ExpressionSyntaxError(ERR_OPERATOR_EXPECTED, cursor.index)
                tokens.append(OperandToken(self._parse_number(cursor)))
                state = State.OPERAND

            elif _is_identifier_start(char):
                if state == State.OPERAND:
                    raise ExpressionSyntaxError(ERR_OPERATOR_EXPECTED, cursor.index)
                tokens.append(OperandToken(self._parse_identifier(cursor)))
                state = State.OPERAND

            elif char in QUOTE_CHARS:
                if state == State.OPERAND:
                    raise ExpressionSyntaxError(ERR_OPERATOR_EXPECTED, cursor.index)
                start = cursor.index
                text, terminated = cursor.parse_quoted_text()
                if not terminated:
                    raise ExpressionSyntaxError(ERR_CLOSING_QUOTE_EXPECTED, start)
                tokens.append(OperandToken(Value(text)))
                state = State.OPERAND

            else:
                raise ExpressionSyntaxError(ERR_UNEXPECTED_CHARACTER.format(char), cursor.index)

        # Expression cannot end with an operator
        if state in (State.OPERATOR, State.UNARY_OPERATOR):
            raise ExpressionSyntaxError(ERR_OPERAND_EXPECTED, cursor.index)
        if paren_count > 0:
            raise ExpressionSyntaxError(ERR_CLOSING_PAREN_EXPECTED, cursor.index)

        while stack:
            tokens.append(stack.pop())

        return tokens

    def _parse_number(self, cursor: TextCursor) -> Value:
        """Consume a run of digits with at most one decimal point."""
        start = cursor.index
        has_decimal = False
        while _is_number_char(cursor.peek()):
            if cursor.peek() == ".":
                if has_decimal:
                    raise ExpressionSyntaxError(ERR_MULTIPLE_DECIMAL_POINTS, cursor.index)
                has_decimal = True
            cursor.move_ahead()

        token = cursor.extract(start, cursor.index)
        if token == ".":
            raise ExpressionSyntaxError(ERR_INVALID_OPERAND, start)
        if has_decimal:
            return Value(float(token))
        return Value(parse_integer(token))

    def _parse_identifier(self, cursor: TextCursor) -> Value:
        """Consume a symbol or function call and return its resolved value."""
        # Save start of symbol for error reporting
        symbol_pos = cursor.index
        name = cursor.parse_while(_is_identifier_char)
        cursor.skip_whitespace()

        if cursor.peek() == "(":
            arguments = self._parse_arguments(cursor)
            return self.evaluator.call_function(name, arguments, symbol_pos)
        return self.evaluator.resolve_symbol(name, symbol_pos)

    def _parse_arguments(self, cursor: TextCursor) -> list[Value]:
        """
        Parse and evaluate a function argument list.

        The cursor must be on the opening parenthesis. Commas separate
        arguments only at the outermost level, so arguments may contain
        parenthesized groups and nested function calls. Quoted literals are
        skipped as a whole.

        Returns:
            Evaluated arguments in order (empty for ``f()``)
        """
        # Move past open parenthesis
        cursor.move_ahead()

        arguments: list[Value] = []
        cursor.skip_whitespace()
        if cursor.peek() != ")":
            start = cursor.index
            paren_count = 1

            while not cursor.end_of_text:
                char = cursor.peek()
                if char in QUOTE_CHARS:
                    cursor.parse_quoted_text()
                    continue
                if char == "," and paren_count == 1:
                    arguments.append(self._evaluate_argument(cursor, start))
                    start = cursor.index + 1
                elif char == "(":
                    paren_count += 1
                elif char == ")":
                    paren_count -= 1
                    if paren_count == 0:
                        arguments.append(self._evaluate_argument(cursor, start))
                        break
                cursor.move_ahead()

        if cursor.peek() != ")":
            raise ExpressionSyntaxError(ERR_CLOSING_PAREN_EXPECTED, cursor.index)
        cursor.move_ahead()
        return arguments

    def _evaluate_argument(self, cursor: TextCursor, start: int) -> Value:
        """
        Evaluate the argument text between ``start`` and the cursor.

        Errors are re-raised with their position moved into the coordinate
        space of the enclosing expression.
        """
        expression = cursor.extract(start, cursor.index)
        try:
            return self.evaluator.evaluate_at_depth(expression, self.depth + 1)
        except ExpressionError as error:
            error.rebase(start)
            raise
