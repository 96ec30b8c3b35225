"""
Postfix token execution.

Reduces a postfix token list with a value stack: operands are pushed,
operators pop their operands and push one result.
"""

from __future__ import annotations

from typing import Iterable

from ..math.value import Value
from .tokens import OperandToken, OperatorToken, Token


def execute_tokens(tokens: Iterable[Token]) -> Value:
    """
    Evaluate tokens in postfix order.

    Args:
        tokens: Operand and operator tokens, as produced by Tokenizer

    Returns:
        The single remaining value, or integer 0 for an empty list

    Raises:
        ValueError: If the token list is not a well-formed postfix sequence
    """
    stack: list[Value] = []

    for token in tokens:
        if isinstance(token, OperandToken):
            # Copy so a compiled token list can be executed repeatedly
            stack.append(Value(token.value))
        elif isinstance(token, OperatorToken):
            if len(stack) < token.info.operand_count:
                raise ValueError(f"Not enough operands for {token!r}")
            token.info.evaluate(stack)
        else:
            raise ValueError(f"Unexpected token in postfix list: {token!r}")

    if not stack:
        return Value()
    if len(stack) > 1:
        raise ValueError(f"Malformed postfix list: {len(stack)} values left on the stack")
    return stack.pop()
