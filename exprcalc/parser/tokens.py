"""
Tokens produced by the compiler.

A compiled expression is a list of tokens in postfix order. Only operands
and operators appear in the final list; left parentheses exist on the
compiler's stack while compiling and right parentheses are never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from ..math.value import Value
from .operators import NEGATE, OperatorInfo


class TokenType(Enum):
    """Token kinds."""

    OPERAND = auto()
    OPERATOR = auto()
    LEFT_PAREN = auto()


@dataclass(frozen=True)
class OperandToken:
    """A literal or resolved value."""

    value: Value

    @property
    def type(self) -> TokenType:
        return TokenType.OPERAND

    def __repr__(self) -> str:
        return f"OperandToken({self.value!r})"


@dataclass(frozen=True)
class OperatorToken:
    """An operator with its precedence and evaluator."""

    info: OperatorInfo

    @property
    def type(self) -> TokenType:
        return TokenType.OPERATOR

    @property
    def precedence(self) -> int:
        return self.info.precedence

    @property
    def symbol(self) -> str:
        return self.info.symbol

    def __repr__(self) -> str:
        name = "NEGATE" if self.info.symbol == NEGATE else self.info.symbol
        return f"OperatorToken({name!r})"


@dataclass(frozen=True)
class LeftParenToken:
    """Marks an open parenthesis on the compiler stack."""

    @property
    def type(self) -> TokenType:
        return TokenType.LEFT_PAREN


Token = Union[OperandToken, OperatorToken, LeftParenToken]
