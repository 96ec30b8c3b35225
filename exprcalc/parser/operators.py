"""
Static operator table.

Maps each operator symbol to its precedence and the function that reduces
the evaluation stack. Higher precedence binds tighter:

    &        concatenate   1
    + -      add/subtract  2
    %        modulus       3
    * /      mul/div       4
    (unary)  negate        5
    ^        power         6

Unary minus is stored under NEGATE, a character that cannot be typed as an
operator, so the shunting-yard loop can treat it like any other operator.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from ..math.value import Value

ADD = "+"
SUBTRACT = "-"
MULTIPLY = "*"
DIVIDE = "/"
MODULUS = "%"
POWER = "^"
CONCATENATE = "&"
NEGATE = "\uffff"


@dataclass(frozen=True)
class OperatorInfo:
    """
    Description of one operator.

    Attributes:
        symbol: The operator character
        precedence: Binding strength (higher binds tighter)
        operand_count: Values popped from the stack (1 or 2)
        evaluator: Reduces the stack in place, pushing exactly one result
    """

    symbol: str
    precedence: int
    operand_count: int
    evaluator: Callable[[list[Value]], None]

    def evaluate(self, stack: list[Value]) -> None:
        self.evaluator(stack)

    def __repr__(self) -> str:
        name = "NEGATE" if self.symbol == NEGATE else self.symbol
        return f"OperatorInfo({name!r}, precedence={self.precedence})"


def _binary(operation: Callable[[Value, Value], Value]) -> Callable[[list[Value]], None]:
    def evaluate(stack: list[Value]) -> None:
        right = stack.pop()
        left = stack.pop()
        stack.append(operation(left, right))

    return evaluate


def _negate(stack: list[Value]) -> None:
    stack.append(stack.pop().negate())


OPERATORS: Mapping[str, OperatorInfo] = MappingProxyType(
    {
        CONCATENATE: OperatorInfo(CONCATENATE, 1, 2, _binary(Value.concatenate)),
        ADD: OperatorInfo(ADD, 2, 2, _binary(Value.add)),
        SUBTRACT: OperatorInfo(SUBTRACT, 2, 2, _binary(Value.subtract)),
        MODULUS: OperatorInfo(MODULUS, 3, 2, _binary(Value.modulus)),
        MULTIPLY: OperatorInfo(MULTIPLY, 4, 2, _binary(Value.multiply)),
        DIVIDE: OperatorInfo(DIVIDE, 4, 2, _binary(Value.divide)),
        NEGATE: OperatorInfo(NEGATE, 5, 1, _negate),
        POWER: OperatorInfo(POWER, 6, 2, _binary(Value.power)),
    }
)


def get_operator_info(symbol: str) -> OperatorInfo | None:
    """
    Look up an operator by symbol.

    Returns:
        The OperatorInfo, or None if ``symbol`` is not an operator
    """
    return OPERATORS.get(symbol)
