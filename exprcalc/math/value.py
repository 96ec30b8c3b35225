"""
Dynamically typed value used by the expression evaluator.

A Value holds exactly one of three variants:
- Integer
- Float
- Text

Arithmetic coerces text to numbers where possible, concatenation coerces
everything to text, and comparisons are numeric only when both sides look
like numbers. Every operation returns a new Value; ``set_value`` is the only
method that changes a Value in place.
"""

from __future__ import annotations

import math
import numbers
import operator
import re
from enum import Enum
from typing import Any, Callable, Union

from pydantic import BaseModel, Field, model_validator


class ValueType(Enum):
    """Active variant of a Value."""

    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"


class NumericType(Enum):
    """How a value classifies when used as a number."""

    NONE = 0  # Not numeric (treated as integer 0 by arithmetic)
    INTEGER = 1
    FLOAT = 2


_INTEGER_PATTERN = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)
_FLOAT_PATTERN = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*", re.ASCII)


def classify_text(text: str) -> tuple[NumericType, int | float]:
    """
    Classify a string as an integer, a float, or not a number.

    Only plain decimal literals count (optional sign, optional fraction,
    optional exponent, surrounding whitespace). Words such as ``nan`` or
    ``inf`` and digit separators are not numeric.

    Args:
        text: The string to classify

    Returns:
        Tuple of the numeric type and the parsed number (0 when not numeric)
    """
    if _INTEGER_PATTERN.fullmatch(text):
        return NumericType.INTEGER, parse_integer(text)
    if _FLOAT_PATTERN.fullmatch(text):
        return NumericType.FLOAT, float(text)
    return NumericType.NONE, 0


def parse_integer(text: str) -> int | float:
    """
    Convert an integer literal, never raising on very long digit strings.

    Python refuses int() conversion of strings beyond its digit limit
    (sys.get_int_max_str_digits()); such literals become float infinity.

    Args:
        text: A string matching an optionally signed run of decimal digits

    Returns:
        The int, or +/-inf when the literal is too long to convert
    """
    try:
        return int(text)
    except ValueError:
        return float(text)


def _to_float(number: int | float) -> float:
    try:
        return float(number)
    except OverflowError:
        return math.copysign(math.inf, number)


def _round_half_away(number: float) -> int:
    """Round to the nearest integer, halves away from zero. Non-finite gives 0."""
    if not math.isfinite(number):
        return 0
    magnitude = abs(number)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if number < 0 else whole


def _format_float(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    text = repr(number)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _divide(dividend: float, divisor: float) -> float:
    return dividend / divisor


def _modulus(dividend: float, divisor: float) -> float:
    try:
        return math.fmod(dividend, divisor)
    except ValueError:
        # fmod(inf, y)
        return math.nan


def _power(base: float, exponent: float) -> float:
    """IEEE-style exponentiation that never raises."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and exponent.is_integer() and int(exponent) % 2:
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power, or negative base with fractional exponent
        if base == 0:
            return math.inf
        return math.nan


ValueLike = Union["Value", int, float, str, None]


def is_value_like(value: Any) -> bool:
    """True if ``value`` can be passed to Value(): a Value, str, real number or None."""
    return value is None or isinstance(value, (Value, str, numbers.Real))


class Value(BaseModel):
    """
    Integer, float or text value with implicit coercion.

    Examples:
        >>> Value("16").to_integer()
        16
        >>> Value(16).to_text()
        '16'
        >>> Value("abc") + 5 == 5
        True
        >>> Value(2.5) & 2.6
        Value(TEXT, '2.52.6')
    """

    type: ValueType = Field(default=ValueType.INTEGER, description="The active variant")
    data: int | float | str = Field(default=0, description="The stored integer, float or text")

    def __init__(self, value: ValueLike = 0, **kwargs: Any):
        """
        Initialize a Value.

        Args:
            value: An int, float, str or another Value (copied). None gives empty text.
        """
        if kwargs:
            # Reconstruction from a dump, e.g. Value.model_validate({"type": ..., "data": ...})
            super().__init__(**kwargs)
            return
        value_type, data = self._coerce(value)
        super().__init__(type=value_type, data=data)

    @model_validator(mode="after")
    def validate_variant(self) -> Value:
        expected = {
            ValueType.INTEGER: int,
            ValueType.FLOAT: float,
            ValueType.TEXT: str,
        }[self.type]
        if not isinstance(self.data, expected) or isinstance(self.data, bool):
            raise ValueError(f"{self.type.name} value cannot hold {type(self.data).__name__}")
        return self

    @staticmethod
    def _coerce(value: ValueLike) -> tuple[ValueType, int | float | str]:
        if isinstance(value, Value):
            return value.type, value.data
        if value is None:
            return ValueType.TEXT, ""
        if isinstance(value, str):
            return ValueType.TEXT, value
        if isinstance(value, numbers.Integral):
            return ValueType.INTEGER, int(value)
        if isinstance(value, numbers.Real):
            return ValueType.FLOAT, float(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to Value")

    @classmethod
    def _wrap(cls, value: ValueLike) -> Value:
        return value if isinstance(value, Value) else cls(value)

    # Assignment

    def set_value(self, value: ValueLike) -> None:
        """Replace the active variant with ``value``."""
        self.type, self.data = self._coerce(value)

    # Conversion

    def to_integer(self) -> int:
        """Return the value as an integer. Never raises."""
        if self.type is ValueType.INTEGER:
            return self.data
        return _round_half_away(self.to_double())

    def to_double(self) -> float:
        """Return the value as a float. Non-numeric text gives 0.0."""
        if self.type is ValueType.TEXT:
            return _to_float(classify_text(self.data)[1])
        return _to_float(self.data)

    def to_text(self) -> str:
        """Return the canonical text form of the value."""
        if self.type is ValueType.FLOAT:
            return _format_float(self.data)
        return str(self.data)

    def numeric(self) -> tuple[NumericType, int | float]:
        """Classify this value as a number; see classify_text."""
        if self.type is ValueType.INTEGER:
            return NumericType.INTEGER, self.data
        if self.type is ValueType.FLOAT:
            return NumericType.FLOAT, self.data
        return classify_text(self.data)

    def is_numeric(self) -> bool:
        return self.numeric()[0] is not NumericType.NONE

    # Operations

    def _arithmetic(self, other: ValueLike, calc: Callable[[float, float], float]) -> Value:
        left_type, left = self.numeric()
        right_type, right = self._wrap(other).numeric()

        result = calc(_to_float(left), _to_float(right))

        if NumericType.FLOAT in (left_type, right_type) or not math.isfinite(result):
            return Value(result)
        return Value(int(result))

    def add(self, other: ValueLike) -> Value:
        return self._arithmetic(other, operator.add)

    def subtract(self, other: ValueLike) -> Value:
        return self._arithmetic(other, operator.sub)

    def multiply(self, other: ValueLike) -> Value:
        return self._arithmetic(other, operator.mul)

    def divide(self, other: ValueLike) -> Value:
        """Divide by ``other``. A zero divisor gives integer 0."""
        other = self._wrap(other)
        if other.to_double() == 0:
            return Value(0)
        return self._arithmetic(other, _divide)

    def modulus(self, other: ValueLike) -> Value:
        """Remainder with the sign of the dividend. A zero divisor gives integer 0."""
        other = self._wrap(other)
        if other.to_double() == 0:
            return Value(0)
        return self._arithmetic(other, _modulus)

    def power(self, other: ValueLike) -> Value:
        return self._arithmetic(other, _power)

    def concatenate(self, other: ValueLike) -> Value:
        """Join both values as text. The result is always TEXT."""
        return Value(self.to_text() + self._wrap(other).to_text())

    def negate(self) -> Value:
        """
        Return the negated value.

        Text that looks like a number is negated as that number. Other text
        is returned unchanged.
        """
        if self.type is ValueType.TEXT:
            numeric_type, number = classify_text(self.data)
            if numeric_type is NumericType.NONE:
                return Value(self)
            return Value(-number)
        return Value(-self.data)

    # Comparison

    def _compare(self, other: ValueLike, op: Callable[[Any, Any], bool]) -> bool:
        other = self._wrap(other)
        left_type, left = self.numeric()
        right_type, right = other.numeric()
        if left_type is not NumericType.NONE and right_type is not NumericType.NONE:
            return op(left, right)
        # Ordinal comparison when either side is not a number
        return op(self.to_text(), other.to_text())

    def equals(self, other: ValueLike) -> bool:
        return self._compare(other, operator.eq)

    def not_equals(self, other: ValueLike) -> bool:
        return self._compare(other, operator.ne)

    def less(self, other: ValueLike) -> bool:
        return self._compare(other, operator.lt)

    def less_or_equal(self, other: ValueLike) -> bool:
        return self._compare(other, operator.le)

    def greater(self, other: ValueLike) -> bool:
        return self._compare(other, operator.gt)

    def greater_or_equal(self, other: ValueLike) -> bool:
        return self._compare(other, operator.ge)

    def is_identical(self, other: Any) -> bool:
        """Strict equality: same variant and same stored data, no coercion."""
        return (
            isinstance(other, Value)
            and self.type is other.type
            and self.data == other.data
        )

    # Python operator overloading

    @staticmethod
    def _accepts(other: Any) -> bool:
        return isinstance(other, (Value, str, numbers.Real))

    def __add__(self, other: Any) -> Value:
        return self.add(other) if self._accepts(other) else NotImplemented

    def __radd__(self, other: Any) -> Value:
        return Value(other).add(self) if self._accepts(other) else NotImplemented

    def __sub__(self, other: Any) -> Value:
        return self.subtract(other) if self._accepts(other) else NotImplemented

    def __rsub__(self, other: Any) -> Value:
        return Value(other).subtract(self) if self._accepts(other) else NotImplemented

    def __mul__(self, other: Any) -> Value:
        return self.multiply(other) if self._accepts(other) else NotImplemented

    def __rmul__(self, other: Any) -> Value:
        return Value(other).multiply(self) if self._accepts(other) else NotImplemented

    def __truediv__(self, other: Any) -> Value:
        return self.divide(other) if self._accepts(other) else NotImplemented

    def __rtruediv__(self, other: Any) -> Value:
        return Value(other).divide(self) if self._accepts(other) else NotImplemented

    def __mod__(self, other: Any) -> Value:
        return self.modulus(other) if self._accepts(other) else NotImplemented

    def __rmod__(self, other: Any) -> Value:
        return Value(other).modulus(self) if self._accepts(other) else NotImplemented

    def __pow__(self, other: Any) -> Value:
        return self.power(other) if self._accepts(other) else NotImplemented

    def __rpow__(self, other: Any) -> Value:
        return Value(other).power(self) if self._accepts(other) else NotImplemented

    def __and__(self, other: Any) -> Value:
        return self.concatenate(other) if self._accepts(other) else NotImplemented

    def __rand__(self, other: Any) -> Value:
        return Value(other).concatenate(self) if self._accepts(other) else NotImplemented

    def __neg__(self) -> Value:
        return self.negate()

    def __pos__(self) -> Value:
        return Value(self)

    def __eq__(self, other: Any) -> bool:
        return self.equals(other) if self._accepts(other) else NotImplemented

    def __ne__(self, other: Any) -> bool:
        return self.not_equals(other) if self._accepts(other) else NotImplemented

    def __lt__(self, other: Any) -> bool:
        return self.less(other) if self._accepts(other) else NotImplemented

    def __le__(self, other: Any) -> bool:
        return self.less_or_equal(other) if self._accepts(other) else NotImplemented

    def __gt__(self, other: Any) -> bool:
        return self.greater(other) if self._accepts(other) else NotImplemented

    def __ge__(self, other: Any) -> bool:
        return self.greater_or_equal(other) if self._accepts(other) else NotImplemented

    def __hash__(self) -> int:
        # Values that compare equal must hash equal: 100, 100.0 and "100"
        numeric_type, number = self.numeric()
        if numeric_type is NumericType.NONE:
            return hash(self.to_text())
        return hash(number)

    def __int__(self) -> int:
        return self.to_integer()

    def __float__(self) -> float:
        return self.to_double()

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Value({self.type.name}, {self.data!r})"
