"""Value types for the expression evaluator."""

from .value import NumericType, Value, ValueLike, ValueType, classify_text, is_value_like, parse_integer

__all__ = [
    "NumericType",
    "Value",
    "ValueLike",
    "ValueType",
    "classify_text",
    "is_value_like",
    "parse_integer",
]
