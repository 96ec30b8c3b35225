"""exprcalc - embeddable expression evaluator.

Evaluates formulas such as ``"(price - discount) * qty & ' units'"`` with
integer, float and text values, and caller-defined symbols and functions.

Subpackages:
- exprcalc.math: the Value type
- exprcalc.parser: cursor, operator table, shunting-yard compiler, postfix execution
- exprcalc.core: settings and logging
"""

from .errors import (
    ExpressionError,
    ExpressionSyntaxError,
    InvalidValueError,
    NestingDepthError,
    UndefinedFunctionError,
    UndefinedSymbolError,
    WrongParameterCountError,
)
from .evaluator import ExpressionEvaluator, evaluate
from .math.value import NumericType, Value, ValueType
from .resolvers import (
    FunctionRequest,
    FunctionResolver,
    FunctionResult,
    FunctionStatus,
    FunctionTable,
    SymbolRequest,
    SymbolResolver,
    SymbolResult,
    SymbolStatus,
    SymbolTable,
)

__version__ = "0.1.0"

__all__ = [
    "ExpressionError",
    "ExpressionSyntaxError",
    "InvalidValueError",
    "NestingDepthError",
    "UndefinedFunctionError",
    "UndefinedSymbolError",
    "WrongParameterCountError",
    "ExpressionEvaluator",
    "evaluate",
    "NumericType",
    "Value",
    "ValueType",
    "FunctionRequest",
    "FunctionResolver",
    "FunctionResult",
    "FunctionStatus",
    "FunctionTable",
    "SymbolRequest",
    "SymbolResolver",
    "SymbolResult",
    "SymbolStatus",
    "SymbolTable",
]
