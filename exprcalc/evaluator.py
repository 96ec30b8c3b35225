"""
Expression evaluator.

ExpressionEvaluator is the entry point: it compiles an expression to
postfix tokens, executes them and returns a single Value. Symbols and
functions are delegated to resolvers supplied by the host application.

Example:
    >>> from exprcalc import ExpressionEvaluator, SymbolTable
    >>> evaluator = ExpressionEvaluator(symbol_resolver=SymbolTable(rate=0.5))
    >>> evaluator.evaluate("(2 + 3) * rate").to_double()
    2.5
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .core.config import Settings, get_settings
from .core.logging import get_context_logger
from .errors import (
    InvalidValueError,
    NestingDepthError,
    UndefinedFunctionError,
    UndefinedSymbolError,
    WrongParameterCountError,
)
from .math.value import Value, is_value_like
from .parser.postfix import execute_tokens
from .parser.tokenizer import Tokenizer
from .parser.tokens import Token
from .resolvers import (
    FunctionRequest,
    FunctionResolverLike,
    FunctionResult,
    FunctionStatus,
    FunctionTable,
    SymbolRequest,
    SymbolResolverLike,
    SymbolResult,
    SymbolStatus,
    SymbolTable,
)

logger = get_context_logger(__name__, component="evaluator")


def _dispatch(resolver: Any, method: str, request: Any) -> Any:
    handler = getattr(resolver, method, None)
    if handler is None:
        handler = resolver
    return handler(request)


def _to_value(value: Any, name: str, index: int) -> Value:
    """Copy a resolver's answer into a new Value."""
    if not is_value_like(value):
        raise InvalidValueError(name, index, value)
    return Value(value)


class ExpressionEvaluator:
    """
    Evaluates expressions such as ``-multiply(add(two, three), five)``.

    The evaluator holds no state that changes during evaluation, so a
    resolver may call evaluate() again on the same instance to compute
    sub-results, and one instance may be shared between threads as long as
    its resolvers allow it.

    Attributes:
        symbol_resolver: Resolves plain names (None: every symbol is undefined)
        function_resolver: Evaluates calls (None: every function is undefined)
        max_depth: Deepest allowed nesting of function arguments
    """

    def __init__(
        self,
        symbol_resolver: SymbolResolverLike | None = None,
        function_resolver: FunctionResolverLike | None = None,
        max_depth: int | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize evaluator.

        Args:
            symbol_resolver: Object with ``resolve_symbol(request)`` or a callable
            function_resolver: Object with ``call_function(request)`` or a callable
            max_depth: Nesting limit for function arguments (default: settings.MAX_DEPTH)
            settings: Settings to read defaults from (default: global settings)
        """
        self.settings = settings or get_settings()
        self.symbol_resolver = symbol_resolver
        self.function_resolver = function_resolver
        self.max_depth = max_depth if max_depth is not None else self.settings.MAX_DEPTH

    def evaluate(self, expression: str) -> Value:
        """
        Evaluate an expression.

        Args:
            expression: The expression text

        Returns:
            The result value (integer 0 for an empty expression)

        Raises:
            ExpressionError: If the expression is malformed or refers to an
                unknown symbol or function
        """
        return self.evaluate_at_depth(expression, 0)

    def evaluate_at_depth(self, expression: str, depth: int) -> Value:
        """
        Evaluate an expression nested ``depth`` function arguments deep.

        Used by the tokenizer for function arguments. Error positions are
        relative to ``expression``.
        """
        if depth > self.max_depth:
            raise NestingDepthError(self.max_depth, 0)

        tokens = Tokenizer(self, depth).tokenize(expression)
        result = execute_tokens(tokens)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Evaluated {expression!r} -> {result!r}",
                extra_data={"depth": depth, "tokens": len(tokens)},
            )
        return result

    def compile(self, expression: str) -> list[Token]:
        """
        Compile an expression to postfix tokens without executing them.

        Symbols and function calls are still resolved while compiling, so
        their results appear as operand tokens.
        """
        return Tokenizer(self).tokenize(expression)

    def resolve_symbol(self, name: str, index: int) -> Value:
        """
        Resolve a symbol through the symbol resolver.

        A resolver may answer with a SymbolResult or a bare value; None
        means the symbol is undefined.

        Raises:
            UndefinedSymbolError: If there is no resolver or it does not know ``name``
            InvalidValueError: If the answer is not a Value, int, float, str or None
        """
        result: Any = None
        if self.symbol_resolver is not None:
            result = _dispatch(self.symbol_resolver, "resolve_symbol", SymbolRequest(name, index))

        if result is None:
            result = SymbolResult.undefined()
        elif not isinstance(result, SymbolResult):
            result = SymbolResult(result)

        if result.status == SymbolStatus.UNDEFINED_SYMBOL:
            logger.debug(f"Undefined symbol {name!r} at {index}")
            raise UndefinedSymbolError(name, index)
        return _to_value(result.value, name, index)

    def call_function(self, name: str, arguments: list[Value], index: int) -> Value:
        """
        Call a function through the function resolver.

        A resolver may answer with a FunctionResult or a bare value; None
        means the function is undefined.

        Raises:
            UndefinedFunctionError: If there is no resolver or it does not know ``name``
            WrongParameterCountError: If the resolver rejects the argument count
            InvalidValueError: If the answer is not a Value, int, float, str or None
        """
        result: Any = None
        if self.function_resolver is not None:
            request = FunctionRequest(name, tuple(arguments), index)
            result = _dispatch(self.function_resolver, "call_function", request)

        if result is None:
            result = FunctionResult.undefined()
        elif not isinstance(result, FunctionResult):
            result = FunctionResult(result)

        if result.status == FunctionStatus.UNDEFINED_FUNCTION:
            logger.debug(f"Undefined function {name!r} at {index}")
            raise UndefinedFunctionError(name, index)
        if result.status == FunctionStatus.WRONG_PARAMETER_COUNT:
            logger.debug(f"Function {name!r} rejected {len(arguments)} arguments")
            raise WrongParameterCountError(name, index)
        return _to_value(result.value, name, index)


def evaluate(
    expression: str,
    symbols: Mapping[str, Any] | SymbolResolverLike | None = None,
    functions: Mapping[str, Callable[..., Any]] | FunctionResolverLike | None = None,
) -> Value:
    """
    Evaluate an expression with symbols and functions given as dictionaries.

    Args:
        expression: The expression text
        symbols: Mapping of name to value, or a symbol resolver
        functions: Mapping of name to callable, or a function resolver

    Returns:
        The result value

    Example:
        >>> evaluate("max2(a, 3) * 2", {"a": 5}, {"max2": lambda x, y: x if x > y else y})
        Value(INTEGER, 10)
    """
    if isinstance(symbols, Mapping):
        symbols = SymbolTable(symbols)

    if isinstance(functions, Mapping):
        table = FunctionTable()
        for name, func in functions.items():
            table.register(name, func)
        functions = table

    return ExpressionEvaluator(symbols, functions).evaluate(expression)
