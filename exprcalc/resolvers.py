"""
Symbol and function resolution.

The evaluator does not know any names itself. Whenever it meets an
identifier it asks a resolver:

- a symbol resolver for plain names (``two``, ``rate``)
- a function resolver for names followed by an argument list (``max(a, b)``)

A resolver can be any object with the matching method
(``resolve_symbol`` / ``call_function``) or a plain callable that takes
the request. SymbolTable and FunctionTable are ready-made implementations
backed by dictionaries.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Mapping, Protocol, Union, runtime_checkable

from .math.value import Value, ValueLike, is_value_like


class SymbolStatus(Enum):
    """Outcome of a symbol lookup."""

    OK = "ok"
    UNDEFINED_SYMBOL = "undefined_symbol"


class FunctionStatus(Enum):
    """Outcome of a function call."""

    OK = "ok"
    UNDEFINED_FUNCTION = "undefined_function"
    WRONG_PARAMETER_COUNT = "wrong_parameter_count"


@dataclass(frozen=True)
class SymbolRequest:
    """A symbol found in an expression."""

    name: str
    index: int


@dataclass(frozen=True)
class FunctionRequest:
    """A function call found in an expression, with its evaluated arguments."""

    name: str
    arguments: tuple[Value, ...]
    index: int


@dataclass
class SymbolResult:
    """Answer from a symbol resolver."""

    value: Value = field(default_factory=Value)
    status: SymbolStatus = SymbolStatus.OK

    @classmethod
    def ok(cls, value: ValueLike) -> SymbolResult:
        return cls(Value(value), SymbolStatus.OK)

    @classmethod
    def undefined(cls) -> SymbolResult:
        return cls(status=SymbolStatus.UNDEFINED_SYMBOL)


@dataclass
class FunctionResult:
    """Answer from a function resolver."""

    value: Value = field(default_factory=Value)
    status: FunctionStatus = FunctionStatus.OK

    @classmethod
    def ok(cls, value: ValueLike) -> FunctionResult:
        return cls(Value(value), FunctionStatus.OK)

    @classmethod
    def undefined(cls) -> FunctionResult:
        return cls(status=FunctionStatus.UNDEFINED_FUNCTION)

    @classmethod
    def wrong_parameter_count(cls) -> FunctionResult:
        return cls(status=FunctionStatus.WRONG_PARAMETER_COUNT)


@runtime_checkable
class SymbolResolver(Protocol):
    """Protocol for objects that resolve symbol names."""

    def resolve_symbol(self, request: SymbolRequest) -> SymbolResult:
        ...


@runtime_checkable
class FunctionResolver(Protocol):
    """Protocol for objects that evaluate function calls."""

    def call_function(self, request: FunctionRequest) -> FunctionResult:
        ...


SymbolResolverLike = Union[SymbolResolver, Callable[[SymbolRequest], SymbolResult]]
FunctionResolverLike = Union[FunctionResolver, Callable[[FunctionRequest], FunctionResult]]


class SymbolTable:
    """
    Dictionary-backed symbol resolver.

    Names are matched case-insensitively unless ``case_sensitive`` is set.

    Example:
        >>> symbols = SymbolTable({"two": 2}, pi=3.14159)
        >>> symbols.resolve_symbol(SymbolRequest("TWO", 0)).value
        Value(INTEGER, 2)
    """

    def __init__(
        self,
        symbols: Mapping[str, ValueLike] | None = None,
        case_sensitive: bool = False,
        **kwargs: ValueLike,
    ):
        self.case_sensitive = case_sensitive
        self._symbols: dict[str, Value] = {}
        for name, value in {**(symbols or {}), **kwargs}.items():
            self.set(name, value)

    def _key(self, name: str) -> str:
        return name if self.case_sensitive else name.lower()

    def set(self, name: str, value: ValueLike) -> None:
        """Define or replace a symbol."""
        self._symbols[self._key(name)] = Value(value)

    def remove(self, name: str) -> None:
        self._symbols.pop(self._key(name), None)

    def get(self, name: str) -> Value | None:
        value = self._symbols.get(self._key(name))
        # Hand out copies so callers cannot change the stored value
        return Value(value) if value is not None else None

    def resolve_symbol(self, request: SymbolRequest) -> SymbolResult:
        value = self.get(request.name)
        if value is None:
            return SymbolResult.undefined()
        return SymbolResult(value)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)


@dataclass
class FunctionConfig:
    """Configuration for a function."""

    name: str
    evaluator: Callable[..., Any]
    min_args: int = 0
    max_args: int | None = None  # None means unlimited

    def accepts(self, count: int) -> bool:
        if count < self.min_args:
            return False
        return self.max_args is None or count <= self.max_args


def _infer_arity(func: Callable[..., Any]) -> tuple[int, int | None]:
    """Derive (min_args, max_args) from a callable's positional parameters."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without a signature accept anything
        return 0, None

    min_args = 0
    max_args: int | None = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            max_args = None
        elif parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            if parameter.default is inspect.Parameter.empty:
                min_args += 1
            if max_args is not None:
                max_args += 1
    return min_args, max_args


class FunctionTable:
    """
    Dictionary-backed function resolver.

    Registered callables receive the evaluated arguments as Value objects
    and may return a Value or any int, float or str. The accepted argument
    count is taken from the callable's signature unless given explicitly.

    Example:
        >>> functions = FunctionTable()
        >>> @functions.register("add")
        ... def add(a, b):
        ...     return a + b
        >>> functions.call_function(FunctionRequest("add", (Value(2), Value(3)), 0)).value
        Value(INTEGER, 5)
    """

    def __init__(self, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive
        self._functions: dict[str, FunctionConfig] = {}

    def _key(self, name: str) -> str:
        return name if self.case_sensitive else name.lower()

    def register(
        self,
        name: str,
        func: Callable[..., Any] | None = None,
        min_args: int | None = None,
        max_args: int | None = None,
    ) -> Any:
        """
        Register a function, directly or as a decorator.

        Args:
            name: Name used in expressions
            func: The implementation (omit to use as a decorator)
            min_args: Fewest arguments accepted (default: from signature)
            max_args: Most arguments accepted (default: from signature)

        Returns:
            The registered callable, or a decorator when ``func`` is omitted
        """
        if func is None:
            def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
                self.register(name, f, min_args, max_args)
                return f

            return decorator

        inferred_min, inferred_max = _infer_arity(func)
        if min_args is None:
            min_args = inferred_min
        if max_args is None and inferred_max is not None:
            max_args = max(inferred_max, min_args)

        self._functions[self._key(name)] = FunctionConfig(
            name=name,
            evaluator=func,
            min_args=min_args,
            max_args=max_args,
        )
        return func

    def remove(self, name: str) -> None:
        self._functions.pop(self._key(name), None)

    def get(self, name: str) -> FunctionConfig | None:
        return self._functions.get(self._key(name))

    def call_function(self, request: FunctionRequest) -> FunctionResult:
        config = self.get(request.name)
        if config is None:
            return FunctionResult.undefined()
        if not config.accepts(len(request.arguments)):
            return FunctionResult.wrong_parameter_count()
        value = config.evaluator(*request.arguments)
        if not is_value_like(value):
            # Left unconverted for the evaluator to reject
            return FunctionResult(value)
        return FunctionResult.ok(value)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._functions

    def __len__(self) -> int:
        return len(self._functions)
