"""
Exceptions raised while compiling or evaluating an expression.

Every error carries the 0-based offset into the expression where the
problem was detected. Errors raised while evaluating a function argument
are rebased so that the offset always refers to the top-level expression.
"""

from __future__ import annotations


class ExpressionError(Exception):
    """Base exception for all expression errors."""

    def __init__(self, message: str, index: int):
        self.message = message
        self.index = index
        super().__init__(message)

    @property
    def column(self) -> int:
        """1-based column of the error."""
        return self.index + 1

    def rebase(self, offset: int) -> ExpressionError:
        """
        Shift the error position by ``offset`` characters.

        Used when a sub-expression (a function argument) was evaluated on its
        own and the error must be reported relative to the enclosing text.

        Returns:
            self, to allow ``raise error.rebase(start)``
        """
        self.index += offset
        return self

    def __str__(self) -> str:
        return f"{self.message} (column {self.column})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, index={self.index})"


class ExpressionSyntaxError(ExpressionError):
    """Raised when the expression text is malformed."""


class UndefinedSymbolError(ExpressionError):
    """Raised when no resolver recognises a symbol name"""

    def __init__(self, name: str, index: int):
        self.name = name
        super().__init__(f'Undefined symbol "{name}"', index)


class UndefinedFunctionError(ExpressionError):
    """Raised when no resolver recognises a function name"""

    def __init__(self, name: str, index: int):
        self.name = name
        super().__init__(f'Undefined function "{name}"', index)


class WrongParameterCountError(ExpressionError):
    """Raised when a function is called with an unsupported number of arguments"""

    def __init__(self, name: str, index: int):
        self.name = name
        super().__init__("Wrong number of function parameters", index)


class NestingDepthError(ExpressionError):
    """Raised when function arguments are nested deeper than allowed."""

    def __init__(self, max_depth: int, index: int):
        self.max_depth = max_depth
        super().__init__("Maximum nesting depth exceeded", index)


class InvalidValueError(ExpressionError):
    """Raised when a resolver answers with something that is not a Value, int, float or str."""

    def __init__(self, name: str, index: int, received: object):
        self.name = name
        self.received = received
        super().__init__(f'Invalid value of type {type(received).__name__} for "{name}"', index)
