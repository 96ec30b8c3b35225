"""
Shared pytest fixtures for the exprcalc test suite.

This module provides:
- Sample symbol and function resolvers (two/three/five, add/multiply)
- An evaluator wired to both resolvers
- A helper for testing Pydantic validation of Value
"""

import logging

import pytest
from typing import Any, Type
from pydantic import BaseModel, ValidationError

from exprcalc import (
    ExpressionEvaluator,
    FunctionRequest,
    FunctionResult,
    SymbolRequest,
    SymbolResult,
)
from exprcalc.core.logging import StructuredFormatter, TextFormatter


def sample_symbols(request: SymbolRequest) -> SymbolResult:
    """Symbol resolver written as a plain callable, case-insensitive."""
    values = {"TWO": 2, "THREE": 3, "FIVE": 5}
    name = request.name.upper()
    if name in values:
        return SymbolResult.ok(values[name])
    return SymbolResult.undefined()


class SampleFunctions:
    """Function resolver object with add() and multiply() of two arguments."""

    def __init__(self):
        self.calls: list[FunctionRequest] = []

    def call_function(self, request: FunctionRequest) -> FunctionResult:
        self.calls.append(request)
        name = request.name.upper()
        if name not in ("ADD", "MULTIPLY"):
            return FunctionResult.undefined()
        if len(request.arguments) != 2:
            return FunctionResult.wrong_parameter_count()
        left, right = request.arguments
        if name == "ADD":
            return FunctionResult.ok(left.add(right))
        return FunctionResult.ok(left.multiply(right))


@pytest.fixture
def symbol_resolver():
    """Resolver for two, three and five."""
    return sample_symbols


@pytest.fixture
def function_resolver():
    """Resolver for add(a, b) and multiply(a, b)."""
    return SampleFunctions()


@pytest.fixture
def evaluator():
    """Evaluator without any resolvers."""
    return ExpressionEvaluator()


@pytest.fixture
def full_evaluator(symbol_resolver, function_resolver):
    """Evaluator with the sample symbol and function resolvers."""
    return ExpressionEvaluator(
        symbol_resolver=symbol_resolver,
        function_resolver=function_resolver,
    )


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised for model data."""
    def _assert_validation(model_class: Type[BaseModel], data: dict[str, Any]) -> ValidationError:
        """
        Assert that validating ``data`` as ``model_class`` fails.

        Args:
            model_class: The Pydantic model class
            data: Invalid data to validate

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class.model_validate(data)
        return exc_info.value

    return _assert_validation


@pytest.fixture
def restore_root_logger():
    """Remove handlers installed by setup_logging() and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (StructuredFormatter, TextFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
