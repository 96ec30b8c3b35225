"""Tests for SymbolTable, FunctionTable and resolver results."""

import pytest

from exprcalc import (
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
    Value,
    ValueType,
)


def call(table, name, *args):
    return table.call_function(FunctionRequest(name, tuple(Value(a) for a in args), 0))


class TestResults:
    """Test result construction helpers."""

    def test_symbol_result_defaults(self):
        """Test that a bare SymbolResult is OK with integer 0."""
        result = SymbolResult()
        assert result.status == SymbolStatus.OK
        assert result.value.is_identical(Value(0))

    def test_symbol_result_helpers(self):
        """Test ok() and undefined()."""
        assert SymbolResult.ok(2.5).value.type == ValueType.FLOAT
        assert SymbolResult.undefined().status == SymbolStatus.UNDEFINED_SYMBOL

    def test_function_result_helpers(self):
        """Test ok(), undefined() and wrong_parameter_count()."""
        assert FunctionResult.ok("x").value.data == "x"
        assert FunctionResult.undefined().status == FunctionStatus.UNDEFINED_FUNCTION
        assert FunctionResult.wrong_parameter_count().status == FunctionStatus.WRONG_PARAMETER_COUNT

    def test_requests_are_frozen(self):
        """Test that requests cannot be modified by resolvers."""
        request = SymbolRequest("x", 3)
        with pytest.raises(AttributeError):
            request.name = "y"


class TestSymbolTable:
    """Test the dictionary-backed symbol resolver."""

    def test_case_insensitive_by_default(self):
        """Test lookup ignoring case."""
        table = SymbolTable({"Rate": 0.5})
        assert "RATE" in table
        result = table.resolve_symbol(SymbolRequest("rate", 0))
        assert result.status == SymbolStatus.OK
        assert result.value == 0.5

    def test_case_sensitive(self):
        """Test exact-case lookup."""
        table = SymbolTable({"Rate": 0.5}, case_sensitive=True)
        assert "Rate" in table
        assert "rate" not in table
        assert table.resolve_symbol(SymbolRequest("rate", 0)).status == SymbolStatus.UNDEFINED_SYMBOL

    def test_keyword_symbols(self):
        """Test symbols given as keyword arguments."""
        table = SymbolTable({"a": 1}, pi=3.14)
        assert len(table) == 2
        assert table.get("PI").type == ValueType.FLOAT

    def test_set_and_remove(self):
        """Test defining and removing symbols."""
        table = SymbolTable()
        table.set("x", "hello")
        assert table.get("x").data == "hello"
        table.remove("X")
        assert table.get("x") is None
        table.remove("missing")

    def test_get_returns_copy(self):
        """Test that stored values cannot be changed through get()."""
        table = SymbolTable(x=1)
        table.get("x").set_value(99)
        assert table.get("x").data == 1

    def test_iteration(self):
        """Test iterating over stored names."""
        table = SymbolTable(a=1, b=2)
        assert sorted(table) == ["a", "b"]

    def test_satisfies_protocol(self):
        """Test the runtime-checkable protocol."""
        assert isinstance(SymbolTable(), SymbolResolver)


class TestFunctionTable:
    """Test the dictionary-backed function resolver."""

    def test_register_directly(self):
        """Test registering a callable."""
        table = FunctionTable()
        table.register("double", lambda x: x * 2)
        result = call(table, "DOUBLE", 4)
        assert result.status == FunctionStatus.OK
        assert result.value == 8

    def test_register_as_decorator(self):
        """Test the decorator form."""
        table = FunctionTable()

        @table.register("greet")
        def greet(name):
            return "Hello " & name

        assert greet.__name__ == "greet"
        assert call(table, "greet", "Bob").value.data == "Hello Bob"

    def test_plain_return_values_wrapped(self):
        """Test that int, float and str results become Values."""
        table = FunctionTable()
        table.register("length", lambda text: len(text.to_text()))
        result = call(table, "length", "abcd")
        assert result.value.is_identical(Value(4))

    def test_unsupported_return_left_unconverted(self):
        """Test that a return value Value cannot hold is passed through as is."""
        table = FunctionTable()
        table.register("listify", lambda x: [x])
        result = call(table, "listify", 1)
        assert result.status == FunctionStatus.OK
        assert result.value == [Value(1)]

    def test_undefined(self):
        """Test calling an unknown function."""
        assert call(FunctionTable(), "nope").status == FunctionStatus.UNDEFINED_FUNCTION

    def test_arity_from_signature(self):
        """Test argument counts inferred from the callable."""
        table = FunctionTable()
        table.register("pair", lambda a, b: a)
        table.register("opt", lambda a, b=1: a)
        table.register("many", lambda *args: len(args))

        assert (table.get("pair").min_args, table.get("pair").max_args) == (2, 2)
        assert (table.get("opt").min_args, table.get("opt").max_args) == (1, 2)
        assert (table.get("many").min_args, table.get("many").max_args) == (0, None)

        assert call(table, "pair", 1).status == FunctionStatus.WRONG_PARAMETER_COUNT
        assert call(table, "opt", 1, 2, 3).status == FunctionStatus.WRONG_PARAMETER_COUNT
        assert call(table, "many", 1, 2, 3, 4).value == 4

    def test_explicit_arity(self):
        """Test min_args and max_args given at registration."""
        table = FunctionTable()
        table.register("avg", lambda *args: sum(a.to_double() for a in args) / len(args), min_args=1)
        assert call(table, "avg").status == FunctionStatus.WRONG_PARAMETER_COUNT
        assert call(table, "avg", 1, 2).value == 1.5

    def test_builtin_without_signature(self):
        """Test registering a builtin whose signature cannot be read."""
        table = FunctionTable()
        table.register("biggest", max)
        assert call(table, "biggest", 1, 3, 2).value == 3

    def test_case_sensitive(self):
        """Test exact-case function names."""
        table = FunctionTable(case_sensitive=True)
        table.register("f", lambda: 1)
        assert "f" in table
        assert "F" not in table
        assert call(table, "F").status == FunctionStatus.UNDEFINED_FUNCTION

    def test_remove(self):
        """Test removing a function."""
        table = FunctionTable()
        table.register("f", lambda: 1)
        assert len(table) == 1
        table.remove("F")
        assert len(table) == 0

    def test_satisfies_protocol(self):
        """Test the runtime-checkable protocol."""
        assert isinstance(FunctionTable(), FunctionResolver)
