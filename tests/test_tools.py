"""
Tests for the hello_world and calculate tool handlers.
"""

import pytest

from errors import BusinessRuleViolation
from tools.calculator import CALCULATE_TOOL, calculate, calculate_handler, format_result
from tools.greeting import HELLO_TOOL, hello_handler


class TestHelloWorld:
    @pytest.mark.asyncio
    async def test_greets_by_name(self, context):
        result = await hello_handler(context, {"name": "Ada"})
        assert not result.isError
        assert result.text == "Hello, Ada!"

    @pytest.mark.asyncio
    async def test_missing_name_is_error_not_default_greeting(self, context):
        result = await hello_handler(context, {})
        assert result.isError
        assert result.text == 'required argument "name" not found'
        assert "Hello" not in result.text

    @pytest.mark.asyncio
    async def test_non_string_name_is_error(self, context):
        result = await hello_handler(context, {"name": 7})
        assert result.isError
        assert result.text == 'argument "name" is not a string'

    def test_definition(self):
        assert HELLO_TOOL.name == "hello_world"
        schema = HELLO_TOOL.input_schema()
        assert schema["required"] == ["name"]
        assert schema["properties"]["name"]["type"] == "string"


class TestCalculate:
    @pytest.mark.parametrize("operation, x, y, expected", [
        ("add", 2, 3, 5),
        ("add", 0.1, 0.2, 0.1 + 0.2),
        ("subtract", 10, 2.5, 7.5),
        ("subtract", 1, 4, -3),
        ("multiply", 3, 4, 12),
        ("multiply", -1.5, 2, -3),
        ("divide", 10, 4, 2.5),
    ])
    def test_arithmetic(self, operation, x, y, expected):
        assert calculate(operation, x, y) == expected

    def test_divide_by_zero(self):
        with pytest.raises(BusinessRuleViolation) as exc_info:
            calculate("divide", 5, 0)
        assert str(exc_info.value) == "cannot divide by zero"

    @pytest.mark.parametrize("operation", ["modulo", "ADD", "", "power"])
    def test_unsupported_operation(self, operation):
        with pytest.raises(BusinessRuleViolation) as exc_info:
            calculate(operation, 1, 2)
        assert str(exc_info.value) == f"unsupported operation: {operation}"

    @pytest.mark.parametrize("value, expected", [
        (12, "12.00"),
        (0.1 + 0.2, "0.30"),
        (1 / 3, "0.33"),
        (2 / 3, "0.67"),
        (-3, "-3.00"),
        (3000000, "3000000.00"),
    ])
    def test_two_decimal_formatting(self, value, expected):
        assert format_result(value) == expected


class TestCalculateHandler:
    @pytest.mark.asyncio
    async def test_multiply_example(self, context):
        result = await calculate_handler(context, {"operation": "multiply", "x": 3, "y": 4})
        assert not result.isError
        assert result.text == "12.00"

    @pytest.mark.asyncio
    async def test_divide_by_zero_example(self, context):
        result = await calculate_handler(context, {"operation": "divide", "x": 5, "y": 0})
        assert result.isError
        assert result.text == "cannot divide by zero"

    @pytest.mark.asyncio
    async def test_divide(self, context):
        result = await calculate_handler(context, {"operation": "divide", "x": 1, "y": 3})
        assert result.text == "0.33"

    @pytest.mark.asyncio
    async def test_unsupported_operation(self, context):
        result = await calculate_handler(context, {"operation": "sqrt", "x": 9, "y": 0})
        assert result.isError
        assert "unsupported operation: sqrt" in result.text

    @pytest.mark.asyncio
    async def test_numeric_strings_accepted(self, context):
        result = await calculate_handler(context, {"operation": "add", "x": "1.5", "y": "2"})
        assert result.text == "3.50"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments, message", [
        ({"x": 1, "y": 2}, 'required argument "operation" not found'),
        ({"operation": "add", "y": 2}, 'required argument "x" not found'),
        ({"operation": "add", "x": 1}, 'required argument "y" not found'),
        ({"operation": "add", "x": "one", "y": 2}, 'argument "x" is not a number'),
        ({"operation": 1, "x": 1, "y": 2}, 'argument "operation" is not a string'),
    ])
    async def test_validation_errors(self, context, arguments, message):
        result = await calculate_handler(context, arguments)
        assert result.isError
        assert result.text == message

    def test_definition_declares_enum(self):
        schema = CALCULATE_TOOL.input_schema()
        assert schema["properties"]["operation"]["enum"] == ["add", "subtract", "multiply", "divide"]
        assert schema["properties"]["x"]["type"] == "number"
        assert schema["required"] == ["operation", "x", "y"]
