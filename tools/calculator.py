# Demo MCP - Calculator Tool

import logging
from typing import Any, Dict

from errors import ArgumentError, BusinessRuleViolation
from models import CallToolResult, ToolDefinition, ToolParameter, new_tool_result_error, new_tool_result_text
from utils.arguments import require_number, require_string
from utils.context import RequestContext

logger = logging.getLogger(__name__)

OPERATIONS = ("add", "subtract", "multiply", "divide")

CALCULATE_TOOL = ToolDefinition(
    name="calculate",
    description="Perform basic arithmetic operations",
    parameters=(
        ToolParameter(
            name="operation",
            type="string",
            required=True,
            description="The operation to perform (add, subtract, multiply, divide)",
            enum=OPERATIONS
        ),
        ToolParameter(name="x", type="number", required=True, description="First number"),
        ToolParameter(name="y", type="number", required=True, description="Second number"),
    )
)


def calculate(operation: str, x: float, y: float) -> float:
    """四則演算（ゼロ除算・未対応演算は BusinessRuleViolation）"""
    if operation == "add":
        return x + y
    elif operation == "subtract":
        return x - y
    elif operation == "multiply":
        return x * y
    elif operation == "divide":
        if y == 0:
            raise BusinessRuleViolation("cannot divide by zero")
        return x / y
    else:
        raise BusinessRuleViolation(f"unsupported operation: {operation}")


def format_result(value: float) -> str:
    """小数点以下2桁固定"""
    return f"{value:.2f}"


async def calculate_handler(context: RequestContext, arguments: Dict[str, Any]) -> CallToolResult:
    """calculate ツール実行"""
    try:
        operation = require_string(arguments, "operation")
        x = require_number(arguments, "x")
        y = require_number(arguments, "y")
    except ArgumentError as e:
        return new_tool_result_error(str(e))

    try:
        result = calculate(operation, x, y)
    except BusinessRuleViolation as e:
        logger.info(f"[calculate] Rejected {operation}({x}, {y}): {e}")
        return new_tool_result_error(str(e))

    return new_tool_result_text(format_result(result))
