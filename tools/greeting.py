# Demo MCP - Greeting Tool

from typing import Any, Dict

from errors import ArgumentError
from models import CallToolResult, ToolDefinition, ToolParameter, new_tool_result_error, new_tool_result_text
from utils.arguments import require_string
from utils.context import RequestContext

HELLO_TOOL = ToolDefinition(
    name="hello_world",
    description="Say hello to someone",
    parameters=(
        ToolParameter(
            name="name",
            type="string",
            required=True,
            description="Name of the person to greet"
        ),
    )
)


async def hello_handler(context: RequestContext, arguments: Dict[str, Any]) -> CallToolResult:
    """挨拶を返す"""
    try:
        name = require_string(arguments, "name")
    except ArgumentError as e:
        return new_tool_result_error(str(e))

    return new_tool_result_text(f"Hello, {name}!")
