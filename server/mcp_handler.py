"""
MCP JSON-RPC ハンドラー

HTTP / stdio の両トランスポートで共通のメソッド振り分けとエラー変換。
ツールの検証・業務エラーは CallToolResult(isError=True) として result に入り、
JSON-RPC の error になるのはプロトコル・基盤側の失敗のみ。
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from config import SERVER_CONFIG
from errors import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    PARSE_ERROR,
    InvalidParamsError,
    MCPServerError,
    MethodNotFoundError,
)
from models import MCPError, MCPRequest, MCPResponse
from tools_manager import ToolsManager
from utils.context import RequestContext

logger = logging.getLogger(__name__)


def error_response(request_id: Optional[Union[int, str]], code: int, message: str, data: Any = None) -> MCPResponse:
    return MCPResponse(id=request_id, error=MCPError(code=code, message=message, data=data))


def _require_param(params: Dict[str, Any], key: str) -> str:
    value = params.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidParamsError(f"params.{key} must be a non-empty string")
    return value


async def _dispatch(manager: ToolsManager, method: str, params: Dict[str, Any], context: RequestContext) -> Any:
    if method == "initialize":
        # 初期化
        return {
            "protocolVersion": SERVER_CONFIG["protocol_version"],
            "capabilities": {
                "tools": {"listChanged": False},
                "resources": {"subscribe": False, "listChanged": False}
            },
            "serverInfo": {
                "name": SERVER_CONFIG["title"],
                "version": SERVER_CONFIG["version"]
            }
        }

    elif method == "ping":
        return {}

    elif method == "tools/list":
        return {"tools": manager.get_tools_list()}

    elif method == "tools/call":
        # ツール実行
        tool_name = _require_param(params, "name")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise InvalidParamsError("params.arguments must be an object")

        logger.info(f"[MCP_ENDPOINT] Tool name: {tool_name}")
        logger.debug(f"[MCP_ENDPOINT] Arguments: {arguments}")

        result = await manager.call_tool(tool_name, arguments, context)
        return result.model_dump()

    elif method == "resources/list":
        return {"resources": manager.get_resources_list()}

    elif method == "resources/read":
        uri = _require_param(params, "uri")
        contents = await manager.read_resource(uri, context)
        return {"contents": [c.model_dump() for c in contents]}

    else:
        raise MethodNotFoundError(method)


async def handle_mcp_request(manager: ToolsManager, request: MCPRequest,
                             timeout: Optional[float] = None) -> Optional[MCPResponse]:
    """1リクエストを処理（通知の場合は None）"""
    if request.is_notification and request.method.startswith("notifications/"):
        logger.info(f"[MCP_ENDPOINT] Notification received: {request.method}")
        return None

    response = await _process(manager, request, timeout)
    if request.is_notification:
        # id なしのリクエストは実行のみ、応答は返さない
        logger.info(f"[MCP_ENDPOINT] Dropped response to id-less {request.method}")
        return None
    return response


async def _process(manager: ToolsManager, request: MCPRequest, timeout: Optional[float]) -> MCPResponse:
    context = RequestContext(request.id, timeout)
    params = request.params or {}

    try:
        result = await _dispatch(manager, request.method, params, context)
        return MCPResponse(id=request.id, result=result)

    except MCPServerError as e:
        logger.warning(f"[MCP_ENDPOINT] {request.method} failed: {type(e).__name__}: {e}")
        return error_response(request.id, e.code, str(e))

    except Exception as e:
        logger.exception(f"[MCP_ENDPOINT] Unexpected error in {request.method}")
        return error_response(
            request.id,
            INTERNAL_ERROR,
            f"Internal error: {e}",
            data={"error_type": type(e).__name__, "method": request.method}
        )


async def handle_raw_message(manager: ToolsManager, raw: str,
                             timeout: Optional[float] = None) -> Optional[Dict[str, Any]]:
    """JSON文字列を受け取り、JSON-RPC応答（dict）を返す"""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"[MCP_ENDPOINT] Parse error: {e}")
        return error_response(None, PARSE_ERROR, f"Parse error: {e}").to_wire()

    if not isinstance(payload, dict):
        return error_response(None, INVALID_REQUEST, "Invalid request: expected a JSON object").to_wire()

    try:
        request = MCPRequest.model_validate(payload)
    except ValidationError as e:
        request_id = payload.get("id")
        if not isinstance(request_id, (int, str)) or isinstance(request_id, bool):
            request_id = None
        return error_response(request_id, INVALID_REQUEST, f"Invalid request: {e.errors()[0]['msg']}").to_wire()

    response = await handle_mcp_request(manager, request, timeout)
    return response.to_wire() if response is not None else None
