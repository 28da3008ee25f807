import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from errors import (
    DuplicateNameError,
    RequestTimeoutError,
    UnknownResourceError,
    UnknownToolError,
)
from models import CallToolResult, ResourceDefinition, TextResourceContents, ToolDefinition
from utils.context import RequestContext

logger = logging.getLogger(__name__)

ToolHandler = Callable[[RequestContext, Dict[str, Any]], Awaitable[CallToolResult]]
ResourceHandler = Callable[[RequestContext, str], Awaitable[List[TextResourceContents]]]


@dataclass(frozen=True)
class RegisteredTool:
    definition: ToolDefinition
    handler: ToolHandler


@dataclass(frozen=True)
class RegisteredResource:
    definition: ResourceDefinition
    handler: ResourceHandler


class ToolsManager:
    """ツール・リソース定義の一元管理クラス"""

    def __init__(self):
        self._tools: Dict[str, RegisteredTool] = {}
        self._resources: Dict[str, RegisteredResource] = {}

    # 登録

    def register_tool(self, definition: ToolDefinition, handler: ToolHandler) -> None:
        """ツール登録（同名は DuplicateNameError、上書きしない）"""
        if not callable(handler):
            raise ValueError(f"Tool handler must be callable, got: {type(handler)}")
        if definition.name in self._tools:
            raise DuplicateNameError("tool", definition.name)

        self._tools[definition.name] = RegisteredTool(definition, handler)
        logger.info(f"[ToolsManager] Registered tool: {definition.name}")

    def register_resource(self, definition: ResourceDefinition, handler: ResourceHandler) -> None:
        """リソース登録（同一URIは DuplicateNameError）"""
        if not callable(handler):
            raise ValueError(f"Resource handler must be callable, got: {type(handler)}")
        if definition.uri in self._resources:
            raise DuplicateNameError("resource", definition.uri)

        self._resources[definition.uri] = RegisteredResource(definition, handler)
        logger.info(f"[ToolsManager] Registered resource: {definition.uri}")

    # 一覧

    def get_tools_list(self) -> List[Dict[str, Any]]:
        """tools/list用のツール一覧"""
        return [
            {
                "name": tool.definition.name,
                "description": tool.definition.description,
                "inputSchema": tool.definition.input_schema()
            }
            for tool in self._tools.values()
        ]

    def get_tools_descriptions(self) -> List[Dict[str, Any]]:
        """/tools/descriptions用の詳細情報"""
        return [
            {
                "name": tool.definition.name,
                "description": tool.definition.description,
                "parameters": {
                    p.name: {**p.to_schema(), "required": p.required}
                    for p in tool.definition.parameters
                }
            }
            for tool in self._tools.values()
        ]

    def get_resources_list(self) -> List[Dict[str, Any]]:
        """resources/list用のリソース一覧"""
        return [resource.definition.model_dump() for resource in self._resources.values()]

    def get_tool_function(self, tool_name: str) -> Optional[ToolHandler]:
        """ツール名からハンドラーを取得（未登録は None）"""
        tool = self._tools.get(tool_name)
        return tool.handler if tool else None

    def is_valid_tool(self, tool_name: str) -> bool:
        """ツール名の有効性チェック"""
        return tool_name in self._tools

    def get_tool_names(self) -> List[str]:
        """全ツール名のリスト"""
        return list(self._tools.keys())

    # 実行

    async def call_tool(self, name: str, arguments: Dict[str, Any], context: RequestContext) -> CallToolResult:
        """ツール名で解決してハンドラーを実行（結果はそのまま返す）"""
        tool_function = self.get_tool_function(name)
        if tool_function is None:
            raise UnknownToolError(name)

        logger.info(f"[ToolsManager] Calling {name} (request {context.request_id})")
        return await self._invoke(tool_function, context, arguments)

    async def read_resource(self, uri: str, context: RequestContext) -> List[TextResourceContents]:
        """URIで解決してリソースハンドラーを実行"""
        resource = self._resources.get(uri)
        if resource is None:
            raise UnknownResourceError(uri)

        logger.info(f"[ToolsManager] Reading {uri} (request {context.request_id})")
        return await self._invoke(resource.handler, context, uri)

    async def _invoke(self, handler: Callable[..., Awaitable[Any]], context: RequestContext, target: Any) -> Any:
        """期限・キャンセルを確認し、残り時間内でハンドラーを実行"""
        context.check()

        try:
            return await asyncio.wait_for(handler(context, target), timeout=context.remaining())
        except asyncio.TimeoutError:
            raise RequestTimeoutError(f"request {context.request_id} exceeded its deadline")
