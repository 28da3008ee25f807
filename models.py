# Demo MCP Server Data Models

from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import Dict, Any, List, Literal, Optional, Tuple, Union

class MCPRequest(BaseModel):
    jsonrpc: str = "2.0"
    id: Optional[Union[int, str]] = None
    method: str
    params: Optional[Dict[str, Any]] = None

    @property
    def is_notification(self) -> bool:
        """id フィールドなし = 通知（応答しない）"""
        return "id" not in self.model_fields_set

class MCPError(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None

class MCPResponse(BaseModel):
    jsonrpc: str = "2.0"
    id: Optional[Union[int, str]] = None
    result: Any = None
    error: Optional[MCPError] = None

    def to_wire(self) -> Dict[str, Any]:
        """JSON-RPC形式（result / error のどちらか一方）"""
        message = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            message["error"] = self.error.model_dump(exclude_none=True)
        else:
            message["result"] = self.result if self.result is not None else {}
        return message

# ツール・リソース定義

class ToolParameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: Literal["string", "number"]
    description: str = ""
    required: bool = False
    enum: Optional[Tuple[str, ...]] = None

    def to_schema(self) -> Dict[str, Any]:
        schema = {"type": self.type, "description": self.description}
        if self.enum:
            schema["enum"] = list(self.enum)
        return schema

class ToolDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Tuple[ToolParameter, ...] = ()

    def input_schema(self) -> Dict[str, Any]:
        """MCP inputSchema（JSON Schema）"""
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required]
        }

class ResourceDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    uri: str
    name: str
    description: str = ""
    mimeType: str = "application/json"

# 実行結果

class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str

class CallToolResult(BaseModel):
    content: List[TextContent]
    isError: bool = False

    @property
    def text(self) -> str:
        return "".join(block.text for block in self.content)

class TextResourceContents(BaseModel):
    uri: str
    mimeType: str
    text: str

def new_tool_result_text(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(text=text)])

def new_tool_result_error(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(text=text)], isError=True)

# 商品

class Product(BaseModel):
    id: int
    code: str
    price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
