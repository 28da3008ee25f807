# Demo MCP Server Error Types

# JSON-RPC エラーコード
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
RESOURCE_NOT_FOUND = -32002


class MCPServerError(Exception):
    """サーバー共通の基底例外"""
    code = INTERNAL_ERROR


# 引数検証エラー（ハンドラー内でエラー結果に変換）

class ArgumentError(MCPServerError):
    code = INVALID_PARAMS

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class MissingArgumentError(ArgumentError):
    def __init__(self, name: str):
        super().__init__(name, f'required argument "{name}" not found')


class TypeMismatchError(ArgumentError):
    def __init__(self, name: str, expected: str):
        super().__init__(name, f'argument "{name}" is not a {expected}')
        self.expected = expected


class BusinessRuleViolation(MCPServerError):
    """ゼロ除算など、利用者に返すビジネスルール違反"""
    code = INVALID_PARAMS


class InvalidRequestError(MCPServerError):
    code = INVALID_REQUEST


# レジストリエラー

class RegistryError(MCPServerError):
    pass


class DuplicateNameError(RegistryError):
    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} already registered: {name}")
        self.name = name


class UnknownNameError(RegistryError):
    code = INVALID_PARAMS


class UnknownToolError(UnknownNameError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class UnknownResourceError(UnknownNameError):
    code = RESOURCE_NOT_FOUND

    def __init__(self, uri: str):
        super().__init__(f"Resource not found: {uri}")
        self.uri = uri


# ストアエラー

class StoreError(MCPServerError):
    pass


class StoreConnectionError(StoreError):
    """起動時は致命的"""


class MigrationError(StoreError):
    """起動時は致命的"""


class SeedError(StoreError):
    """警告のみ、起動は継続"""


class RetrievalError(StoreError):
    pass


class SerializationError(MCPServerError):
    pass


# リクエストライフサイクル

class RequestCancelledError(MCPServerError):
    pass


class RequestTimeoutError(MCPServerError):
    pass


# プロトコルエラー

class InvalidParamsError(InvalidRequestError):
    code = INVALID_PARAMS


class MethodNotFoundError(MCPServerError):
    code = METHOD_NOT_FOUND

    def __init__(self, method: str):
        super().__init__(f"Unknown method: {method}")
        self.method = method
