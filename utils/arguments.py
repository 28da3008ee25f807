# Demo MCP Server Argument Validation

from typing import Any, Dict

from errors import MissingArgumentError, TypeMismatchError


def require_string(arguments: Dict[str, Any], name: str) -> str:
    """文字列引数を取得（未指定・型違いは例外）"""
    if name not in arguments:
        raise MissingArgumentError(name)

    value = arguments[name]
    if not isinstance(value, str):
        raise TypeMismatchError(name, "string")
    return value


def require_number(arguments: Dict[str, Any], name: str) -> float:
    """数値引数を float で取得（数値文字列も可）"""
    if name not in arguments:
        raise MissingArgumentError(name)

    value = arguments[name]
    # bool は int のサブクラスなので明示的に除外
    if isinstance(value, bool):
        raise TypeMismatchError(name, "number")
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            raise TypeMismatchError(name, "number")
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise TypeMismatchError(name, "number")
    raise TypeMismatchError(name, "number")
