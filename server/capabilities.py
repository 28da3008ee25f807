# Demo MCP - ツール・リソース登録

from resources.product_list import PRODUCTS_RESOURCE, create_list_products_handler
from tools.calculator import CALCULATE_TOOL, calculate_handler
from tools.greeting import HELLO_TOOL, hello_handler
from tools_manager import ToolsManager
from utils.database import ProductStore


def build_tools_manager(store: ProductStore) -> ToolsManager:
    """hello_world / calculate / products://list を登録した ToolsManager を生成"""
    manager = ToolsManager()
    manager.register_tool(HELLO_TOOL, hello_handler)
    manager.register_resource(PRODUCTS_RESOURCE, create_list_products_handler(store))
    manager.register_tool(CALCULATE_TOOL, calculate_handler)
    return manager
