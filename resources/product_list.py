# Demo MCP - Product List Resource

import asyncio
import json
import logging
from typing import List

from errors import SerializationError
from models import Product, ResourceDefinition, TextResourceContents
from utils.context import RequestContext
from utils.database import ProductStore

logger = logging.getLogger(__name__)

PRODUCTS_RESOURCE = ResourceDefinition(
    uri="products://list",
    name="Product List",
    description="Lists all available products",
    mimeType="application/json"
)


def format_products_json(products: List[Product]) -> str:
    """商品配列を JSON テキスト化（インデント2）"""
    try:
        return json.dumps([p.model_dump(mode="json") for p in products], indent=2)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal products to JSON: {e}") from e


def create_list_products_handler(store: ProductStore):
    """ストアを束縛したリソースハンドラーを生成"""

    async def list_products_handler(context: RequestContext, uri: str) -> List[TextResourceContents]:
        # 同期 DB 呼び出しはイベントループ外で実行
        products = await asyncio.to_thread(store.list_all, context)
        return [
            TextResourceContents(
                uri=PRODUCTS_RESOURCE.uri,
                mimeType=PRODUCTS_RESOURCE.mimeType,
                text=format_products_json(products)
            )
        ]

    return list_products_handler
