#!/usr/bin/env python3
"""
Demo MCP Server - hello_world / calculate ツール、products://list リソース
Transport: stdio（既定） / HTTP（MCP_TRANSPORT=http, Port: 8003）
"""

import asyncio
import logging
import sys
from datetime import datetime
from typing import Tuple

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import DB_CONFIG, LOG_CONFIG, SERVER_CONFIG
from errors import MigrationError, SeedError, StoreConnectionError, StoreError
from server.capabilities import build_tools_manager
from server.mcp_handler import handle_raw_message
from server.stdio_server import serve_stdio
from tools_manager import ToolsManager
from utils.database import ProductStore

# ログ設定（stderr 出力、stdio の応答と混ざらない）
logging.basicConfig(level=LOG_CONFIG["level"])
logger = logging.getLogger(__name__)


def create_app(store: ProductStore, tools_manager: ToolsManager) -> FastAPI:
    """HTTP トランスポート用の FastAPI アプリを生成"""
    app = FastAPI(
        title=SERVER_CONFIG["title"],
        version=SERVER_CONFIG["version"]
    )

    # CORS設定
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        return {
            "service": "Demo MCP Server",
            "version": SERVER_CONFIG["version"],
            "status": "running",
            "timestamp": datetime.now().isoformat()
        }

    @app.get("/health")
    async def health_check():
        try:
            products = store.count()
            status = "healthy"
        except StoreError as e:
            logger.warning(f"[HEALTH] Store unavailable: {e}")
            products = None
            status = "degraded"
        return {
            "status": status,
            "service": "Demo-MCP",
            "products": products,
            "timestamp": datetime.now().isoformat()
        }

    @app.post("/mcp")
    async def mcp_endpoint(request: Request):
        """MCPプロトコルエンドポイント（JSON-RPC エラーも封筒で返す）"""
        raw = (await request.body()).decode("utf-8", errors="replace")
        logger.info(f"[MCP_ENDPOINT] Request received: {len(raw)} bytes")

        message = await handle_raw_message(
            tools_manager, raw, timeout=SERVER_CONFIG["request_timeout"]
        )
        if message is None:
            # 通知には応答しない
            return Response(status_code=202)
        return JSONResponse(content=message)

    @app.get("/tools")
    async def list_available_tools():
        """MCPプロトコル準拠のツール一覧"""
        return {
            "tools": tools_manager.get_tools_list()
        }

    @app.get("/tools/descriptions")
    async def get_tool_descriptions():
        """ツール詳細情報"""
        return {
            "tools": tools_manager.get_tools_descriptions()
        }

    @app.get("/resources")
    async def list_available_resources():
        return {
            "resources": tools_manager.get_resources_list()
        }

    return app


def bootstrap(db_path: str) -> Tuple[ProductStore, ToolsManager]:
    """DB 初期化・シード・ツール登録（DB 接続/マイグレーション失敗は終了）"""
    store = ProductStore(db_path)

    try:
        store.initialize()
    except (StoreConnectionError, MigrationError) as e:
        logger.error(f"Database initialization failed: {e}")
        sys.exit(1)

    try:
        store.seed_if_empty()
    except SeedError as e:
        logger.warning(f"Warning: Database seeding failed: {e}")

    return store, build_tools_manager(store)


def main() -> None:
    store, tools_manager = bootstrap(DB_CONFIG["path"])
    transport = SERVER_CONFIG["transport"]

    logger.info(f"Starting MCP server... (transport={transport})")
    if transport == "stdio":
        asyncio.run(serve_stdio(tools_manager, timeout=SERVER_CONFIG["request_timeout"]))
    elif transport == "http":
        uvicorn.run(
            create_app(store, tools_manager),
            host=SERVER_CONFIG["host"],
            port=SERVER_CONFIG["port"]
        )
    else:
        logger.error(f"Unknown transport: {transport}")
        sys.exit(2)


if __name__ == "__main__":
    main()
