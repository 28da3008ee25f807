# Demo MCP Server Configuration

import os

# データベース設定
DB_CONFIG = {
    "path": os.getenv("DB_PATH") or "test.db"
}

# サーバー設定
SERVER_CONFIG = {
    "title": "Demo",
    "version": "1.0.0",
    "host": os.getenv("MCP_HOST", "0.0.0.0"),
    "port": int(os.getenv("MCP_PORT", "8003")),
    "transport": os.getenv("MCP_TRANSPORT", "stdio"),
    "request_timeout": float(os.getenv("REQUEST_TIMEOUT", "30")),
    "protocol_version": "2024-11-05"
}

# ログ設定
LOG_CONFIG = {
    "level": os.getenv("LOG_LEVEL", "INFO").upper()
}
