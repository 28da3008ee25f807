"""
stdio トランスポート

1行1メッセージの JSON-RPC を stdin から読み、応答を stdout に書く。
ログは stderr に出力されるため stdout には応答のみが流れる。
"""

import asyncio
import json
import logging
import sys
from typing import Optional, TextIO

from server.mcp_handler import handle_raw_message
from tools_manager import ToolsManager

logger = logging.getLogger(__name__)


def write_message(stdout: TextIO, message: dict) -> None:
    stdout.write(json.dumps(message) + "\n")
    stdout.flush()


async def serve_stdio(manager: ToolsManager, timeout: Optional[float] = None,
                      stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
    """EOF まで1件ずつ処理"""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    loop = asyncio.get_running_loop()

    logger.info("[STDIO] Listening on stdin")
    while True:
        line = await loop.run_in_executor(None, stdin.readline)
        if not line:
            break

        line = line.strip()
        if not line:
            continue

        message = await handle_raw_message(manager, line, timeout)
        if message is not None:
            write_message(stdout, message)

    logger.info("[STDIO] stdin closed, shutting down")
