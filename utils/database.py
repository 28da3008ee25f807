# Demo MCP Server Database Utilities

import logging
import sqlite3
import threading
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from errors import (
    MigrationError,
    RetrievalError,
    SeedError,
    StoreConnectionError,
    StoreError,
)
from models import Product
from utils.context import RequestContext

logger = logging.getLogger(__name__)

# 商品テーブル定義（id 以外は既存テーブルへの列追加対象）
PRODUCT_COLUMNS = [
    ("id", "INTEGER PRIMARY KEY AUTOINCREMENT"),
    ("created_at", "TEXT"),
    ("updated_at", "TEXT"),
    ("deleted_at", "TEXT"),
    ("code", "TEXT"),
    ("price", "REAL"),
]

# 初期データ（空の場合のみ投入）
SAMPLE_PRODUCTS = [
    ("D42", 100.00),
    ("P99", 200.00),
]


class ProductStore:
    """商品テーブルの管理（SQLiteファイル）"""

    def __init__(self, db_path: str = "test.db"):
        self.db_path = db_path
        self._lock = threading.Lock()

    def get_db_connection(self) -> sqlite3.Connection:
        """データベース接続を取得"""
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as e:
            logger.error(f"[ProductStore] Database connection failed: {e}")
            raise StoreConnectionError(f"failed to connect database: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    def initialize(self) -> None:
        """スキーマ作成・不足列の追加（何度実行しても同じ結果）"""
        with self._lock:
            conn = self.get_db_connection()
            try:
                columns = ",\n".join(f"{name} {ddl}" for name, ddl in PRODUCT_COLUMNS)
                conn.execute(f"CREATE TABLE IF NOT EXISTS products (\n{columns}\n)")

                existing = {row["name"] for row in conn.execute("PRAGMA table_info(products)")}
                for name, ddl in PRODUCT_COLUMNS[1:]:
                    if name not in existing:
                        logger.info(f"[ProductStore] Adding missing column: {name}")
                        conn.execute(f"ALTER TABLE products ADD COLUMN {name} {ddl}")

                conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_products_deleted_at ON products(deleted_at)"
                )
                conn.commit()
            except sqlite3.Error as e:
                logger.error(f"[ProductStore] Migration failed: {e}")
                raise MigrationError(f"failed to migrate database: {e}") from e
            finally:
                conn.close()

        logger.info(f"[ProductStore] Database ready: {self.db_path}")

    def count(self) -> int:
        """論理削除されていない商品数"""
        conn = self.get_db_connection()
        try:
            row = conn.execute(
                "SELECT COUNT(*) AS total FROM products WHERE deleted_at IS NULL"
            ).fetchone()
            return row["total"]
        except sqlite3.Error as e:
            raise RetrievalError(f"failed to count products: {e}") from e
        finally:
            conn.close()

    def seed_if_empty(self) -> int:
        """空の場合のみサンプル商品を一括投入し、投入件数を返す"""
        with self._lock:
            try:
                if self.count() > 0:
                    return 0

                now = datetime.now(timezone.utc).isoformat()
                rows = [(now, now, code, price) for code, price in SAMPLE_PRODUCTS]

                conn = self.get_db_connection()
                try:
                    with conn:
                        conn.executemany(
                            "INSERT INTO products (created_at, updated_at, code, price) VALUES (?, ?, ?, ?)",
                            rows
                        )
                finally:
                    conn.close()
            except (sqlite3.Error, StoreError) as e:
                raise SeedError(f"failed to seed database: {e}") from e

        logger.info("Database seeded with sample products")
        return len(rows)

    def list_all(self, context: Optional[RequestContext] = None) -> List[Product]:
        """全商品取得（id 昇順）"""
        if context is not None:
            context.check()

        try:
            conn = self.get_db_connection()
            try:
                rows = conn.execute(
                    "SELECT id, code, price, created_at, updated_at, deleted_at "
                    "FROM products WHERE deleted_at IS NULL ORDER BY id"
                ).fetchall()
            finally:
                conn.close()
            products = [Product.model_validate(dict(row)) for row in rows]
        except (sqlite3.Error, StoreConnectionError, ValidationError) as e:
            logger.error(f"[ProductStore] Query execution failed: {e}")
            raise RetrievalError(f"failed to retrieve products: {e}") from e

        logger.info(f"[ProductStore] Retrieved {len(products)} products")
        return products
