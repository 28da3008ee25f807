"""
Tests for ProductStore: migration, seeding, listing.
"""

import sqlite3

import pytest

from errors import (
    MigrationError,
    RequestCancelledError,
    RetrievalError,
    StoreConnectionError,
)
from utils.context import RequestContext
from utils.database import ProductStore


def _columns(db_path):
    conn = sqlite3.connect(db_path)
    try:
        return {row[1] for row in conn.execute("PRAGMA table_info(products)")}
    finally:
        conn.close()


class TestInitialize:
    def test_creates_products_table(self, store, db_path):
        assert _columns(db_path) == {"id", "created_at", "updated_at", "deleted_at", "code", "price"}
        assert store.count() == 0

    def test_is_idempotent(self, store):
        store.initialize()
        store.initialize()
        assert store.count() == 0

    def test_adds_missing_columns_to_existing_table(self, db_path):
        conn = sqlite3.connect(db_path)
        conn.execute("CREATE TABLE products (id INTEGER PRIMARY KEY AUTOINCREMENT, code TEXT, price REAL)")
        conn.execute("INSERT INTO products (code, price) VALUES ('OLD1', 5)")
        conn.commit()
        conn.close()

        ProductStore(db_path).initialize()

        assert {"created_at", "updated_at", "deleted_at"} <= _columns(db_path)

    def test_unreachable_path_is_connection_error(self, tmp_path):
        store = ProductStore(str(tmp_path / "missing-dir" / "products.db"))
        with pytest.raises(StoreConnectionError):
            store.initialize()

    def test_corrupt_file_is_migration_error(self, tmp_path):
        path = tmp_path / "corrupt.db"
        path.write_bytes(b"this is definitely not an sqlite database file " * 20)
        with pytest.raises(MigrationError):
            ProductStore(str(path)).initialize()


class TestSeedIfEmpty:
    def test_seeds_two_products(self, store):
        assert store.seed_if_empty() == 2
        products = store.list_all()
        assert [(p.code, p.price) for p in products] == [("D42", 100.0), ("P99", 200.0)]

    @pytest.mark.parametrize("times", [1, 2, 5])
    def test_idempotent(self, store, times):
        for _ in range(times):
            store.seed_if_empty()
        assert store.count() == 2
        assert len(store.list_all()) == 2

    def test_second_call_inserts_nothing(self, store):
        store.seed_if_empty()
        assert store.seed_if_empty() == 0

    def test_does_not_seed_non_empty_table(self, store, db_path):
        conn = sqlite3.connect(db_path)
        conn.execute("INSERT INTO products (code, price) VALUES ('X1', 1.5)")
        conn.commit()
        conn.close()

        assert store.seed_if_empty() == 0
        assert [p.code for p in store.list_all()] == ["X1"]

    def test_survives_reopen(self, db_path):
        first = ProductStore(db_path)
        first.initialize()
        first.seed_if_empty()

        second = ProductStore(db_path)
        second.initialize()
        assert second.seed_if_empty() == 0
        assert second.count() == 2


class TestListAll:
    def test_ordered_by_id_with_timestamps(self, seeded_store):
        products = seeded_store.list_all()
        assert [p.id for p in products] == sorted(p.id for p in products)
        for product in products:
            assert product.created_at is not None
            assert product.updated_at is not None
            assert product.deleted_at is None

    def test_ids_are_unique(self, seeded_store):
        ids = [p.id for p in seeded_store.list_all()]
        assert len(ids) == len(set(ids))

    def test_excludes_soft_deleted_rows(self, seeded_store, db_path):
        conn = sqlite3.connect(db_path)
        conn.execute("UPDATE products SET deleted_at = '2024-01-01T00:00:00+00:00' WHERE code = 'D42'")
        conn.commit()
        conn.close()

        assert [p.code for p in seeded_store.list_all()] == ["P99"]
        assert seeded_store.count() == 1

    def test_uninitialized_store_is_retrieval_error(self, db_path):
        with pytest.raises(RetrievalError):
            ProductStore(db_path).list_all()

    def test_cancelled_context_stops_before_query(self, seeded_store):
        context = RequestContext(request_id=1)
        context.cancel()
        with pytest.raises(RequestCancelledError):
            seeded_store.list_all(context)
