"""
Shared fixtures for the demo MCP server tests.

Each test gets its own SQLite file under tmp_path, so nothing touches the
default test.db in the working directory.
"""

import pytest

from server.capabilities import build_tools_manager
from utils.context import RequestContext
from utils.database import ProductStore


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "products.db")


@pytest.fixture
def store(db_path):
    """Initialized but empty product store."""
    product_store = ProductStore(db_path)
    product_store.initialize()
    return product_store


@pytest.fixture
def seeded_store(store):
    store.seed_if_empty()
    return store


@pytest.fixture
def tools_manager(seeded_store):
    return build_tools_manager(seeded_store)


@pytest.fixture
def context():
    return RequestContext(request_id="test-request", timeout=5.0)
