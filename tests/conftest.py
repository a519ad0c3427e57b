# tests/conftest.py
from collections import defaultdict

import httpx
import pytest
from fastapi.testclient import TestClient

from database import DuplicateRowError, get_store
from main import app
from routes.common import get_http_client
from services.config_service import clear_config_cache


class InMemoryTableStore:
    """Dict-backed TableStore with the same contract as the Mongo one."""

    def __init__(self):
        self.tables = defaultdict(list)
        self.properties = {}
        self.unique = defaultdict(set)
        self.unique["Utilisateurs"].add("Email")

    async def read_table(self, name):
        return [dict(row) for row in self.tables.get(name, [])]

    async def append_row(self, name, row):
        for column in self.unique.get(name, ()):
            if any(existing.get(column) == row.get(column) for existing in self.tables.get(name, [])):
                raise DuplicateRowError(f"duplicate {column}")
        self.tables[name].append(dict(row))

    async def update_rows(self, name, match, values):
        count = 0
        for row in self.tables.get(name, []):
            if all(row.get(k) == v for k, v in match.items()):
                row.update(values)
                count += 1
        return count

    async def delete_rows(self, name, match=None):
        rows = self.tables.get(name, [])
        kept = [row for row in rows if match and not all(row.get(k) == v for k, v in match.items())]
        self.tables[name] = kept
        return len(rows) - len(kept)

    async def ensure_unique(self, name, column):
        self.unique[name].add(column)

    async def get_property(self, key):
        return self.properties.get(key)

    async def set_property(self, key, value):
        self.properties[key] = value

    async def advance_property(self, key, candidate):
        current = self.properties.get(key)
        self.properties[key] = candidate if current is None else max(current, candidate)
        return self.properties[key]


@pytest.fixture(autouse=True)
def fresh_config_cache():
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def store():
    return InMemoryTableStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def http_handler(client):
    """Route outbound HTTP made by the app through a MockTransport handler."""
    def install(handler):
        async def mocked_client():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
                yield http_client
        app.dependency_overrides[get_http_client] = mocked_client
    return install


def json_ok(data):
    return httpx.Response(200, json={"success": True, "data": data})
