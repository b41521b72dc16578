"""Shared fixtures for the message service and feed client tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import SQLiteMessageStore
from main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(cors_origins=["http://localhost:3000"], database_path=":memory:")


@pytest.fixture
def store():
    memory_store = SQLiteMessageStore(":memory:")
    yield memory_store
    memory_store.close()


@pytest.fixture
def client(settings: Settings, store: SQLiteMessageStore):
    app = create_app(settings, store=store)
    with TestClient(app) as test_client:
        yield test_client
