from datetime import datetime
from typing import List

import pytest
from fastapi.testclient import TestClient

from contact_board.app import app, get_message_store, get_todo_store
from contact_board.core.config import Config
from contact_board.services.todo_store import JsonFileTodoStore


class InMemoryMessageStore:
    """Stands in for the Supabase table: assigns ids, orders newest first."""

    def __init__(self, rows: List[dict] = None):
        self.rows: List[dict] = []
        self.pings = 0
        for row in rows or []:
            self.insert(row)

    def insert(self, record: dict) -> dict:
        row = dict(record)
        row.setdefault("id", len(self.rows) + 1)
        self.rows.append(row)
        return row

    def select_ordered(self) -> List[dict]:
        return sorted(
            (dict(row) for row in self.rows),
            key=lambda row: datetime.fromisoformat(row["created_at"]),
            reverse=True,
        )

    def ping(self) -> None:
        self.pings += 1


class FailingMessageStore(InMemoryMessageStore):
    def insert(self, record: dict) -> dict:
        raise RuntimeError("relation \"contact_test_app\" is unavailable")

    def select_ordered(self) -> List[dict]:
        raise RuntimeError("connection reset by peer")


@pytest.fixture(autouse=True)
def no_submit_delay(monkeypatch):
    monkeypatch.setattr(Config, "SUBMIT_DELAY_SECONDS", 0)


@pytest.fixture
def todo_store(tmp_path):
    return JsonFileTodoStore(str(tmp_path / "todos.json"))


@pytest.fixture
def message_store():
    return InMemoryMessageStore()


@pytest.fixture
def client(todo_store, message_store):
    app.dependency_overrides[get_todo_store] = lambda: todo_store
    app.dependency_overrides[get_message_store] = lambda: message_store
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
