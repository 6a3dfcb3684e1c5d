# tests/conftest.py

import time
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.effects.registry import registry
from app.main import create_app
from app.storage.media_store import MediaStore

from fakes import FakeMediaStore, Handler, make_vendor


@pytest.fixture(autouse=True)
def _effects_registered():
    registry.discover()


@pytest.fixture()
def fake_storage() -> FakeMediaStore:
    return FakeMediaStore()


@pytest.fixture()
def api_client():
    """
    Factory: api_client(handler, media_store=None, api_key=...) -> TestClient.

    The client is entered so the lifespan (task runner, sweeper) is live for
    the whole test, and closed again at teardown.
    """
    opened: List[TestClient] = []

    def _make(
        handler: Handler,
        media_store: Optional[MediaStore] = None,
        api_key: Optional[str] = "test-key",
    ) -> TestClient:
        app = create_app(vendor=make_vendor(handler, api_key=api_key), media_store=media_store)
        client = TestClient(app)
        client.__enter__()
        opened.append(client)
        return client

    yield _make

    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture()
def poll():
    """poll(client, effect, task_id) -> first non-pending status body."""

    def _poll(client: TestClient, effect: str, task_id: str, timeout: float = 5.0) -> dict:
        deadline = time.monotonic() + timeout
        while True:
            body = client.get(f"/api/{effect}/status/{task_id}").json()
            if body.get("status") != "pending" or time.monotonic() > deadline:
                return body
            time.sleep(0.01)

    return _poll
