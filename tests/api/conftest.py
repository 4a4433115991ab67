"""API test fixtures — FastAPI app over a fake RemoteStore.

Invariants:
    - ASGITransport does not run the lifespan: the fixture builds the Runtime
      and performs the initial load itself
"""

import pytest
from httpx import ASGITransport, AsyncClient

from leavesys.config import Settings
from leavesys.main import create_app
from leavesys.services.runtime import build_runtime
from tests.services.fake_remote_store import (
    FakeRemoteStore,
    employee_wire,
    leave_wire,
)


@pytest.fixture
def fake_store():
    return FakeRemoteStore(
        employees=[employee_wire(1, "Ann"), employee_wire(2, "Bob", department="Sales")],
        leaves=[
            leave_wire(10, 1, "2024-01-10"),
            leave_wire(11, 2, "2024-01-12", status="APPROVED"),
            leave_wire(12, 99, "2024-01-15", status="APPROVED"),
        ],
        balances={1: 18},
    )


@pytest.fixture
def app(fake_store):
    settings = Settings(remote_base_url="http://remote.test")
    app = create_app(settings)
    app.state.runtime = build_runtime(settings, transport=fake_store.transport)
    return app


@pytest.fixture
async def client(app):
    await app.state.runtime.controller.start()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as ac:
        yield ac
    await app.state.runtime.aclose()
