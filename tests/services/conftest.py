"""Service test fixtures — fake RemoteStore wired into the real client stack.

Invariants:
    - Every test gets a fresh FakeRemoteStore seeded with one employee and one leave
    - RemoteStoreClient talks to it through httpx.MockTransport (no sockets)
    - Loader, coordinator and controller share one client, as in build_runtime()
"""

import pytest

from leavesys.infrastructure.remote_store import RemoteStoreClient
from leavesys.services.interaction_controller import InteractionController
from leavesys.services.mutation_coordinator import MutationCoordinator
from leavesys.services.snapshot_loader import SnapshotLoader
from tests.services.fake_remote_store import (
    FakeRemoteStore,
    employee_wire,
    leave_wire,
)


@pytest.fixture
def fake_store():
    return FakeRemoteStore(
        employees=[employee_wire(1, "Ann")],
        leaves=[leave_wire(10, 1, "2024-01-10")],
        balances={1: 18},
    )


@pytest.fixture
async def store_client(fake_store):
    client = RemoteStoreClient("http://remote.test", transport=fake_store.transport)
    yield client
    await client.aclose()


@pytest.fixture
def loader(store_client):
    return SnapshotLoader(store_client)


@pytest.fixture
def coordinator(store_client, loader):
    return MutationCoordinator(store_client, loader)


@pytest.fixture
def controller(loader, coordinator):
    return InteractionController(loader, coordinator)
