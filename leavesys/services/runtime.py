"""Runtime — wires client, loader, coordinator, and controller for one process.

Invariants:
    - Exactly one RemoteStoreClient per runtime; aclose() releases it
    - Loader, coordinator and controller share the same SyncState

Design Decisions:
    - transport parameter lets tests run the whole stack against httpx.MockTransport
"""

from dataclasses import dataclass

import httpx

from leavesys.config import Settings
from leavesys.infrastructure.remote_store import RemoteStoreClient
from leavesys.services.interaction_controller import InteractionController
from leavesys.services.mutation_coordinator import MutationCoordinator
from leavesys.services.snapshot_loader import SnapshotLoader


@dataclass
class Runtime:
    store: RemoteStoreClient
    loader: SnapshotLoader
    coordinator: MutationCoordinator
    controller: InteractionController

    async def aclose(self) -> None:
        await self.store.aclose()


def build_runtime(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
) -> Runtime:
    store = RemoteStoreClient(
        settings.remote_base_url,
        timeout_seconds=settings.remote_timeout_seconds,
        transport=transport,
    )
    loader = SnapshotLoader(store, fencing=settings.refresh_epoch_fencing)
    coordinator = MutationCoordinator(store, loader)
    controller = InteractionController(
        loader, coordinator, upcoming_limit=settings.upcoming_limit,
    )
    return Runtime(store, loader, coordinator, controller)
