"""Snapshot Loader — fetches both collections and commits them as one Snapshot.

Invariants:
    - Both collections are requested concurrently; either failing fails the whole load
    - Only a complete, decoded pair is ever committed; the old Snapshot is otherwise untouched
    - Each load carries a refresh epoch; with fencing on, stale completions are discarded
    - Failures become ConnectivityError (nothing committed yet) or RefreshError (later);
      load() never raises transport errors

Design Decisions:
    - gather(return_exceptions=True): no sibling request left running after a failure
    - Sole writer of SyncState: mutations go through the coordinator, which calls load()
"""

import asyncio
import logging
from dataclasses import dataclass

from leavesys.core.domain_types import LoadOutcome
from leavesys.core.errors import (
    ConnectivityError,
    ErrorContext,
    LeaveSysError,
    RefreshError,
)
from leavesys.core.models import Snapshot
from leavesys.core.sync_state import SyncState
from leavesys.infrastructure.remote_store import RemoteStoreClient, RemoteStoreError

logger = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = "Failed to connect to the API server. Make sure it is running."
REFRESH_MESSAGE = "Failed to refresh data from the API."


@dataclass(frozen=True)
class LoadResult:
    outcome: LoadOutcome
    epoch: int
    error: LeaveSysError | None = None

    @property
    def committed(self) -> bool:
        return self.outcome is LoadOutcome.COMMITTED


class SnapshotLoader:
    """Loads and commits Snapshots from RemoteStore."""

    def __init__(self, store: RemoteStoreClient, fencing: bool = True):
        self.store = store
        self.state = SyncState(fencing=fencing)

    @property
    def snapshot(self) -> Snapshot:
        return self.state.snapshot

    async def load(self) -> LoadResult:
        """Run one full fetch-and-replace cycle."""
        epoch = self.state.begin_load()
        logger.info("Snapshot load started", extra={"epoch": epoch})
        try:
            return await self._load(epoch)
        finally:
            self.state.in_flight.discard(epoch)

    async def _load(self, epoch: int) -> LoadResult:
        employees, leaves = await asyncio.gather(
            self.store.list_employees(),
            self.store.list_leaves(),
            return_exceptions=True,
        )

        failure = _first_failure(employees, leaves)
        if failure is None:
            try:
                snapshot = Snapshot.build(employees, leaves)
            except LeaveSysError as e:
                failure = e
        if failure is not None:
            return self._fail(epoch, failure)

        if not self.state.commit(epoch, snapshot):
            logger.info(
                "Discarded stale snapshot",
                extra={"epoch": epoch, "outcome": LoadOutcome.STALE.value},
            )
            return LoadResult(LoadOutcome.STALE, epoch)

        logger.info(
            f"Snapshot committed: {len(snapshot.employees)} employees, "
            f"{len(snapshot.leaves)} leaves",
            extra={"epoch": epoch, "outcome": LoadOutcome.COMMITTED.value},
        )
        return LoadResult(LoadOutcome.COMMITTED, epoch)

    def _fail(self, epoch: int, cause: BaseException) -> LoadResult:
        error = self._classify(epoch, cause)
        if not self.state.fail(epoch, error):
            logger.info(
                f"Discarded stale load failure: {cause}",
                extra={"epoch": epoch, "outcome": LoadOutcome.STALE.value},
            )
            return LoadResult(LoadOutcome.STALE, epoch, error)
        logger.warning(
            f"Snapshot load failed: {cause}",
            extra={
                "epoch": epoch, "outcome": LoadOutcome.FAILED.value,
                "error_code": error.code,
            },
        )
        return LoadResult(LoadOutcome.FAILED, epoch, error)

    def _classify(self, epoch: int, cause: BaseException) -> LeaveSysError:
        context = ErrorContext(
            epoch=epoch,
            endpoint=getattr(cause, "endpoint", None),
            status_code=getattr(cause, "status_code", None),
        )
        if self.state.has_committed:
            return RefreshError(REFRESH_MESSAGE, context)
        return ConnectivityError(CONNECTIVITY_MESSAGE, context)


def _first_failure(*results) -> BaseException | None:
    """First exception among gathered results; unexpected ones are re-raised."""
    for result in results:
        if isinstance(result, (RemoteStoreError, LeaveSysError)):
            return result
        if isinstance(result, BaseException):
            raise result
    return None
