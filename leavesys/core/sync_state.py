"""Sync State — committed snapshot plus the refresh-epoch fence.

Invariants:
    - Epochs are issued monotonically; begin_load() never reuses one
    - With fencing on, only the highest issued epoch may commit or record a failure;
      any other completion is stale and changes nothing
    - commit() replaces the snapshot wholesale and clears the error
    - fail() never touches the snapshot

Design Decisions:
    - Dataclass with explicit transition methods: pure, testable without IO
    - Fencing is switchable: off reproduces last-response-wins ordering
"""

from dataclasses import dataclass, field

from leavesys.core.errors import LeaveSysError
from leavesys.core.models import Snapshot


@dataclass
class SyncState:
    """Single committed resource, one writer role (the loader)."""

    snapshot: Snapshot = field(default_factory=Snapshot.empty)
    fencing: bool = True

    issued_epoch: int = 0
    committed_epoch: int = 0
    has_committed: bool = False

    error: LeaveSysError | None = None

    in_flight: set[int] = field(default_factory=set)

    @property
    def loading(self) -> bool:
        return bool(self.in_flight)

    def begin_load(self) -> int:
        """Issue the next epoch and mark it in flight."""
        self.issued_epoch += 1
        self.in_flight.add(self.issued_epoch)
        return self.issued_epoch

    def is_current(self, epoch: int) -> bool:
        if not self.fencing:
            return True
        return epoch == self.issued_epoch

    def commit(self, epoch: int, snapshot: Snapshot) -> bool:
        """Replace the snapshot if `epoch` is current. Returns False when stale."""
        self.in_flight.discard(epoch)
        if not self.is_current(epoch):
            return False
        self.snapshot = snapshot
        self.committed_epoch = epoch
        self.has_committed = True
        self.error = None
        return True

    def fail(self, epoch: int, error: LeaveSysError) -> bool:
        """Record a failed load if `epoch` is current. Snapshot is untouched."""
        self.in_flight.discard(epoch)
        if not self.is_current(epoch):
            return False
        self.error = error
        return True
