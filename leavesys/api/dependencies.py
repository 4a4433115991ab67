"""Route Dependencies — resolve the per-process Runtime from app state."""

from fastapi import Request

from leavesys.core.errors import ConnectivityError
from leavesys.services.runtime import Runtime


def get_runtime(request: Request) -> Runtime:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise RuntimeError("Runtime not initialized")
    return runtime


def require_snapshot(request: Request) -> Runtime:
    """Runtime whose loader has committed at least once."""
    runtime = get_runtime(request)
    state = runtime.loader.state
    if not state.has_committed:
        if state.error is not None:
            raise state.error
        raise ConnectivityError("Data has not been loaded yet")
    return runtime
