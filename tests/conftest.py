"""Root conftest — shared test configuration."""

import os

# Tests never reach a real RemoteStore; every client gets a MockTransport
os.environ.setdefault("LEAVESYS_REMOTE_BASE_URL", "http://remote.test")
os.environ.setdefault("LEAVESYS_LOG_FORMAT", "text")
