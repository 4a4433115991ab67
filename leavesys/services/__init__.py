"""Services Layer — snapshot loading, mutation coordination, interaction boundary.

Invariants:
    - SnapshotLoader is the only writer of committed state
    - Services convert RemoteStore failures into LeaveSysError kinds

Design Decisions:
    - One class per role, wired together in runtime.py
"""
