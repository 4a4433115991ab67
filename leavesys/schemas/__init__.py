"""Pydantic Schemas — wire contracts at the RemoteStore and HTTP API boundaries.

Invariants:
    - Schemas validate at system boundaries (RemoteStore responses, API input)
    - Domain types from core/ used for enum fields and as decode targets

Design Decisions:
    - Separate from core models: schemas are wire contracts, core models are values
"""
