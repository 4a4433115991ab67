"""Core Layer — pure domain logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All functions are pure and deterministic (derived views take `now` explicitly)

Design Decisions:
    - Functional core separated from imperative shell: loader and coordinator
      own all network IO, core only computes
"""
