"""API Layer — FastAPI routes and error handlers over the sync engine.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to the runtime's loader, coordinator and controller
"""
