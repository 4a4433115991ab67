"""Infrastructure Layer — RemoteStore client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core/ domain logic beyond types and errors
    - Every RemoteStore call maps transport failures to RemoteStore errors

Design Decisions:
    - Thin wrapper over httpx.AsyncClient: services never see raw httpx exceptions
"""
