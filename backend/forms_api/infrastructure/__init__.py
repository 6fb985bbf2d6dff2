"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All driver errors mapped to StoreFailureError before leaving this layer

Design Decisions:
    - Session manager and logging setup live here, wired once by the app lifespan
"""
