"""Infrastructure Layer — upstream service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All upstream calls wrapped with timeout/error mapping (no retries)

Design Decisions:
    - One client class per upstream over ad-hoc httpx calls in routes
"""
