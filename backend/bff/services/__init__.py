"""Services Layer — aggregation handlers: call upstream clients, apply fallback, merge.

Invariants:
    - Services take clients and cache as arguments (no globals), return typed views
    - Secondary (ledger) failures are absorbed here; primary (DB) failures propagate

Design Decisions:
    - Imperative shell around the pure merges in core/ (ADR: functional core)
"""
