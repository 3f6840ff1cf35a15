"""Core Layer — pure domain logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic (clocks are injected)

Design Decisions:
    - Functional core separated from imperative shell: merges and validation
      are testable without fake upstreams
"""
