"""Core Layer — pure domain logic, no IO, no async, no storage.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - All functions are deterministic given their inputs and the injected clock
    - Entities are frozen; every mutator returns a new value or raises

Design Decisions:
    - Functional core separated from imperative shell
"""
