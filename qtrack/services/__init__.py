"""Services Layer — read-decide-write workflows around the pure core.

Invariants:
    - Services load through EntityStore, apply core functions, and write back
    - Services are the only layer that logs domain transitions
"""
