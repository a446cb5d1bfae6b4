"""Infrastructure Layer — clocks, storage and cross-cutting concerns.

Invariants:
    - Infrastructure implements core Protocols; core never imports it
"""
