"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Time is read only through Clock; no core function calls datetime.now()
    - Storage assigns identifiers and versions; core never mints either
    - replace() is a compare-and-swap on Stored.version and raises ConcurrencyError on mismatch

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous store contract: callers run read-decide-write in one step and retry the whole cycle
"""

from datetime import datetime
from typing import Protocol, TypeVar

from qtrack.core.identity import Stored

E = TypeVar("E")


class Clock(Protocol):
    """Source of the current instant, injected into every time-based operation."""
    def now(self) -> datetime: ...


class EntityStore(Protocol):
    """Contract for entity persistence, implemented by shell."""
    def add(self, draft: E) -> Stored[E]: ...
    def get(self, kind: type[E], entity_id: int) -> Stored[E]: ...
    def replace(self, current: Stored[E], entity: E) -> Stored[E]: ...
    def remove(self, current: Stored[E]) -> None: ...
    def remove_all(self, currents: list[Stored]) -> None: ...
    def all(self, kind: type[E]) -> list[Stored[E]]: ...
