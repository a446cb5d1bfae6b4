"""Shared test constants and doubles — importable from any test module.

Invariants:
    - T0 is timezone-aware UTC; every FixedClock in the suite starts here
    - RacingStore behaves exactly like InMemoryStore until race_on() arms it
"""

from datetime import datetime, timezone

from qtrack.infrastructure.memory_store import InMemoryStore

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


class RacingStore(InMemoryStore):
    """InMemoryStore where another writer touches one row just before our next write to it."""

    def __init__(self):
        super().__init__()
        self._target = None

    def race_on(self, kind: type, entity_id: int) -> None:
        self._target = (kind, entity_id)

    def replace(self, current, entity):
        self._interfere(current)
        return super().replace(current, entity)

    def remove_all(self, currents):
        for current in currents:
            self._interfere(current)
        super().remove_all(currents)

    def _interfere(self, current) -> None:
        if self._target != (type(current.entity), current.id):
            return
        self._target = None
        latest = self.get(type(current.entity), current.id)
        InMemoryStore.replace(self, latest, latest.entity)
