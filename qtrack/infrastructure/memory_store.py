"""In-Memory Entity Store — reference EntityStore with optimistic concurrency.

Invariants:
    - Identifiers come from one global sequence shared by every entity kind
    - add() is the only way a draft becomes Stored; version starts at 0
    - replace() and remove() compare Stored.version with the stored one and raise
      ConcurrencyError on mismatch; a successful replace bumps the version by 1
    - remove_all() checks every version before deleting anything
    - A lock makes each compare-and-swap atomic

Design Decisions:
    - Keyed by (entity type, id): get() needs the kind so a Task id cannot load a Member
"""

import itertools
import logging
import threading
from typing import TypeVar

from qtrack.core.errors import ConcurrencyError, ResourceNotFoundError, ValidationError
from qtrack.core.identity import Stored

logger = logging.getLogger(__name__)

E = TypeVar("E")


class InMemoryStore:
    """Process-local EntityStore implementation."""

    def __init__(self, start_id: int = 1):
        self._rows: dict[tuple[type, int], Stored] = {}
        self._ids = itertools.count(start_id)
        self._lock = threading.Lock()

    def add(self, draft: E) -> Stored[E]:
        if draft is None or isinstance(draft, Stored):
            raise ValidationError("only drafts can be added", field="draft")
        with self._lock:
            stored = Stored(id=next(self._ids), entity=draft, version=0)
            self._rows[(type(draft), stored.id)] = stored
        logger.debug(
            "Stored new entity",
            extra={"entity": type(draft).__name__, "entity_id": stored.id},
        )
        return stored

    def get(self, kind: type[E], entity_id: int) -> Stored[E]:
        stored = self._rows.get((kind, entity_id))
        if stored is None:
            raise ResourceNotFoundError(kind.__name__, entity_id)
        return stored

    def find(self, kind: type[E], entity_id: int) -> Stored[E] | None:
        return self._rows.get((kind, entity_id))

    def all(self, kind: type[E]) -> list[Stored[E]]:
        return [s for (k, _), s in self._rows.items() if k is kind]

    def replace(self, current: Stored[E], entity: E) -> Stored[E]:
        key = (type(current.entity), current.id)
        with self._lock:
            stored = self._check_version(key, current)
            updated = Stored(id=stored.id, entity=entity, version=stored.version + 1)
            self._rows[key] = updated
        return updated

    def remove(self, current: Stored[E]) -> None:
        key = (type(current.entity), current.id)
        with self._lock:
            self._check_version(key, current)
            del self._rows[key]

    def remove_all(self, currents: list[Stored]) -> None:
        """Remove several rows at once; every version is checked before any row goes."""
        keys = [(type(c.entity), c.id) for c in currents]
        with self._lock:
            for key, current in zip(keys, currents):
                self._check_version(key, current)
            for key in keys:
                del self._rows[key]

    def _check_version(self, key: tuple[type, int], current: Stored) -> Stored:
        stored = self._rows.get(key)
        if stored is None:
            raise ResourceNotFoundError(key[0].__name__, current.id)
        if stored.version != current.version:
            logger.warning(
                "Version conflict",
                extra={
                    "entity": key[0].__name__, "entity_id": current.id,
                    "version": current.version,
                },
            )
            raise ConcurrencyError(key[0].__name__, current.id, current.version, stored.version)
        return stored
