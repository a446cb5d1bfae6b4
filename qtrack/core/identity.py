"""Persisted Identity — explicit draft vs. stored distinction for every entity.

Invariants:
    - Factories in core return drafts (bare entity values without an id)
    - Only the storage layer builds Stored[E]; id is a positive int, version starts at 0
    - Relationship-building functions accept Stored references only: a draft or None
      is rejected with "<name> is null or transient"
    - ensure_owner separates "who are you" (validation) from "not yours" (permission)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from qtrack.core.errors import PermissionDeniedError, ValidationError

E = TypeVar("E")


@dataclass(frozen=True)
class Stored(Generic[E]):
    """An entity value that storage has assigned an identifier to."""
    id: int
    entity: E
    version: int = 0

    def __post_init__(self):
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise ValidationError("id must be a positive integer", field="id")
        if self.version < 0:
            raise ValidationError("version must be >= 0", field="version")


def require_persisted(ref: object, name: str) -> int:
    """Return the identifier of a stored reference or reject it as transient."""
    if not isinstance(ref, Stored):
        raise ValidationError(f"{name} is null or transient", field=name)
    return ref.id


def optional_persisted(ref: object, name: str) -> int | None:
    """Like require_persisted, but an absent reference is allowed."""
    if ref is None:
        return None
    if not isinstance(ref, Stored):
        raise ValidationError(f"{name} is transient", field=name)
    return ref.id


def ensure_owner(owner_id: int, actor: object, resource: str) -> None:
    actor_id = require_persisted(actor, "actor")
    if actor_id != owner_id:
        raise PermissionDeniedError(f"actor is not this {resource} owner")
