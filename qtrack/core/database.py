"""Database — a member-owned container of task queues.

Invariants:
    - member_id (owner) is fixed at creation
    - name: non-blank, <= 100 chars, stored verbatim (whitespace kept)
    - description: optional, blank -> None, <= 500 chars, stored verbatim
    - deleted_at is None while active; delete_by_owner keeps the first deletion time
    - rename and delete_by_owner require the acting member to be the owner
"""

from dataclasses import dataclass, replace
from datetime import datetime

from qtrack.core.field_rules import now_from, optional_text, required_text
from qtrack.core.identity import ensure_owner, require_persisted

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


@dataclass(frozen=True)
class Database:
    member_id: int
    name: str
    description: str | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


def create_database(name: str, description: str | None, member) -> Database:
    return Database(
        name=required_text(name, "name", NAME_MAX_LENGTH),
        description=optional_text(description, "description", DESCRIPTION_MAX_LENGTH),
        member_id=require_persisted(member, "member"),
    )


def rename(db: Database, new_name: str, new_description: str | None, actor) -> Database:
    ensure_owner(db.member_id, actor, "database")
    return replace(
        db,
        name=required_text(new_name, "name", NAME_MAX_LENGTH),
        description=optional_text(new_description, "description", DESCRIPTION_MAX_LENGTH),
    )


def delete_by_owner(db: Database, clock, actor) -> Database:
    ensure_owner(db.member_id, actor, "database")
    now = now_from(clock)
    if db.deleted_at is not None:
        return db
    return replace(db, deleted_at=now)
