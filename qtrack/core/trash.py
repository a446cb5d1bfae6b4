"""Trash Retention — how long a trashed task is kept before it may be purged.

Invariants:
    - A TrashItem exists only for a persisted task already in TRASHED status
    - retention_until >= trashed_at, always
    - can_hard_delete is inclusive: now == retention_until is eligible
    - extend_retention_until only ever moves retention_until later (ratchet);
      an earlier value is a silent no-op, a value before trashed_at is rejected
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from qtrack.core.domain_types import TaskStatus
from qtrack.core.errors import IllegalStateError, ValidationError
from qtrack.core.field_rules import positive_duration, require
from qtrack.core.identity import require_persisted


@dataclass(frozen=True)
class TrashItem:
    task_id: int
    trashed_at: datetime
    retention_until: datetime


def create_trash_item(trashed_at: datetime, retention: timedelta, task) -> TrashItem:
    """Trash item kept for a fixed retention period after trashed_at."""
    retention = positive_duration(retention, "duration must be > 0")
    trashed_at = require(trashed_at, "trashedAt")
    return create_trash_item_until(trashed_at, trashed_at + retention, task)


def create_trash_item_until(
    trashed_at: datetime, retention_until: datetime, task,
) -> TrashItem:
    """Trash item kept until an explicit instant."""
    trashed_at = require(trashed_at, "trashedAt")
    retention_until = require(retention_until, "retentionUntil")
    task_id = require_persisted(task, "task")
    if retention_until < trashed_at:
        raise ValidationError("retentionUntil must be >= trashedAt", field="retentionUntil")
    if task.entity.status != TaskStatus.TRASHED:
        raise IllegalStateError("task status must be TRASHED to create TrashItem")
    return TrashItem(task_id=task_id, trashed_at=trashed_at, retention_until=retention_until)


def can_hard_delete(item: TrashItem, now: datetime) -> bool:
    return require(now, "now") >= item.retention_until


def extend_retention_until(item: TrashItem, new_retention_until: datetime) -> TrashItem:
    new_retention_until = require(new_retention_until, "newRetentionUntil")
    if new_retention_until < item.trashed_at:
        raise ValidationError(
            "newRetentionUntil must be >= trashedAt", field="newRetentionUntil",
        )
    if new_retention_until > item.retention_until:
        return replace(item, retention_until=new_retention_until)
    return item
