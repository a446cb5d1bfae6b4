"""Task Workflows — complete, trash and purge tasks through an EntityStore.

Invariants:
    - Each workflow is one read-decide-write cycle: load, apply core functions, write back
    - Every new value is built before the first write, so a validation error writes nothing
    - Writes go through store.replace(), so a concurrent change surfaces as ConcurrencyError
    - retry_on_conflict re-runs the whole cycle, never a partial one
    - One CompletionLog per task: re-completing a reopened task refreshes the existing log
    - One TrashItem per task: an already trashed task is rejected
    - A purge removes the task and its trash item together, then writes the TaskHardDeleteLog

Design Decisions:
    - Retention defaults come from settings; core functions receive them as arguments
"""

import logging
from datetime import timedelta
from typing import Callable, TypeVar

from qtrack.config import get_settings
from qtrack.core import audit_snapshots, task_lifecycle, trash
from qtrack.core.audit_snapshots import CompletionLog, TaskHardDeleteLog
from qtrack.core.domain_types import TaskStatus
from qtrack.core.errors import ConcurrencyError, IllegalStateError, ValidationError
from qtrack.core.identity import Stored
from qtrack.core.repository_protocols import Clock, EntityStore
from qtrack.core.task_lifecycle import Task
from qtrack.core.trash import TrashItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_on_conflict(operation: Callable[[], T], attempts: int | None = None) -> T:
    """Run operation, re-running it from scratch after a version conflict."""
    attempts = attempts if attempts is not None else get_settings().conflict_retry_attempts
    if attempts < 1:
        raise ValidationError("attempts must be > 0", field="attempts")
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except ConcurrencyError as exc:
            if attempt == attempts:
                logger.error(
                    f"Giving up after {attempts} conflicting attempts",
                    extra={"error_code": exc.code, "attempt": attempt},
                )
                raise
            logger.warning(
                f"Version conflict, retrying: {exc.message}",
                extra={"error_code": exc.code, "attempt": attempt},
            )
    raise AssertionError("unreachable")


def complete_task(
    store: EntityStore, task_id: int, clock: Clock,
) -> tuple[Stored[Task], Stored[CompletionLog]]:
    """Mark a task completed and snapshot it into its CompletionLog."""
    current = store.get(Task, task_id)
    if current.entity.status == TaskStatus.COMPLETED:
        raise IllegalStateError("task already completed")
    completed = task_lifecycle.mark_completed(current.entity, clock)
    snapshot = audit_snapshots.completion_log_from_task(
        Stored(id=current.id, entity=completed, version=current.version), clock,
    )
    existing = _completion_log_of(store, current.id)

    stored = store.replace(current, completed)
    if existing is None:
        log = store.add(snapshot)
    else:
        log = store.replace(existing, snapshot)
    logger.info(
        "Task completed",
        extra={"entity": "Task", "entity_id": stored.id, "version": stored.version},
    )
    return stored, log


def trash_task(
    store: EntityStore, task_id: int, clock: Clock, retention: timedelta | None = None,
) -> tuple[Stored[Task], Stored[TrashItem]]:
    """Move a task to the trash and open its retention window."""
    retention = retention if retention is not None else get_settings().trash_retention
    current = store.get(Task, task_id)
    if current.entity.status == TaskStatus.TRASHED:
        raise IllegalStateError("task already trashed")
    trashed = task_lifecycle.soft_delete(current.entity, clock)
    draft_item = trash.create_trash_item(
        trashed.trashed_at, retention,
        Stored(id=current.id, entity=trashed, version=current.version),
    )
    stored = store.replace(current, trashed)
    item = store.add(draft_item)
    logger.info(
        "Task trashed",
        extra={"entity": "Task", "entity_id": stored.id, "version": stored.version},
    )
    return stored, item


def hard_delete(
    store: EntityStore, trash_item_id: int, clock: Clock, *, manual: bool = False,
) -> Stored[TaskHardDeleteLog] | None:
    """Permanently delete a trashed task if it is eligible.

    manual=True is the user-initiated purge: any trashed task qualifies.
    Otherwise the trash item's retention window must have elapsed.
    Returns the hard-delete log, or None when the task is not yet eligible.
    """
    item = store.get(TrashItem, trash_item_id)
    task = store.get(Task, item.entity.task_id)
    now = clock.now()
    if manual:
        eligible = task_lifecycle.can_hard_delete(task.entity, clock)
    else:
        eligible = trash.can_hard_delete(item.entity, now)
    if not eligible:
        return None

    log = audit_snapshots.hard_delete_log_from_trash_item(item, now)
    store.remove_all([item, task])
    stored_log = store.add(log)
    logger.info(
        "Task hard-deleted",
        extra={"entity": "Task", "entity_id": task.id},
    )
    return stored_log


def purge_expired(
    store: EntityStore, trash_item_ids: list[int], clock: Clock,
) -> list[Stored[TaskHardDeleteLog]]:
    """Hard-delete every listed trash item whose retention has elapsed."""
    logs = []
    for item_id in trash_item_ids:
        log = hard_delete(store, item_id, clock)
        if log is not None:
            logs.append(log)
    logger.info(
        f"Purged {len(logs)} of {len(trash_item_ids)} trash items",
        extra={"count": len(logs)},
    )
    return logs


def _completion_log_of(store: EntityStore, task_id: int) -> Stored[CompletionLog] | None:
    return next((log for log in store.all(CompletionLog) if log.entity.task_id == task_id), None)
