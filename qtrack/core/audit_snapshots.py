"""Audit Snapshots — immutable records derived from task transitions.

Invariants:
    - CompletionLog is taken only from a persisted COMPLETED task whose queue is persisted
    - CompletionLog copies title/progress/queue at the moment of completion; later edits do not flow back
    - TaskHardDeleteLog keeps the raw task_id (the task row is gone by the time it is read)
    - hard_deleted_at >= trashed_at
"""

from dataclasses import dataclass
from datetime import datetime

from qtrack.core.domain_types import TaskStatus
from qtrack.core.errors import IllegalStateError, ValidationError
from qtrack.core.field_rules import now_from, progress_percent, require, required_text
from qtrack.core.identity import Stored, require_persisted

TITLE_SNAPSHOT_MAX_LENGTH = 255


@dataclass(frozen=True)
class CompletionLog:
    task_id: int
    queue_id: int
    completed_at: datetime
    title_snapshot: str
    progress: int


@dataclass(frozen=True)
class TaskHardDeleteLog:
    task_id: int
    trashed_at: datetime
    hard_deleted_at: datetime


# ─── CompletionLog ───────────────────────────────────────────────

def completion_log_from_task(task: Stored, clock) -> CompletionLog:
    require(clock, "clock")
    require_persisted(task, "task")
    snapshot = task.entity
    if snapshot.status != TaskStatus.COMPLETED:
        raise IllegalStateError("task must be COMPLETED to create CompletionLog")
    if not snapshot.queue_id:
        raise IllegalStateError("task.queue is null or transient")
    completed_at = snapshot.completed_at if snapshot.completed_at is not None else now_from(clock)
    return create_completion_log(
        task, snapshot.queue_id, completed_at, snapshot.title, snapshot.progress,
    )


def create_completion_log(
    task, queue_id: int, completed_at: datetime, title_snapshot: str, progress: int,
) -> CompletionLog:
    completed_at = require(completed_at, "completedAt")
    title_snapshot = required_text(title_snapshot, "titleSnapshot", TITLE_SNAPSHOT_MAX_LENGTH)
    progress = progress_percent(progress, "progress must be 0 ~ 100")
    if queue_id is None:
        raise ValidationError("queueId is null", field="queueId")
    if queue_id <= 0:
        raise ValidationError("queueId must be positive", field="queueId")
    return CompletionLog(
        task_id=require_persisted(task, "task"),
        queue_id=queue_id,
        completed_at=completed_at,
        title_snapshot=title_snapshot,
        progress=progress,
    )


# ─── TaskHardDeleteLog ───────────────────────────────────────────

def hard_delete_log_from_trash_item(trash_item, hard_deleted_at: datetime) -> TaskHardDeleteLog:
    """Accepts a TrashItem value or its Stored wrapper."""
    item = require(trash_item, "trashItem")
    if isinstance(item, Stored):
        item = item.entity
    require(hard_deleted_at, "hardDeletedAt")
    return create_hard_delete_log(
        require(item.task_id, "taskId"),
        require(item.trashed_at, "trashedAt"),
        hard_deleted_at,
    )


def create_hard_delete_log(
    task_id: int, trashed_at: datetime, hard_deleted_at: datetime,
) -> TaskHardDeleteLog:
    task_id = require(task_id, "taskId")
    trashed_at = require(trashed_at, "trashedAt")
    hard_deleted_at = require(hard_deleted_at, "hardDeletedAt")
    if hard_deleted_at < trashed_at:
        raise ValidationError("hardDeletedAt must be >= trashedAt", field="hardDeletedAt")
    return TaskHardDeleteLog(
        task_id=task_id, trashed_at=trashed_at, hard_deleted_at=hard_deleted_at,
    )
