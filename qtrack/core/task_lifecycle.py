"""Task Lifecycle & Due Status — state transitions and deadline classification.

Invariants:
    - ACTIVE --mark_completed--> COMPLETED --reopen--> ACTIVE
    - ACTIVE --soft_delete--> TRASHED; leaving TRASHED belongs to the restore workflow, not here
    - reopen is unconditional: reopening an ACTIVE task returns an equal task
    - queue_id is fixed; move_task reorders inside the same queue only
    - title is required and non-blank, content is optional (blank -> None); both verbatim
    - progress stays within 0..100
    - check_due_status is PURE: due == now is NORMAL, never OVERDUE or IMMINENT

Design Decisions:
    - Functions over methods: every transition returns a new Task, the input is never touched
    - can_hard_delete folds the manual path (no retention) and the retention path into one call
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from qtrack.core.domain_types import DueStatus, TaskImportance, TaskStatus
from qtrack.core.errors import IllegalStateError, ValidationError
from qtrack.core.field_rules import (
    now_from, optional_text, progress_percent, require, required_text,
)
from qtrack.core.identity import require_persisted


@dataclass(frozen=True)
class Task:
    queue_id: int
    title: str
    content: str | None = None
    importance: TaskImportance | None = None
    due_at: datetime | None = None
    completed_at: datetime | None = None
    trashed_at: datetime | None = None
    progress: int = 0
    status: TaskStatus = TaskStatus.ACTIVE
    priority_index: int | None = None


def create_task(title: str, queue) -> Task:
    return Task(
        title=required_text(title, "title"),
        queue_id=require_persisted(queue, "queue"),
    )


# ─── Field edits ─────────────────────────────────────────────────

def edit_title(task: Task, new_title: str) -> Task:
    return replace(task, title=required_text(new_title, "title"))


def edit_content(task: Task, new_content: str | None) -> Task:
    return replace(task, content=optional_text(new_content, "content"))


def set_due(task: Task, due_at: datetime | None) -> Task:
    """Set or clear the due time. Due status is derived, never stored."""
    return replace(task, due_at=due_at)


def change_importance(task: Task, level: TaskImportance | None) -> Task:
    return replace(task, importance=level)


def update_progress(task: Task, percent: int) -> Task:
    return replace(task, progress=progress_percent(percent, "progress must be 0..100"))


# ─── Transitions ─────────────────────────────────────────────────

def mark_completed(task: Task, clock) -> Task:
    return replace(task, completed_at=now_from(clock), status=TaskStatus.COMPLETED)


def reopen(task: Task) -> Task:
    return replace(task, completed_at=None, status=TaskStatus.ACTIVE)


def soft_delete(task: Task, clock) -> Task:
    return replace(task, trashed_at=now_from(clock), status=TaskStatus.TRASHED)


def move_task(task: Task, target_queue, new_priority_index: int | None) -> Task:
    target_id = require_persisted(target_queue, "queue")
    if target_id != task.queue_id:
        raise IllegalStateError("policy: cross-queue move limited")
    return replace(task, priority_index=new_priority_index)


def defer_to(task: Task, when: datetime) -> Task:
    if when is None:
        raise ValidationError("dateTime is null", field="dateTime")
    return replace(task, due_at=when)


def defer_days(task: Task, days: int, clock) -> Task:
    """Push the due time forward; a task without one is deferred from now."""
    if days is None or days <= 0:
        raise ValidationError("days must be > 0", field="days")
    base = task.due_at if task.due_at is not None else now_from(clock)
    return replace(task, due_at=base + timedelta(days=days))


# ─── Queries ─────────────────────────────────────────────────────

def can_hard_delete(task: Task, clock, retention: timedelta | None = None) -> bool:
    """Whether a trashed task may be purged.

    Without retention this is the manual path: any trashed task qualifies.
    With retention the task must have sat in the trash for at least that long;
    a zero retention qualifies immediately after trashing.
    """
    now = now_from(clock)
    if task.status != TaskStatus.TRASHED:
        return False
    trashed_at = require(task.trashed_at, "trashedAt")
    if retention is None:
        return now >= trashed_at
    if retention < timedelta(0):
        raise ValidationError("retention must be >= 0", field="retention")
    return now >= trashed_at + retention


def check_due_status(task: Task, now: datetime, imminent_hours: int) -> DueStatus:
    if task.due_at is None:
        return DueStatus.NORMAL
    if now > task.due_at:
        return DueStatus.OVERDUE
    edge = now + timedelta(hours=imminent_hours)
    if now < task.due_at <= edge:
        return DueStatus.IMMINENT
    return DueStatus.NORMAL
