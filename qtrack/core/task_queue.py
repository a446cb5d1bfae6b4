"""Task Queue — an ordered, capacity-limited list of tasks inside a database.

Invariants:
    - database_id is fixed at creation
    - name: non-blank, <= 100 chars, verbatim; description as for Database
    - max_tasks > 0, default 50
    - Reordering is guarded by the Stored.version counter, not by anything here
"""

from dataclasses import dataclass

from qtrack.core.errors import IllegalStateError, ValidationError
from qtrack.core.field_rules import optional_text, required_text
from qtrack.core.identity import require_persisted

DEFAULT_MAX_TASKS = 50
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


@dataclass(frozen=True)
class TaskQueue:
    database_id: int
    name: str
    description: str | None = None
    max_tasks: int = DEFAULT_MAX_TASKS


def create_queue(name: str, description: str | None, database) -> TaskQueue:
    return _build(name, description, DEFAULT_MAX_TASKS, database)


def create_queue_with_limit(
    name: str, description: str | None, max_tasks: int, database,
) -> TaskQueue:
    if max_tasks is None or max_tasks <= 0:
        raise ValidationError("maxTasks must be > 0", field="maxTasks")
    return _build(name, description, max_tasks, database)


def ensure_capacity(queue: TaskQueue, current_count: int) -> None:
    """Reject adding one more task to a queue that is already full."""
    if current_count < 0:
        raise ValidationError("current task count must be >= 0", field="current_count")
    if current_count >= queue.max_tasks:
        raise IllegalStateError("queue is full")


def _build(name, description, max_tasks, database) -> TaskQueue:
    return TaskQueue(
        name=required_text(name, "name", NAME_MAX_LENGTH),
        description=optional_text(description, "description", DESCRIPTION_MAX_LENGTH),
        max_tasks=max_tasks,
        database_id=require_persisted(database, "database"),
    )
