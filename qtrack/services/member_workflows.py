"""Member Workflows — registration, queue creation and capacity-checked task intake.

Invariants:
    - A registered member always gets a ReminderSetting seeded from settings defaults
    - Only the database owner can add a queue to it
    - add_task counts the queue's non-trashed tasks before creating a new one

Design Decisions:
    - Settings defaults are read here and handed to core as plain arguments
"""

import logging

from qtrack.config import get_settings
from qtrack.core import reminder_setting, task_lifecycle, task_queue
from qtrack.core.database import Database
from qtrack.core.domain_types import TaskStatus
from qtrack.core.identity import Stored, ensure_owner
from qtrack.core.member import create_member
from qtrack.core.reminder_setting import ReminderSetting
from qtrack.core.repository_protocols import EntityStore
from qtrack.core.task_lifecycle import Task
from qtrack.core.task_queue import TaskQueue

logger = logging.getLogger(__name__)


def register_member(
    store: EntityStore, login_id: str, password_hash: str, nickname: str, time_zone: str,
) -> tuple[Stored, Stored[ReminderSetting]]:
    settings = get_settings()
    draft = create_member(login_id, password_hash, nickname, time_zone)
    member = store.add(draft)
    setting = store.add(reminder_setting.create_default(
        member,
        imminent_hours=settings.default_imminent_hours,
        overdue_interval_hours=settings.default_overdue_interval_hours,
    ))
    logger.info("Member registered", extra={"entity": "Member", "entity_id": member.id})
    return member, setting


def add_queue(
    store: EntityStore, database_id: int, name: str, description: str | None, actor,
    max_tasks: int | None = None,
) -> Stored[TaskQueue]:
    database = store.get(Database, database_id)
    ensure_owner(database.entity.member_id, actor, "database")
    limit = max_tasks if max_tasks is not None else get_settings().default_queue_max_tasks
    queue = store.add(task_queue.create_queue_with_limit(name, description, limit, database))
    logger.info("Queue created", extra={"entity": "TaskQueue", "entity_id": queue.id})
    return queue


def add_task(store: EntityStore, queue_id: int, title: str) -> Stored[Task]:
    queue = store.get(TaskQueue, queue_id)
    current = sum(
        1 for t in store.all(Task)
        if t.entity.queue_id == queue.id and t.entity.status != TaskStatus.TRASHED
    )
    task_queue.ensure_capacity(queue.entity, current)
    task = store.add(task_lifecycle.create_task(title, queue))
    logger.info(
        "Task added",
        extra={"entity": "Task", "entity_id": task.id, "count": current + 1},
    )
    return task
