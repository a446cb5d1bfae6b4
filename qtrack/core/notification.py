"""Notification Scheduling — when a reminder may go out and how it is rescheduled.

Invariants:
    - can_send(now) is True iff not yet sent and now >= scheduled_at (inclusive)
    - mark_sent is unconditional; can_send is advice for the caller, not a guard
    - reschedule only while unsent; a time in the past is allowed
    - member is required and persisted; task is optional but never transient
"""

from dataclasses import dataclass, replace
from datetime import datetime

from qtrack.core.domain_types import NotificationChannelType, NotificationType
from qtrack.core.errors import IllegalStateError
from qtrack.core.field_rules import now_from, require
from qtrack.core.identity import optional_persisted, require_persisted


@dataclass(frozen=True)
class Notification:
    member_id: int
    type: NotificationType
    channel: NotificationChannelType
    scheduled_at: datetime
    task_id: int | None = None
    sent_at: datetime | None = None

    @property
    def is_sent(self) -> bool:
        return self.sent_at is not None


def schedule(
    type: NotificationType,
    channel: NotificationChannelType,
    scheduled_at: datetime,
    member,
) -> Notification:
    return schedule_for_task(type, channel, scheduled_at, member, None)


def schedule_for_task(
    type: NotificationType,
    channel: NotificationChannelType,
    scheduled_at: datetime,
    member,
    task,
) -> Notification:
    return Notification(
        type=require(type, "type"),
        channel=require(channel, "channel"),
        scheduled_at=require(scheduled_at, "scheduledAt"),
        member_id=require_persisted(member, "member"),
        task_id=optional_persisted(task, "task"),
    )


def can_send(notification: Notification, now: datetime) -> bool:
    now = require(now, "now")
    return notification.sent_at is None and now >= notification.scheduled_at


def mark_sent(notification: Notification, clock) -> Notification:
    return replace(notification, sent_at=now_from(clock))


def reschedule(notification: Notification, new_time: datetime) -> Notification:
    if notification.is_sent:
        raise IllegalStateError("already sent")
    return replace(notification, scheduled_at=require(new_time, "scheduledAt"))
