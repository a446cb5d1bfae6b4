"""Reminder Setting — per-member thresholds used by due-status and overdue reminders.

Invariants:
    - imminent_hours in [0, 168] (at most one week ahead)
    - overdue_interval_hours >= 0 (0 = remind once, n = every n hours)
    - Every mutator validates before building the new value
"""

from dataclasses import dataclass, replace

from qtrack.core.errors import ValidationError
from qtrack.core.identity import require_persisted

MAX_IMMINENT_HOURS = 168
DEFAULT_IMMINENT_HOURS = 3
DEFAULT_OVERDUE_INTERVAL_HOURS = 24


@dataclass(frozen=True)
class ReminderSetting:
    member_id: int
    imminent_hours: int = DEFAULT_IMMINENT_HOURS
    overdue_interval_hours: int = DEFAULT_OVERDUE_INTERVAL_HOURS
    notify_day_before: bool = True
    notify_on_due_day: bool = True


def create(
    imminent_hours: int,
    notify_day_before: bool,
    notify_on_due_day: bool,
    overdue_interval_hours: int,
    member,
) -> ReminderSetting:
    member_id = require_persisted(member, "member")
    _valid_imminent(imminent_hours)
    _valid_overdue_interval(overdue_interval_hours)
    return ReminderSetting(
        member_id=member_id,
        imminent_hours=imminent_hours,
        overdue_interval_hours=overdue_interval_hours,
        notify_day_before=notify_day_before,
        notify_on_due_day=notify_on_due_day,
    )


def create_default(
    member,
    imminent_hours: int = DEFAULT_IMMINENT_HOURS,
    overdue_interval_hours: int = DEFAULT_OVERDUE_INTERVAL_HOURS,
) -> ReminderSetting:
    return create(imminent_hours, True, True, overdue_interval_hours, member)


def update_all(
    setting: ReminderSetting,
    imminent_hours: int,
    overdue_interval_hours: int,
    notify_day_before: bool,
    notify_on_due_day: bool,
) -> ReminderSetting:
    _valid_imminent(imminent_hours)
    _valid_overdue_interval(overdue_interval_hours)
    return replace(
        setting,
        imminent_hours=imminent_hours,
        overdue_interval_hours=overdue_interval_hours,
        notify_day_before=notify_day_before,
        notify_on_due_day=notify_on_due_day,
    )


def change_imminent_hours(setting: ReminderSetting, value: int) -> ReminderSetting:
    _valid_imminent(value)
    return replace(setting, imminent_hours=value)


def change_overdue_interval_hours(setting: ReminderSetting, value: int) -> ReminderSetting:
    _valid_overdue_interval(value)
    return replace(setting, overdue_interval_hours=value)


def enable_day_before(setting: ReminderSetting, enabled: bool) -> ReminderSetting:
    return replace(setting, notify_day_before=enabled)


def enable_on_due_day(setting: ReminderSetting, enabled: bool) -> ReminderSetting:
    return replace(setting, notify_on_due_day=enabled)


def _valid_imminent(hours: int) -> None:
    if hours is None or hours < 0 or hours > MAX_IMMINENT_HOURS:
        raise ValidationError(
            f"imminentHours must be between 0 and {MAX_IMMINENT_HOURS}", field="imminentHours",
        )


def _valid_overdue_interval(hours: int) -> None:
    if hours is None or hours < 0:
        raise ValidationError("overdueIntervalHours must be >= 0", field="overdueIntervalHours")
