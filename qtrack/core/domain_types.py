"""Domain Types — identifiers and enums shared across the task-tracking core.

Invariants:
    - Identifiers are surrogate ints assigned only by storage: never minted in core
    - All lifecycle and channel states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: stored and serialized by value without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

MemberId = NewType("MemberId", int)
DatabaseId = NewType("DatabaseId", int)
QueueId = NewType("QueueId", int)
TaskId = NewType("TaskId", int)


# ─── Member ──────────────────────────────────────────────────────

class MemberStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DISABLED = "DISABLED"
    DELETED = "DELETED"


# ─── Task ────────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle: ACTIVE <-> COMPLETED, ACTIVE -> TRASHED."""
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    TRASHED = "TRASHED"


class DueStatus(str, Enum):
    """Result of classifying a due time against a point in time."""
    NORMAL = "NORMAL"
    IMMINENT = "IMMINENT"
    OVERDUE = "OVERDUE"


class TaskImportance(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# ─── Channels ────────────────────────────────────────────────────

class VerificationChannelType(str, Enum):
    MAIL = "MAIL"
    KAKAO = "KAKAO"


class NotificationType(str, Enum):
    BEFORE_DAY = "BEFORE_DAY"   # D-1
    IMMINENT = "IMMINENT"
    DUE = "DUE"
    OVERDUE = "OVERDUE"
    REPORT = "REPORT"           # daily closing report


class NotificationChannelType(str, Enum):
    EMAIL = "EMAIL"
    KAKAO = "KAKAO"
    SLACK = "SLACK"
    WEBPUSH = "WEBPUSH"


class ReminderChannelType(str, Enum):
    """Delivery channels a member can register an address/token for."""
    EMAIL = "EMAIL"
    KAKAO = "KAKAO"
    SLACK = "SLACK"
    WEBPUSH = "WEBPUSH"
