"""Reminder Channel Accounts — per-channel address/token validation and send readiness.

Invariants:
    - One account per (member, channel); channel and member fixed after creation
    - Every address passes its channel's normalizer before it is stored
    - update_address_or_token re-validates first, then resets verified_at to None;
      an invalid value leaves the account exactly as it was
    - can_send is True iff enabled and verified

Design Decisions:
    - One normalizer per channel, registered in _NORMALIZERS: adding a channel touches
      the enum and one function, nothing else
"""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable

from qtrack.core.domain_types import ReminderChannelType
from qtrack.core.errors import ValidationError
from qtrack.core.field_rules import now_from, require, trim_edges
from qtrack.core.identity import require_persisted

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
KAKAO_MIN_LENGTH = 10
SLACK_WEBHOOK_PREFIX = "https://hooks.slack.com/services/"
WEBPUSH_SCHEMES = ("http://", "https://")


# ─── Channel normalizers ─────────────────────────────────────────

def _normalize_email(value: str) -> str:
    email = value.lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("invalid email", field="addressOrToken")
    return email


def _normalize_kakao(value: str) -> str:
    if len(value) < KAKAO_MIN_LENGTH:
        raise ValidationError("kakao token too short", field="addressOrToken")
    return value


def _normalize_slack(value: str) -> str:
    if not value.startswith(SLACK_WEBHOOK_PREFIX):
        raise ValidationError("invalid slack webhook url", field="addressOrToken")
    return value


def _normalize_webpush(value: str) -> str:
    if not value.startswith(WEBPUSH_SCHEMES):
        raise ValidationError("invalid webPush endpoint", field="addressOrToken")
    return value


_NORMALIZERS: dict[ReminderChannelType, Callable[[str], str]] = {
    ReminderChannelType.EMAIL: _normalize_email,
    ReminderChannelType.KAKAO: _normalize_kakao,
    ReminderChannelType.SLACK: _normalize_slack,
    ReminderChannelType.WEBPUSH: _normalize_webpush,
}


def normalize_address(channel: ReminderChannelType, raw: str | None) -> str:
    """Trim, then apply the channel's own rule."""
    if raw is None:
        raise ValidationError("addressOrToken is null", field="addressOrToken")
    value = trim_edges(raw)
    if not value:
        raise ValidationError("addressOrToken is blank", field="addressOrToken")
    return _NORMALIZERS[channel](value)


# ─── Account ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ReminderChannelAccount:
    member_id: int
    channel: ReminderChannelType
    address_or_token: str = field(repr=False)
    enabled: bool = True
    verified_at: datetime | None = None

    @property
    def is_verified(self) -> bool:
        return self.verified_at is not None


def create(channel: ReminderChannelType, address_or_token: str, member) -> ReminderChannelAccount:
    channel = require(channel, "channel type")
    return ReminderChannelAccount(
        channel=channel,
        address_or_token=normalize_address(channel, address_or_token),
        member_id=require_persisted(member, "member"),
    )


def email(address: str, member) -> ReminderChannelAccount:
    return create(ReminderChannelType.EMAIL, address, member)


def kakao(user_id_or_token: str, member) -> ReminderChannelAccount:
    return create(ReminderChannelType.KAKAO, user_id_or_token, member)


def slack(incoming_webhook_url: str, member) -> ReminderChannelAccount:
    return create(ReminderChannelType.SLACK, incoming_webhook_url, member)


def web_push(endpoint: str, member) -> ReminderChannelAccount:
    return create(ReminderChannelType.WEBPUSH, endpoint, member)


def update_address_or_token(account: ReminderChannelAccount, new_value: str) -> ReminderChannelAccount:
    normalized = normalize_address(account.channel, new_value)
    return replace(account, address_or_token=normalized, verified_at=None)


def enable(account: ReminderChannelAccount) -> ReminderChannelAccount:
    return replace(account, enabled=True)


def disable(account: ReminderChannelAccount) -> ReminderChannelAccount:
    return replace(account, enabled=False)


def mark_verified(account: ReminderChannelAccount, clock) -> ReminderChannelAccount:
    return replace(account, verified_at=now_from(clock))


def can_send(account: ReminderChannelAccount) -> bool:
    return account.enabled and account.verified_at is not None
