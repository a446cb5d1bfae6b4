"""Verification Challenge — single-use, time-boxed code confirmation.

Invariants:
    - verified_at is None until verify succeeds; once set the record is terminal
    - Expiry is inclusive: now >= expires_at counts as expired
    - verify checks in order: already verified -> expired -> code mismatch
    - issue requires a strictly positive duration and a persisted member
    - Only hashed codes are ever stored or compared
"""

import hmac
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

from qtrack.core.domain_types import VerificationChannelType
from qtrack.core.errors import IllegalStateError, ValidationError
from qtrack.core.field_rules import now_from, positive_duration, require, required_text
from qtrack.core.identity import require_persisted


@dataclass(frozen=True)
class Verification:
    member_id: int
    channel: VerificationChannelType
    code_hash: str = field(repr=False)
    expires_at: datetime
    verified_at: datetime | None = None

    @property
    def is_verified(self) -> bool:
        return self.verified_at is not None


def issue(
    channel: VerificationChannelType,
    code_hash: str,
    duration: timedelta,
    clock,
    member,
) -> Verification:
    positive_duration(duration, "duration must be positive")
    now = now_from(clock)
    return Verification(
        channel=require(channel, "channelType"),
        code_hash=required_text(code_hash, "codeHash"),
        expires_at=now + duration,
        member_id=require_persisted(member, "member"),
    )


def verify(verification: Verification, code_hash: str, clock) -> Verification:
    if verification.is_verified:
        raise IllegalStateError("already verified")
    now = now_from(clock)
    if now >= verification.expires_at:
        raise IllegalStateError("verification code expired")
    if not _same_hash(verification.code_hash, code_hash):
        raise ValidationError("code mismatch", field="codeHash")
    return replace(verification, verified_at=now)


def is_expired(verification: Verification, clock) -> bool:
    return now_from(clock) >= verification.expires_at


def _same_hash(stored: str, supplied: str | None) -> bool:
    if supplied is None:
        return False
    return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))
