"""Verification Workflows — issue and confirm codes, and bind reminder channels.

Invariants:
    - Codes are hashed before they reach core; the plain code never leaves this module
    - confirm_code is a single read-decide-write cycle guarded by Stored.version
    - A confirmed EMAIL verification marks the member's EMAIL reminder account verified
    - verify_channel_account spends the code only after the account write succeeds
"""

import hashlib
import logging
from datetime import timedelta

from qtrack.config import get_settings
from qtrack.core import reminder_channels, verification
from qtrack.core.domain_types import ReminderChannelType, VerificationChannelType
from qtrack.core.errors import ValidationError
from qtrack.core.identity import Stored
from qtrack.core.member import Member
from qtrack.core.reminder_channels import ReminderChannelAccount
from qtrack.core.repository_protocols import Clock, EntityStore
from qtrack.core.verification import Verification

logger = logging.getLogger(__name__)

_CHANNEL_FOR_VERIFICATION = {
    VerificationChannelType.MAIL: ReminderChannelType.EMAIL,
    VerificationChannelType.KAKAO: ReminderChannelType.KAKAO,
}


def hash_code(raw_code: str) -> str:
    return hashlib.sha256(raw_code.encode("utf-8")).hexdigest()


def issue_code(
    store: EntityStore,
    member_id: int,
    channel: VerificationChannelType,
    raw_code: str,
    clock: Clock,
    ttl: timedelta | None = None,
) -> Stored[Verification]:
    ttl = ttl if ttl is not None else get_settings().verification_code_ttl
    member = store.get(Member, member_id)
    stored = store.add(verification.issue(channel, hash_code(raw_code), ttl, clock, member))
    logger.info(
        "Verification issued",
        extra={"entity": "Verification", "entity_id": stored.id},
    )
    return stored


def confirm_code(
    store: EntityStore, verification_id: int, raw_code: str, clock: Clock,
) -> Stored[Verification]:
    current = store.get(Verification, verification_id)
    verified = verification.verify(current.entity, hash_code(raw_code), clock)
    stored = store.replace(current, verified)
    logger.info(
        "Verification confirmed",
        extra={"entity": "Verification", "entity_id": stored.id, "version": stored.version},
    )
    return stored


def verify_channel_account(
    store: EntityStore, account_id: int, verification_id: int, raw_code: str, clock: Clock,
) -> Stored[ReminderChannelAccount]:
    """Confirm a code and, on success, mark the matching reminder account verified.

    Both new values are decided before anything is written. The account is written
    first and the code is spent last, so a conflict on either write leaves the code
    usable and the whole call can be re-run through retry_on_conflict.
    """
    account = store.get(ReminderChannelAccount, account_id)
    pending = store.get(Verification, verification_id)
    if pending.entity.member_id != account.entity.member_id:
        raise ValidationError("verification belongs to another member", field="verification")
    if _CHANNEL_FOR_VERIFICATION[pending.entity.channel] != account.entity.channel:
        raise ValidationError("verification channel does not match account channel", field="verification")
    verified = verification.verify(pending.entity, hash_code(raw_code), clock)
    marked = reminder_channels.mark_verified(account.entity, clock)

    stored_account = store.replace(account, marked)
    store.replace(pending, verified)
    logger.info(
        "Reminder channel verified",
        extra={"entity": "ReminderChannelAccount", "entity_id": stored_account.id},
    )
    return stored_account
