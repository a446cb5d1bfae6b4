"""Member — identity value objects and the member entity.

Invariants:
    - LoginId matches ^[a-z0-9]{5,20}$ and is never trimmed or lower-cased
    - PasswordHash holds an already-hashed string; repr/str never reveal it
    - login_id is fixed at creation: no function here replaces it
    - nickname: non-blank, <= 50 chars, no leading/trailing whitespace
    - time_zone is a resolvable IANA zone name
"""

import re
from dataclasses import dataclass, field, replace
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from qtrack.core.domain_types import MemberStatus
from qtrack.core.errors import ValidationError
from qtrack.core.field_rules import require

_WHITESPACE_ONLY = re.compile(r"^\s+$")
_WHITESPACE = re.compile(r"\s")
_LOGIN_ID_CHARS = re.compile(r"^[a-z0-9]+$")

LOGIN_ID_MIN_LENGTH = 5
LOGIN_ID_MAX_LENGTH = 20
PASSWORD_HASH_MAX_LENGTH = 255
NICKNAME_MAX_LENGTH = 50


@dataclass(frozen=True)
class LoginId:
    value: str

    def __post_init__(self):
        v = self.value
        if v is None:
            raise ValidationError("loginId must not be null", field="loginId")
        if v == "":
            raise ValidationError("loginId must not be empty", field="loginId")
        if _WHITESPACE_ONLY.match(v):
            raise ValidationError(
                "loginId must not be blank (whitespace only is not allowed)", field="loginId",
            )
        if _WHITESPACE.search(v):
            raise ValidationError("loginId must not contain whitespace", field="loginId")
        if not LOGIN_ID_MIN_LENGTH <= len(v) <= LOGIN_ID_MAX_LENGTH:
            raise ValidationError(
                f"loginId length must be between {LOGIN_ID_MIN_LENGTH} and {LOGIN_ID_MAX_LENGTH}",
                field="loginId",
            )
        if not _LOGIN_ID_CHARS.match(v):
            raise ValidationError(
                "loginId must contain only lowercase letters and digits", field="loginId",
            )

    @classmethod
    def of(cls, raw: "str | LoginId") -> "LoginId":
        return raw if isinstance(raw, LoginId) else cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PasswordHash:
    value: str = field(repr=False)

    def __post_init__(self):
        v = self.value
        if v is None:
            raise ValidationError("passwordHash must not be null", field="passwordHash")
        if v == "":
            raise ValidationError("passwordHash must not be empty", field="passwordHash")
        if len(v) > PASSWORD_HASH_MAX_LENGTH:
            raise ValidationError(
                f"passwordHash length must be <= {PASSWORD_HASH_MAX_LENGTH}", field="passwordHash",
            )
        if _WHITESPACE_ONLY.match(v):
            raise ValidationError("passwordHash must not be blank", field="passwordHash")
        if _WHITESPACE.search(v):
            raise ValidationError("passwordHash must not contain whitespace", field="passwordHash")

    @classmethod
    def of(cls, raw: "str | PasswordHash") -> "PasswordHash":
        return raw if isinstance(raw, PasswordHash) else cls(raw)

    def __repr__(self) -> str:
        return "PasswordHash(****)"

    __str__ = __repr__


@dataclass(frozen=True)
class Member:
    login_id: LoginId
    password_hash: PasswordHash
    nickname: str
    time_zone: str
    status: MemberStatus = MemberStatus.ACTIVE


def create_member(
    login_id: str | LoginId,
    password_hash: str | PasswordHash,
    nickname: str,
    time_zone: str | ZoneInfo,
) -> Member:
    return Member(
        login_id=LoginId.of(login_id),
        password_hash=PasswordHash.of(password_hash),
        nickname=_valid_nickname(nickname),
        time_zone=_valid_time_zone(time_zone),
        status=MemberStatus.ACTIVE,
    )


def change_password(member: Member, new_password_hash: str | PasswordHash) -> Member:
    return replace(member, password_hash=PasswordHash.of(new_password_hash))


def change_nickname(member: Member, new_nickname: str) -> Member:
    return replace(member, nickname=_valid_nickname(new_nickname))


def change_member_status(member: Member, status: MemberStatus) -> Member:
    return replace(member, status=require(status, "memberStatus"))


# ─── Validation ──────────────────────────────────────────────────

def _valid_nickname(nickname: str | None) -> str:
    if nickname is None:
        raise ValidationError("nickname must not be null", field="nickname")
    if nickname == "":
        raise ValidationError("nickname must not be empty", field="nickname")
    if nickname.isspace():
        raise ValidationError("nickname must not be blank", field="nickname")
    if len(nickname) > NICKNAME_MAX_LENGTH:
        raise ValidationError(
            f"nickname length must be <= {NICKNAME_MAX_LENGTH}", field="nickname",
        )
    if nickname[0].isspace() or nickname[-1].isspace():
        raise ValidationError(
            "nickname must not start or end with whitespace", field="nickname",
        )
    return nickname


def _valid_time_zone(time_zone: str | ZoneInfo | None) -> str:
    if time_zone is None:
        raise ValidationError("timeZone is null", field="timeZone")
    if isinstance(time_zone, ZoneInfo):
        return time_zone.key
    if not time_zone.strip():
        raise ValidationError("timeZone is blank", field="timeZone")
    try:
        ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"timeZone is invalid: {time_zone}", field="timeZone") from exc
    return time_zone
