"""Member — login id, password hash, nickname and time zone rules.

Tests:
    - LoginId format and exact messages, never normalized
    - PasswordHash never shows its value in repr/str
    - Nickname length and edge-whitespace rules
    - time_zone must be a resolvable IANA name
    - change_* functions return new members and keep login_id
"""

from zoneinfo import ZoneInfo

import pytest

from qtrack.core.domain_types import MemberStatus
from qtrack.core.errors import ValidationError
from qtrack.core.member import (
    LoginId, PasswordHash, change_member_status, change_nickname, change_password,
    create_member,
)


def _member(**overrides):
    args = {"login_id": "alice01", "password_hash": "hash$abc",
            "nickname": "Alice", "time_zone": "Asia/Seoul"}
    args.update(overrides)
    return create_member(**args)


# ─── LoginId ─────────────────────────────────────────────────────

@pytest.mark.parametrize("raw, message", [
    (None, "loginId must not be null"),
    ("", "loginId must not be empty"),
    ("    ", "loginId must not be blank"),
    ("ali ce01", "loginId must not contain whitespace"),
    ("abcd", "loginId length must be between 5 and 20"),
    ("a" * 21, "loginId length must be between 5 and 20"),
    ("Alice01", "loginId must contain only lowercase letters and digits"),
    ("alice_01", "loginId must contain only lowercase letters and digits"),
])
def test_login_id_rejections(raw, message):
    with pytest.raises(ValidationError, match=message):
        LoginId(raw)


@pytest.mark.parametrize("raw", ["abcde", "a" * 20, "user2024"])
def test_login_id_accepts_valid(raw):
    assert LoginId(raw).value == raw


def test_login_id_of_passes_instances_through():
    login = LoginId("alice01")
    assert LoginId.of(login) is login
    assert str(LoginId.of("alice01")) == "alice01"


# ─── PasswordHash ────────────────────────────────────────────────

def test_password_hash_is_masked():
    ph = PasswordHash("s3cr3t$hash")
    assert "s3cr3t" not in repr(ph)
    assert str(ph) == "PasswordHash(****)"


@pytest.mark.parametrize("raw, message", [
    (None, "passwordHash must not be null"),
    ("", "passwordHash must not be empty"),
    ("x" * 256, "passwordHash length must be <= 255"),
    ("   ", "passwordHash must not be blank"),
    ("ab cd", "passwordHash must not contain whitespace"),
])
def test_password_hash_rejections(raw, message):
    with pytest.raises(ValidationError, match=message):
        PasswordHash(raw)


def test_member_repr_hides_password():
    assert "hash$abc" not in repr(_member())


# ─── create_member ───────────────────────────────────────────────

def test_create_member_defaults_to_active():
    member = _member()
    assert member.status == MemberStatus.ACTIVE
    assert member.login_id == LoginId("alice01")
    assert member.time_zone == "Asia/Seoul"


def test_create_member_accepts_zoneinfo():
    assert _member(time_zone=ZoneInfo("UTC")).time_zone == "UTC"


@pytest.mark.parametrize("nickname, message", [
    (None, "nickname must not be null"),
    ("", "nickname must not be empty"),
    ("   ", "nickname must not be blank"),
    ("n" * 51, "nickname length must be <= 50"),
    (" Alice", "nickname must not start or end with whitespace"),
    ("Alice ", "nickname must not start or end with whitespace"),
])
def test_nickname_rejections(nickname, message):
    with pytest.raises(ValidationError, match=message):
        _member(nickname=nickname)


def test_nickname_inner_whitespace_allowed():
    assert _member(nickname="Alice Kim").nickname == "Alice Kim"


@pytest.mark.parametrize("tz, message", [
    (None, "timeZone is null"),
    ("  ", "timeZone is blank"),
    ("Mars/Olympus", "timeZone is invalid: Mars/Olympus"),
])
def test_time_zone_rejections(tz, message):
    with pytest.raises(ValidationError, match=message):
        _member(time_zone=tz)


# ─── mutators ────────────────────────────────────────────────────

def test_change_password_replaces_hash_only():
    member = _member()
    changed = change_password(member, "hash$new")
    assert changed.password_hash == PasswordHash("hash$new")
    assert changed.login_id == member.login_id
    assert member.password_hash == PasswordHash("hash$abc")


def test_change_nickname_validates_first():
    member = _member()
    with pytest.raises(ValidationError):
        change_nickname(member, " padded ")
    assert change_nickname(member, "Ally").nickname == "Ally"


def test_change_member_status():
    member = change_member_status(_member(), MemberStatus.DISABLED)
    assert member.status == MemberStatus.DISABLED
    with pytest.raises(ValidationError, match="memberStatus is null"):
        change_member_status(member, None)
