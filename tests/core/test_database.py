"""Database — creation, owner-only rename and idempotent soft delete.

Tests:
    - name/description rules (verbatim, blank description -> None, lengths)
    - rename and delete_by_owner enforce ownership
    - delete_by_owner keeps the first deletion time
"""

from datetime import timedelta

import pytest

from qtrack.core.database import create_database, delete_by_owner, rename
from qtrack.core.errors import PermissionDeniedError, ValidationError


def test_create_database_keeps_values_verbatim(member):
    db = create_database("  Work  ", "  notes ", member)
    assert db.name == "  Work  "
    assert db.description == "  notes "
    assert db.member_id == member.id
    assert not db.is_deleted


def test_blank_description_becomes_none(member):
    assert create_database("Work", "   ", member).description is None


def test_name_rules(member):
    with pytest.raises(ValidationError, match="name is blank"):
        create_database(" ", None, member)
    with pytest.raises(ValidationError, match="name length > 100"):
        create_database("n" * 101, None, member)
    assert create_database("n" * 100, None, member).name == "n" * 100


def test_description_length(member):
    with pytest.raises(ValidationError, match="description length > 500"):
        create_database("Work", "d" * 501, member)


def test_create_requires_persisted_member(store):
    with pytest.raises(ValidationError, match="member is null or transient"):
        create_database("Work", None, None)


def test_rename_by_owner(database, member):
    renamed = rename(database.entity, "Home", "", member)
    assert renamed.name == "Home"
    assert renamed.description is None


def test_rename_by_stranger_is_denied(database, other_member):
    with pytest.raises(PermissionDeniedError, match="actor is not this database owner"):
        rename(database.entity, "Home", None, other_member)


def test_rename_with_transient_actor(database):
    with pytest.raises(ValidationError, match="actor is null or transient"):
        rename(database.entity, "Home", None, None)


def test_delete_by_owner_is_idempotent(database, member, clock):
    first = delete_by_owner(database.entity, clock, member)
    clock.advance(timedelta(hours=1))
    second = delete_by_owner(first, clock, member)
    assert first.is_deleted
    assert second.deleted_at == first.deleted_at


def test_delete_by_stranger_is_denied(database, other_member, clock):
    with pytest.raises(PermissionDeniedError):
        delete_by_owner(database.entity, clock, other_member)
