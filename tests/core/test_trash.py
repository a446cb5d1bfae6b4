"""Trash Retention — TrashItem creation, hard-delete eligibility and retention ratchet.

Tests:
    - TrashItem requires a persisted TRASHED task
    - retention must be positive; retention_until >= trashed_at
    - can_hard_delete is inclusive at retention_until
    - extend_retention_until only moves forward
"""

from datetime import timedelta

import pytest

from qtrack.core.errors import IllegalStateError, ValidationError
from qtrack.core.identity import Stored
from qtrack.core.task_lifecycle import soft_delete
from qtrack.core.trash import (
    can_hard_delete, create_trash_item, create_trash_item_until, extend_retention_until,
)
from tests.support import T0

RETENTION = timedelta(days=30)


@pytest.fixture
def trashed(store, stored_task, clock):
    return store.replace(stored_task, soft_delete(stored_task.entity, clock))


def test_create_trash_item(trashed):
    item = create_trash_item(T0, RETENTION, trashed)
    assert item.task_id == trashed.id
    assert item.trashed_at == T0
    assert item.retention_until == T0 + RETENTION


@pytest.mark.parametrize("retention", [timedelta(0), timedelta(seconds=-1), None])
def test_retention_must_be_positive(trashed, retention):
    with pytest.raises(ValidationError, match="duration must be > 0"):
        create_trash_item(T0, retention, trashed)


def test_task_must_be_trashed(stored_task):
    with pytest.raises(IllegalStateError, match="task status must be TRASHED to create TrashItem"):
        create_trash_item(T0, RETENTION, stored_task)


def test_task_must_be_persisted(trashed):
    with pytest.raises(ValidationError, match="task is null or transient"):
        create_trash_item(T0, RETENTION, trashed.entity)


def test_retention_until_before_trashed_at(trashed):
    with pytest.raises(ValidationError, match="retentionUntil must be >= trashedAt"):
        create_trash_item_until(T0, T0 - timedelta(microseconds=1), trashed)


def test_retention_until_equal_to_trashed_at_is_allowed(trashed):
    item = create_trash_item_until(T0, T0, trashed)
    assert can_hard_delete(item, T0)


def test_can_hard_delete_boundary(trashed):
    item = create_trash_item(T0, RETENTION, trashed)
    assert not can_hard_delete(item, T0 + RETENTION - timedelta(microseconds=1))
    assert can_hard_delete(item, T0 + RETENTION)
    assert can_hard_delete(item, T0 + RETENTION + timedelta(days=1))


def test_can_hard_delete_requires_now(trashed):
    with pytest.raises(ValidationError, match="now is null"):
        can_hard_delete(create_trash_item(T0, RETENTION, trashed), None)


def test_extend_retention_moves_forward(trashed):
    item = create_trash_item(T0, RETENTION, trashed)
    later = T0 + RETENTION + timedelta(days=5)
    assert extend_retention_until(item, later).retention_until == later


def test_extend_retention_earlier_is_noop(trashed):
    item = create_trash_item(T0, RETENTION, trashed)
    assert extend_retention_until(item, T0 + timedelta(days=1)) is item


def test_extend_retention_before_trashed_at_rejected(trashed):
    item = create_trash_item(T0, RETENTION, trashed)
    with pytest.raises(ValidationError, match="newRetentionUntil must be >= trashedAt"):
        extend_retention_until(item, T0 - timedelta(seconds=1))


def test_stored_wrapper_of_trashed_task_is_accepted(trashed):
    rewrapped = Stored(id=trashed.id, entity=trashed.entity, version=trashed.version)
    assert create_trash_item(T0, RETENTION, rewrapped).task_id == trashed.id


def test_retention_never_decreases_over_a_sequence(trashed):
    item = create_trash_item(T0, RETENTION, trashed)
    seen = [item.retention_until]
    for days in (40, 10, 35, 60, 1, 0):
        item = extend_retention_until(item, T0 + timedelta(days=days))
        seen.append(item.retention_until)
    assert seen == sorted(seen)
    assert item.retention_until == T0 + timedelta(days=60)
