"""Error Hierarchy — codes, categories, HTTP status and response envelope.

Tests:
    - Each error class carries its stable code and category
    - ValidationError is also a ValueError and records the field
    - ResourceNotFoundError / ConcurrencyError fill the context
    - to_response() shape
"""

import pytest

from qtrack.core.errors import (
    ConcurrencyError, ErrorCategory, ErrorSeverity, IllegalStateError,
    PermissionDeniedError, QtrackError, ResourceNotFoundError, ValidationError,
)


@pytest.mark.parametrize("error, code, category, status", [
    (ValidationError("bad"), "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400),
    (IllegalStateError("nope"), "ILLEGAL_STATE", ErrorCategory.BUSINESS_RULE, 409),
    (PermissionDeniedError("mine"), "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION, 403),
    (ResourceNotFoundError("Task", 4), "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404),
    (ConcurrencyError("Task", 4, 1, 2), "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT, 409),
])
def test_error_classification(error, code, category, status):
    assert isinstance(error, QtrackError)
    assert error.code == code
    assert error.category == category
    assert error.http_status == status


def test_validation_error_is_value_error():
    err = ValidationError("title is blank", field="title")
    assert isinstance(err, ValueError)
    assert err.field == "title"
    assert err.context.field == "title"
    assert err.severity == ErrorSeverity.WARNING
    assert str(err) == "title is blank"


def test_resource_not_found_message_and_context():
    err = ResourceNotFoundError("Member", 12)
    assert err.message == "Member '12' not found"
    assert err.context.entity == "Member"
    assert err.context.entity_id == 12


def test_concurrency_error_records_versions():
    err = ConcurrencyError("Task", 3, expected=0, actual=2)
    assert err.expected == 0
    assert err.actual == 2
    assert "expected 0, found 2" in err.message


def test_to_response_envelope():
    body = ValidationError("progress must be 0..100", field="progress").to_response()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["category"] == "validation"
    assert body["error"]["severity"] == "warning"
    assert body["error"]["context"]["field"] == "progress"
    assert "timestamp" in body["error"]


def test_state_and_validation_are_distinct():
    assert not issubclass(IllegalStateError, ValidationError)
    assert not issubclass(PermissionDeniedError, ValidationError)
