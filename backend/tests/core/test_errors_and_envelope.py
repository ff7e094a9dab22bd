"""Error taxonomy and envelope — status codes and wire shapes."""

from taskflow.core.envelope import Envelope
from taskflow.core.errors import (
    ConflictError, DatabaseError, ErrorContext, InternalError, InvalidArgumentError,
    NotificationDispatchError, ResourceNotFoundError,
)


def test_error_kinds_map_to_status_codes():
    assert ResourceNotFoundError("Task", "t1").http_status == 404
    assert InvalidArgumentError("bad", "status").http_status == 400
    assert ConflictError("dup").http_status == 409
    assert InternalError("boom").http_status == 500
    assert DatabaseError("lost", "commit").http_status == 500
    assert NotificationDispatchError("down").http_status == 500


def test_not_found_envelope_names_the_resource():
    envelope = ResourceNotFoundError(
        "Project", "p9", message="Error creating Task",
    ).to_envelope()

    assert envelope.code == 404
    assert envelope.message == "Error creating Task"
    assert envelope.details == "Project with id p9 does not exist!"


def test_internal_error_envelope_carries_cause():
    envelope = InternalError("socket closed").to_envelope()

    assert envelope.code == 500
    assert envelope.message == "Internal server error"
    assert envelope.details == "socket closed"


def test_envelope_details_default_to_message():
    assert ConflictError("dup").to_envelope().details == "dup"


def test_error_response_includes_code_and_category():
    body = ConflictError("dup", "Tasks already exists.").to_response()

    assert body["code"] == 409
    assert body["error"]["code"] == "CONFLICT"
    assert body["error"]["category"] == "conflict"


def test_envelope_ok_range():
    assert Envelope(200, "ok").ok
    assert Envelope(201, "created").ok
    assert not Envelope(404, "missing").ok
    assert not Envelope(500, "boom").ok


def test_envelope_to_dict_omits_absent_notification():
    assert Envelope(200, "ok", [1]).to_dict() == {
        "code": 200, "message": "ok", "details": [1],
    }


def test_envelope_to_dict_nests_notification():
    envelope = Envelope(
        200, "ok", notification=Envelope(500, "failed", "smtp"),
    )
    assert envelope.to_dict()["notification"] == {
        "code": 500, "message": "failed", "details": "smtp",
    }


def test_error_context_carries_identifiers():
    err = ResourceNotFoundError(
        "Task", "t1", context=ErrorContext(task_id="t1", operation="patch"),
    )

    assert err.context.task_id == "t1"
    assert err.context.operation == "patch"
    assert ConflictError("dup").context.task_id is None
