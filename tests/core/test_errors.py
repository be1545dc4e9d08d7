"""Error Hierarchy — tests for codes, HTTP status and the response envelope."""

from swarmnet.core.errors import (
    AlreadyInitializedError, DatabaseError, ErrorContext, InsufficientFundsError,
    NotInitializedError, SwarmNetError, UnauthorizedError,
)


def test_every_error_is_swarmnet_error():
    assert isinstance(AlreadyInitializedError(), SwarmNetError)
    assert isinstance(DatabaseError("x", "commit"), SwarmNetError)


def test_to_response_envelope():
    err = AlreadyInitializedError(ErrorContext(operation="initialize", identity="admin"))
    body = err.to_response()["error"]
    assert body["code"] == "ALREADY_INITIALIZED"
    assert body["category"] == "conflict"
    assert body["context"] == {"operation": "initialize", "identity": "admin"}
    assert "timestamp" in body


def test_unauthorized_defaults_to_403_and_accepts_401():
    assert UnauthorizedError("no").http_status == 403
    assert UnauthorizedError("no", http_status=401).http_status == 401


def test_status_codes():
    assert NotInitializedError().http_status == 409
    assert InsufficientFundsError("a", 1, 2).http_status == 400
    assert DatabaseError("down", "execute").http_status == 503
