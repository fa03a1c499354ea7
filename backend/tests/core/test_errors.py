"""Error hierarchy — status codes, categories, and response envelopes."""

from commander.core.errors import (
    CommanderError, CommandValidationError, DatabaseError, DuplicateCommandError,
    ErrorCategory, ErrorContext, ErrorSeverity, InvalidArgumentError,
    ResourceNotFoundError,
)


def test_all_errors_share_base():
    for exc in (
        DuplicateCommandError("dup", "line"),
        CommandValidationError([]),
        ResourceNotFoundError("Command", "1"),
        InvalidArgumentError("command"),
        DatabaseError("boom", "commit"),
    ):
        assert isinstance(exc, CommanderError)


def test_duplicate_is_400_conflict():
    exc = DuplicateCommandError("Command already exists", "line")
    assert exc.http_status == 400
    assert exc.category is ErrorCategory.CONFLICT
    assert exc.to_response()["error"]["message"] == "Command already exists"


def test_invalid_argument_is_500_critical():
    exc = InvalidArgumentError("command")
    assert exc.http_status == 500
    assert exc.severity is ErrorSeverity.CRITICAL
    assert "command" in exc.message


def test_not_found_message_names_resource():
    exc = ResourceNotFoundError("Command", "42")
    assert exc.http_status == 404
    assert exc.message == "Command '42' not found"


def test_validation_error_includes_details():
    details = [{"field": "line", "message": "required", "type": "missing"}]
    response = CommandValidationError(details).to_response()
    assert response["error"]["code"] == "VALIDATION_ERROR"
    assert response["error"]["details"] == details


def test_response_envelope_carries_context():
    exc = DuplicateCommandError(
        "dup", "line", ErrorContext(command_id=7, user_message="Try another line"),
    )
    error = exc.to_response()["error"]
    assert error["context"]["command_id"] == 7
    assert error["message"] == "Try another line"
    assert error["severity"] == "warning"


def test_database_error_is_503():
    exc = DatabaseError("Integrity constraint violated", "commit")
    assert exc.http_status == 503
    assert exc.message == "Database commit failed: Integrity constraint violated"
