"""Error hierarchy tests — codes, categories and log fields."""

from codepad.core.errors import (
    CodepadError, CollaboratorError, CollaboratorTimeoutError, ErrorCategory,
    ErrorContext, ErrorSeverity, MalformedPayloadError, RevisionNotFoundError,
)


def test_revision_not_found_carries_id():
    err = RevisionNotFoundError("abcd1234")
    assert err.code == "REVISION_NOT_FOUND"
    assert err.category == ErrorCategory.RESOURCE_NOT_FOUND
    assert err.severity == ErrorSeverity.WARNING
    assert err.to_log_extra()["revision_id"] == "abcd1234"


def test_all_errors_share_base():
    for err in (
        RevisionNotFoundError("abcd1234"),
        MalformedPayloadError("bad", "compiler"),
        CollaboratorError("boom", "formatter"),
        CollaboratorTimeoutError("formatter", 1.0),
    ):
        assert isinstance(err, CodepadError)
        assert err.message == str(err)


def test_context_command_in_log_extra():
    err = CollaboratorError("boom", "formatter", ErrorContext(command="FormatCode"))
    assert err.to_log_extra() == {
        "error_code": "COLLABORATOR_ERROR",
        "revision_id": None,
        "command": "FormatCode",
    }


def test_timeout_message():
    err = CollaboratorTimeoutError("revision store", 2.0)
    assert "timed out after 2.0s" in err.message
    assert err.category == ErrorCategory.TIMEOUT
