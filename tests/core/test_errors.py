"""Error Hierarchy: codes, statuses, and the REST envelope."""

from crudify.core.errors import (
    ConfigurationError, DatabaseError, ErrorCategory, ResourceNotFoundError,
)


def test_not_found_envelope_names_model_and_record():
    error = ResourceNotFoundError("Widget", "12")
    body = error.to_response()["error"]
    assert error.http_status == 404
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Widget '12' not found"
    assert body["context"]["model"] == "Widget"
    assert body["context"]["record_id"] == "12"


def test_database_error_is_503():
    error = DatabaseError("timeout", "query")
    assert error.http_status == 503
    assert error.category is ErrorCategory.DATABASE
    assert error.message == "Database query failed: timeout"


def test_configuration_error_is_500():
    assert ConfigurationError("bad").http_status == 500
