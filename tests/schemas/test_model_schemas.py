"""Model Schemas: read/write schemas derived from mapped models."""

import uuid
from datetime import datetime

import pytest
from pydantic import ValidationError

from crudify.schemas.model_schemas import build_read_schema, build_write_schema
from tests.models import LogEntry, Note, Widget


def test_write_schema_omits_primary_key_and_timestamps():
    schema = build_write_schema(Widget)
    assert set(schema.model_fields) == {"name", "age", "status"}


def test_write_schema_keeps_created_at_without_capability():
    schema = build_write_schema(LogEntry)
    assert set(schema.model_fields) == {"message", "created_at"}


def test_write_schema_required_and_optional_fields():
    fields = build_write_schema(Widget).model_fields
    assert fields["name"].is_required()
    assert not fields["age"].is_required()
    assert fields["status"].default == "active"


def test_write_schema_rejects_missing_required_field():
    with pytest.raises(ValidationError):
        build_write_schema(Note).model_validate({"body": "x"})


def test_write_schema_ignores_unknown_fields():
    payload = build_write_schema(Note).model_validate({"title": "t", "id": "x", "extra": 1})
    assert payload.model_dump() == {"title": "t", "body": None}


def test_read_schema_covers_every_column():
    schema = build_read_schema(Widget)
    assert set(schema.model_fields) == {
        "id", "name", "age", "status", "created_at", "updated_at",
    }


def test_read_schema_reads_attributes():
    note = Note(id=uuid.uuid4(), title="t", body=None)
    dumped = build_read_schema(Note).model_validate(note).model_dump(mode="json")
    assert dumped == {"id": str(note.id), "title": "t", "body": None}


def test_read_schema_encodes_datetimes():
    widget = Widget(id=1, name="w", age=None, status="active",
                    created_at=datetime(2026, 1, 1), updated_at=None)
    dumped = build_read_schema(Widget).model_validate(widget).model_dump(mode="json")
    assert dumped["created_at"] == "2026-01-01T00:00:00"
