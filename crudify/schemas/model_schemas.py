"""Model Schemas: derive pydantic read/write schemas from a mapped model.

Invariants:
    - Read schema: every mapped column, all optional, from_attributes=True
    - Write schema: every mapped column except the primary key and, for
      timestamp-capable models, created_at/updated_at
    - Write field optional iff the column is nullable or has a scalar default

Design Decisions:
    - Schemas built with pydantic.create_model so any mapped class is servable
      without hand-written schemas; consumers may still pass their own
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, create_model

from crudify.db.introspection import (
    column_attributes, primary_key_attribute, python_type, scalar_default,
)
from crudify.db.timestamps import TIMESTAMP_FIELDS, supports_timestamps


def build_read_schema(model: type) -> type[BaseModel]:
    fields: dict[str, Any] = {}
    for key, column in column_attributes(model):
        annotation = python_type(column) or Any
        fields[key] = (Optional[annotation], None)
    return create_model(
        f"{model.__name__}Read",
        __config__=ConfigDict(from_attributes=True),
        **fields,
    )


def build_write_schema(model: type) -> type[BaseModel]:
    pk = primary_key_attribute(model)
    skipped = {pk}
    if supports_timestamps(model):
        skipped.update(TIMESTAMP_FIELDS)

    fields: dict[str, Any] = {}
    for key, column in column_attributes(model):
        if key in skipped:
            continue
        annotation = python_type(column) or Any
        has_default, default = scalar_default(column)
        if has_default:
            fields[key] = (annotation, default)
        elif column.nullable:
            fields[key] = (Optional[annotation], None)
        else:
            fields[key] = (annotation, ...)
    return create_model(
        f"{model.__name__}Write",
        __config__=ConfigDict(extra="ignore"),
        **fields,
    )
