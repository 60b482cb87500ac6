"""Mapper Introspection: read columns and primary key off a SQLAlchemy mapped class.

Invariants:
    - Only single-column primary keys are supported (ConfigurationError otherwise)
    - Attribute keys are returned, not column names (they may differ)
"""

from typing import Any

from sqlalchemy import Column
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable

from crudify.core.errors import ConfigurationError, ErrorContext


def _mapper(model: type):
    try:
        return sa_inspect(model)
    except NoInspectionAvailable:
        raise ConfigurationError(
            f"{model!r} is not a SQLAlchemy mapped class",
            ErrorContext(model_name=getattr(model, "__name__", None)),
        )


def column_attributes(model: type) -> list[tuple[str, Column]]:
    """(attribute key, column) for every mapped column, in mapper order."""
    return [
        (prop.key, prop.columns[0]) for prop in _mapper(model).column_attrs
    ]


def primary_key_attribute(model: type) -> str:
    mapper = _mapper(model)
    if len(mapper.primary_key) != 1:
        raise ConfigurationError(
            f"{model.__name__} must have exactly one primary key column",
            ErrorContext(model_name=model.__name__),
        )
    return mapper.get_property_by_column(mapper.primary_key[0]).key


def python_type(column: Column) -> type | None:
    """Python type of a column, None when the column type does not declare one."""
    try:
        return column.type.python_type
    except NotImplementedError:
        return None


def scalar_default(column: Column) -> tuple[bool, Any]:
    """(has_scalar_default, value) for a column's client-side default."""
    default = column.default
    if default is not None and getattr(default, "is_scalar", False):
        return True, default.arg
    return False, None
