"""Identifier Coercion: convert the `id` path segment to the primary-key type.

Invariants:
    - Returns None when the raw value cannot be converted (caller answers 404)
    - Never raises for malformed input
    - Integer keys outside the 64-bit range are treated as not coercible
"""

from typing import Any
from uuid import UUID

from crudify.core.integers import parse_int64


def coerce_identifier(raw: str | None, python_type: type | None) -> Any | None:
    if raw is None:
        return None
    if python_type is None or python_type is str:
        return raw
    if python_type is int:
        return parse_int64(raw)
    if python_type is UUID:
        try:
            return UUID(raw)
        except ValueError:
            return None
    try:
        return python_type(raw)
    except (TypeError, ValueError):
        return None
