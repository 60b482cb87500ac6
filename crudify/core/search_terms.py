"""Search Terms: classify a raw query-string value into an equality or contains match.

Invariants:
    - A value matching [+-]?\\d+ that fits in 64 bits is an integer equality term
    - Anything else (the empty string, integers too wide for 64 bits) is a
      contains term on the raw text
    - Classification looks only at the value, never at the column type

Design Decisions:
    - Value shape drives the filter kind, so a numeric-looking value on a text
      column becomes an equality filter
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from crudify.core.integers import parse_int64


class MatchKind(str, Enum):
    EQUALS = "equals"
    CONTAINS = "contains"


@dataclass(frozen=True)
class SearchTerm:
    """One field filter derived from the query string."""
    field: str
    kind: MatchKind
    value: int | str


def classify(field: str, raw: str) -> SearchTerm:
    value = parse_int64(raw)
    if value is not None:
        return SearchTerm(field, MatchKind.EQUALS, value)
    return SearchTerm(field, MatchKind.CONTAINS, raw)


def collect_terms(
    searchable_fields: list[str], query_params: Mapping[str, str],
) -> list[SearchTerm]:
    """Build one term per configured field present in the query string, in field order."""
    return [
        classify(name, query_params[name])
        for name in searchable_fields
        if name in query_params
    ]
