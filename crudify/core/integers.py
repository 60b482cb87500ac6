"""Integer Parsing: read a query or path value as a 64-bit signed integer.

Invariants:
    - Only [+-]?\\d+ is an integer; surrounding whitespace or a decimal point is not
    - Values outside the signed 64-bit range are not integers (they cannot be
      bound to an INTEGER/BIGINT column)
"""

import re

_INTEGER = re.compile(r"[+-]?\d+")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_int64(raw: str) -> int | None:
    if not _INTEGER.fullmatch(raw):
        return None
    value = int(raw)
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return None
