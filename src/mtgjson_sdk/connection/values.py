"""Module to normalize DuckDB values into canonical values.

A canonical value is None, bool, int (signed 64-bit), float, str, a list
of canonical values, or a dict mapping str to canonical values. This is
the exchange format between the query engine and every consumer.
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Sequence
from decimal import Decimal
from typing import Any, Final, TypeAlias

from ..errors import MtgjsonUnsupportedTypeError

CanonicalValue: TypeAlias = (
    None | bool | int | float | str | list["CanonicalValue"] | dict[str, "CanonicalValue"]
)

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

BLOB_PREFIX: Final[str] = "blob:"


def to_canonical(value: Any, *, strict: bool = False) -> CanonicalValue:
    """
    Convert a value returned by DuckDB into a canonical value.

    Integers outside the signed 64-bit range (HUGEINT, UHUGEINT) become
    their decimal string. Blobs become hex strings prefixed by `blob:`.
    Lists and structs are converted recursively.

    Values without a canonical representation (dates, times, timestamps,
    intervals, ...) become None, unless `strict` is True, in which case we
    raise MtgjsonUnsupportedTypeError.
    """
    # Note: bool must come before int since bool is an int subclass
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        if INT64_MIN <= value <= INT64_MAX:
            return value
        return str(value)
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return float(value) if value.is_finite() else None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BLOB_PREFIX + bytes(value).hex()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [to_canonical(item, strict=strict) for item in value]
    if isinstance(value, dict):
        return {str(key): to_canonical(item, strict=strict) for key, item in value.items()}
    if strict:
        raise MtgjsonUnsupportedTypeError(
            f"cannot convert {type(value).__name__} value to a canonical value"
        )
    return None


def row_to_canonical(
    columns: Sequence[str],
    row: Sequence[Any],
    *,
    strict: bool = False,
) -> dict[str, CanonicalValue]:
    """Convert a result row into a dict mapping column names to canonical values."""
    return {name: to_canonical(value, strict=strict) for name, value in zip(columns, row)}
