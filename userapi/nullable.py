"""
Nullable scalars: a value that may be explicitly absent (None), distinct from 0 or "".

JSON side is handled by pydantic: absent encodes as null, and a value of the
wrong type is a validation error instead of silently becoming absent.
Storage side normalizes what the MySQL driver hands back (None for SQL NULL).
"""
from typing import Annotated, Any, Optional

from pydantic import Field, StrictInt, StrictStr

NullableInt = Annotated[Optional[StrictInt], Field(default=None)]
NullableStr = Annotated[Optional[StrictStr], Field(default=None)]


def scan_int(value: Any) -> Optional[int]:
    """Column value -> int or None. Raises ValueError for non-integral values."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"cannot scan {value!r} as int")
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    try:
        as_int = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"cannot scan {value!r} as int") from e
    # Decimal('1.5') or float 1.5 would truncate silently
    if isinstance(value, str) or as_int == value:
        return as_int
    raise ValueError(f"cannot scan {value!r} as int")


def scan_str(value: Any) -> Optional[str]:
    """Column value -> str or None. Binary collations come back as bytes."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    raise ValueError(f"cannot scan {value!r} as str")

