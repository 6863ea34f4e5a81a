"""Value classification.

Rules and the engine operate on dynamically-typed values. ``kind_of`` sorts a
value into one of five kinds so dispatch stays explicit:

- ABSENT: ``None``; no value present
- SEQUENCE: lists and tuples (strings and bytes are scalars)
- MAPPING: any ``collections.abc.Mapping``
- RECORD: dataclass instances, pydantic models and other attribute bags
- SCALAR: everything else
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Set
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from numbers import Number
from typing import Any
from uuid import UUID

from pydantic import BaseModel

_SCALAR_TYPES = (str, bytes, bytearray, memoryview, Number, Decimal, date, datetime, time, timedelta, UUID, Enum)


class Kind(str, Enum):
    ABSENT = "absent"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    RECORD = "record"


def kind_of(value: Any) -> Kind:
    if value is None: return Kind.ABSENT
    if isinstance(value, _SCALAR_TYPES): return Kind.SCALAR
    if isinstance(value, Mapping): return Kind.MAPPING
    if isinstance(value, (list, tuple)): return Kind.SEQUENCE
    if is_record(value): return Kind.RECORD
    return Kind.SCALAR


def is_record(value: Any) -> bool:
    """Objects whose named attributes can be validated field by field."""
    if value is None or isinstance(value, type) or isinstance(value, _SCALAR_TYPES): return False
    if isinstance(value, (Mapping, list, tuple, Set)): return False
    if isinstance(value, BaseModel) or dataclasses.is_dataclass(value): return True
    return hasattr(value, "__dict__") or bool(getattr(type(value), "__slots__", ()))


def is_empty(value: Any) -> bool:
    """Zero-value test used by Required and friends.

    Empty: None, empty strings and containers, False, numeric zero.
    Records and other objects are empty only when they report a length of 0.
    """
    if value is None: return True
    if isinstance(value, bool): return not value
    if isinstance(value, (int, float, complex, Decimal)): return value == 0
    if isinstance(value, timedelta): return value == timedelta(0)
    if isinstance(value, (str, bytes, bytearray, Mapping, list, tuple, Set)): return len(value) == 0
    if hasattr(value, "__len__"):
        try: return len(value) == 0
        except TypeError: return False
    return False


def length_of(value: Any) -> int:
    """Length of strings, byte strings and containers; TypeError for anything else."""
    if isinstance(value, (str, bytes, bytearray, Mapping, list, tuple, Set)): return len(value)
    raise TypeError(f"cannot get the length of {type(value).__name__}")


def char_length_of(value: Any) -> int:
    """Number of characters; UTF-8 byte strings are decoded first."""
    if isinstance(value, (bytes, bytearray)): return len(bytes(value).decode("utf-8", errors="replace"))
    if isinstance(value, str): return len(value)
    return length_of(value)


def as_string(value: Any) -> str:
    """String view of str / bytes values; TypeError for others."""
    if isinstance(value, str): return value
    if isinstance(value, (bytes, bytearray)): return bytes(value).decode("utf-8", errors="replace")
    raise TypeError("must be either a string or byte slice")
