"""Datastore value adapter.

Query arguments arrive as plain Python objects. Before they are embedded in a
filter they are wrapped into a typed `Value`, the datastore's native value
representation. `wrap_value` is the single conversion point.
"""

import base64
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from .exceptions import UnsupportedValueTypeError

__all__ = ("ValueType", "Value", "wrap_value")


class ValueType(str, Enum):
    NULL = "NULL"
    BOOLEAN = "BOOLEAN"
    LONG = "LONG"
    DOUBLE = "DOUBLE"
    STRING = "STRING"
    BLOB = "BLOB"
    TIMESTAMP = "TIMESTAMP"
    ENTITY = "ENTITY"
    LIST = "LIST"


NUMERIC_TYPES = frozenset({ValueType.LONG, ValueType.DOUBLE})


class Value(BaseModel):
    """A typed datastore value.

    ENTITY values hold a dict of nested `Value`s and LIST values a tuple of
    them; every other type holds the plain Python object.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: ValueType
    value: Any = None

    @property
    def is_null(self) -> bool:
        return self.type == ValueType.NULL

    def get(self) -> Any:
        """Return the plain Python object, unwrapping nested values."""
        if self.type == ValueType.ENTITY:
            return {k: v.get() for k, v in self.value.items()}
        if self.type == ValueType.LIST:
            return [v.get() for v in self.value]
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """Render in the datastore REST representation (debugging only)."""
        if self.type == ValueType.NULL:
            return {"nullValue": None}
        if self.type == ValueType.BOOLEAN:
            return {"booleanValue": self.value}
        if self.type == ValueType.LONG:
            return {"integerValue": str(self.value)}
        if self.type == ValueType.DOUBLE:
            return {"doubleValue": self.value}
        if self.type == ValueType.STRING:
            return {"stringValue": self.value}
        if self.type == ValueType.BLOB:
            return {"blobValue": base64.b64encode(self.value).decode("ascii")}
        if self.type == ValueType.TIMESTAMP:
            return {"timestampValue": self.value.isoformat()}
        if self.type == ValueType.ENTITY:
            return {"entityValue": {"properties": {k: v.to_dict() for k, v in self.value.items()}}}
        return {"arrayValue": {"values": [v.to_dict() for v in self.value]}}


def wrap_value(obj: Any) -> Value:
    """Convert a Python object into a datastore `Value`.

    Args:
        obj: Query argument or stored property value

    Returns:
        The wrapped value; an existing `Value` is returned unchanged

    Raises:
        UnsupportedValueTypeError: If the object has no datastore representation
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return Value(type=ValueType.NULL)
    # bool is a subclass of int
    if isinstance(obj, bool):
        return Value(type=ValueType.BOOLEAN, value=obj)
    if isinstance(obj, int):
        return Value(type=ValueType.LONG, value=obj)
    if isinstance(obj, float):
        return Value(type=ValueType.DOUBLE, value=obj)
    if isinstance(obj, str):
        return Value(type=ValueType.STRING, value=obj)
    if isinstance(obj, (bytes, bytearray)):
        return Value(type=ValueType.BLOB, value=bytes(obj))
    if isinstance(obj, datetime):
        # Timestamps are UTC; naive datetimes are read as UTC
        if obj.tzinfo is None:
            return Value(type=ValueType.TIMESTAMP, value=obj.replace(tzinfo=timezone.utc))
        return Value(type=ValueType.TIMESTAMP, value=obj.astimezone(timezone.utc))
    if isinstance(obj, dict):
        return Value(type=ValueType.ENTITY, value={str(k): wrap_value(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return Value(type=ValueType.LIST, value=tuple(wrap_value(v) for v in obj))
    raise UnsupportedValueTypeError(
        f"Unable to convert {type(obj).__name__} to a datastore supported type",
        value_type=type(obj).__name__,
    )
