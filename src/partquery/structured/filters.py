"""Filter nodes of a structured query.

A filter is either a `PropertyFilter` (one field compared against one wrapped
value) or a `CompositeFilter` (an AND of child filters, kept in order).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..values import Value, wrap_value

__all__ = ("PropertyOperator", "PropertyFilter", "CompositeFilter", "Filter")


class PropertyOperator(str, Enum):
    EQUAL = "EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"


class PropertyFilter(BaseModel):
    """Compare one storage field against a datastore value."""

    model_config = ConfigDict(frozen=True)

    property: str
    operator: PropertyOperator
    value: Value

    @classmethod
    def eq(cls, field: str, value: Any) -> PropertyFilter:
        return cls(property=field, operator=PropertyOperator.EQUAL, value=wrap_value(value))

    @classmethod
    def gt(cls, field: str, value: Any) -> PropertyFilter:
        return cls(property=field, operator=PropertyOperator.GREATER_THAN, value=wrap_value(value))

    @classmethod
    def ge(cls, field: str, value: Any) -> PropertyFilter:
        return cls(property=field, operator=PropertyOperator.GREATER_THAN_OR_EQUAL, value=wrap_value(value))

    @classmethod
    def lt(cls, field: str, value: Any) -> PropertyFilter:
        return cls(property=field, operator=PropertyOperator.LESS_THAN, value=wrap_value(value))

    @classmethod
    def le(cls, field: str, value: Any) -> PropertyFilter:
        return cls(property=field, operator=PropertyOperator.LESS_THAN_OR_EQUAL, value=wrap_value(value))

    @classmethod
    def is_null(cls, field: str) -> PropertyFilter:
        """Field equals null."""
        return cls.eq(field, None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "propertyFilter": {
                "property": {"name": self.property},
                "op": self.operator.value,
                "value": self.value.to_dict(),
            }
        }


class CompositeFilter(BaseModel):
    """Conjunction of child filters, in the order they were given."""

    model_config = ConfigDict(frozen=True)

    operator: str = "AND"
    filters: Tuple[Filter, ...]

    @classmethod
    def and_(cls, first: Filter, *others: Filter) -> CompositeFilter:
        return cls(filters=(first, *others))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "compositeFilter": {
                "op": self.operator,
                "filters": [f.to_dict() for f in self.filters],
            }
        }


Filter = Union[PropertyFilter, CompositeFilter]

CompositeFilter.model_rebuild()
