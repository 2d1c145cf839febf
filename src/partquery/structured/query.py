"""Structured query and its builder.

`StructuredQuery` is the in-memory form handed to `DatastoreOperations.query`:
kind, optional filter, ordered sort keys and optional limit. It is frozen; a
fresh `QueryBuilder` assembles one per invocation.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..constants import Direction
from .filters import Filter

__all__ = ("OrderBy", "StructuredQuery", "QueryBuilder")


class OrderBy(BaseModel):
    model_config = ConfigDict(frozen=True)

    property: str
    direction: Direction

    @classmethod
    def asc(cls, field: str) -> OrderBy:
        return cls(property=field, direction=Direction.ASCENDING)

    @classmethod
    def desc(cls, field: str) -> OrderBy:
        return cls(property=field, direction=Direction.DESCENDING)

    def to_dict(self) -> Dict[str, Any]:
        return {"property": {"name": self.property}, "direction": self.direction.value}


class StructuredQuery(BaseModel):
    """An executable entity query.

    Attributes:
        kind: Entity kind to query
        filter: Single property filter or AND composite, None for no filter
        order_by: Sort keys, primary first
        limit: Maximum number of results, None for unlimited
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    filter: Optional[Filter] = None
    order_by: Tuple[OrderBy, ...] = ()
    limit: Optional[int] = None

    @classmethod
    def new_entity_query_builder(cls) -> QueryBuilder:
        return QueryBuilder()

    def to_dict(self) -> Dict[str, Any]:
        """Render in the datastore REST representation, for logs and debugging."""
        body: Dict[str, Any] = {"kind": [{"name": self.kind}]}
        if self.filter is not None:
            body["filter"] = self.filter.to_dict()
        if self.order_by:
            body["order"] = [o.to_dict() for o in self.order_by]
        if self.limit is not None:
            body["limit"] = self.limit
        return body


class QueryBuilder:
    """Mutable builder for a single `StructuredQuery`.

    Setters return the builder so calls can be chained.
    """

    def __init__(self) -> None:
        self._kind: Optional[str] = None
        self._filter: Optional[Filter] = None
        self._order_by: Tuple[OrderBy, ...] = ()
        self._limit: Optional[int] = None

    def set_kind(self, kind: str) -> QueryBuilder:
        self._kind = kind
        return self

    def set_filter(self, filter: Filter) -> QueryBuilder:
        self._filter = filter
        return self

    def set_order_by(self, first: OrderBy, *others: OrderBy) -> QueryBuilder:
        """Replace the sort keys; ``first`` is the primary key."""
        self._order_by = (first, *others)
        return self

    def set_limit(self, limit: int) -> QueryBuilder:
        self._limit = limit
        return self

    def build(self) -> StructuredQuery:
        if self._kind is None:
            raise ValueError("Query kind must be set before build()")
        return StructuredQuery(kind=self._kind, filter=self._filter, order_by=self._order_by, limit=self._limit)
