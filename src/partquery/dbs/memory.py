"""In-memory datastore.

This module provides `InMemoryDatastore`, a `DatastoreOperations`
implementation that keeps records per kind in process memory and evaluates
structured queries with datastore semantics.

Key Features:
    - Records keyed by storage field names, mapped through `EntityMetadata`
    - Filters never match records that lack the filtered property
    - Comparisons only match values of the same value type (LONG and DOUBLE
      compare as numbers); equality with a list value matches any element
    - Ordering skips records missing a sort property and ranks values by type
    - Limit applied after filtering and ordering
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from partquery.abc import DatastoreOperations
from partquery.constants import Direction
from partquery.logger import Logger
from partquery.mapping import MappingContext
from partquery.structured import CompositeFilter, Filter, PropertyOperator, StructuredQuery
from partquery.values import NUMERIC_TYPES, Value, ValueType, wrap_value

T = TypeVar("T")

# Cross-type sort order; numbers share one rank
_TYPE_RANK = {
    ValueType.NULL: 0,
    ValueType.LONG: 1,
    ValueType.DOUBLE: 1,
    ValueType.TIMESTAMP: 2,
    ValueType.BOOLEAN: 3,
    ValueType.BLOB: 4,
    ValueType.STRING: 5,
    ValueType.ENTITY: 6,
    ValueType.LIST: 7,
}
_ORDERABLE = frozenset(
    {ValueType.LONG, ValueType.DOUBLE, ValueType.TIMESTAMP, ValueType.BOOLEAN, ValueType.BLOB, ValueType.STRING}
)


def _same_family(a: Value, b: Value) -> bool:
    if a.type in NUMERIC_TYPES and b.type in NUMERIC_TYPES:
        return True
    return a.type == b.type


def _compare(stored: Value, operator: PropertyOperator, target: Value) -> bool:
    if stored.type == ValueType.LIST:
        return any(_compare(element, operator, target) for element in stored.value)
    if operator == PropertyOperator.EQUAL:
        return _same_family(stored, target) and stored.get() == target.get()
    if not _same_family(stored, target) or stored.type not in _ORDERABLE:
        return False
    left, right = stored.get(), target.get()
    if operator == PropertyOperator.GREATER_THAN:
        return left > right
    if operator == PropertyOperator.GREATER_THAN_OR_EQUAL:
        return left >= right
    if operator == PropertyOperator.LESS_THAN:
        return left < right
    return left <= right


def matches(filter: Filter, record: Dict[str, Any]) -> bool:
    """Evaluate a filter against one stored record."""
    if isinstance(filter, CompositeFilter):
        return all(matches(child, record) for child in filter.filters)
    if filter.property not in record:
        return False
    return _compare(wrap_value(record[filter.property]), filter.operator, filter.value)


def _sort_key(raw: Any) -> Tuple[int, Any]:
    value = wrap_value(raw)
    if value.type in _ORDERABLE:
        return _TYPE_RANK[value.type], value.get()
    return _TYPE_RANK[value.type], 0


class InMemoryDatastore(DatastoreOperations):
    """Datastore that keeps entities in process memory.

    Attributes:
        mapping_context: Entity metadata used to store and load records
    """

    def __init__(self, mapping_context: Optional[MappingContext] = None) -> None:
        self.mapping_context = mapping_context or MappingContext()
        self._kinds: Dict[str, List[Dict[str, Any]]] = {}
        self.logger = Logger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save(self, entity: BaseModel) -> BaseModel:
        metadata = self.mapping_context.get_persistent_entity(type(entity))
        self._kinds.setdefault(metadata.kind_name, []).append(metadata.to_storage(entity))
        return entity

    def save_all(self, entities: Iterable[BaseModel]) -> List[BaseModel]:
        saved = [self.save(e) for e in entities]
        self.logger.debug("Saved %d entities", len(saved))
        return saved

    def count(self, kind: Optional[str] = None) -> int:
        if kind is not None:
            return len(self._kinds.get(kind, ()))
        return sum(len(records) for records in self._kinds.values())

    def clear(self) -> None:
        self._kinds.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def query(self, query: StructuredQuery, entity_type: Type[T]) -> Optional[List[T]]:
        records = list(self._kinds.get(query.kind, ()))
        if query.filter is not None:
            records = [r for r in records if matches(query.filter, r)]

        # Stable sorts applied from the last key to the primary key
        for order in reversed(query.order_by):
            records = [r for r in records if order.property in r]
            records.sort(
                key=lambda r, field=order.property: _sort_key(r[field]),
                reverse=order.direction == Direction.DESCENDING,
            )

        if query.limit is not None:
            records = records[: query.limit]

        self.logger.debug("Query on kind %s matched %d records", query.kind, len(records))
        metadata = self.mapping_context.get_persistent_entity(entity_type)
        return [metadata.from_storage(r) for r in records]
