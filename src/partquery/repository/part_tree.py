"""Name-derived queries.

`PartTreeDatastoreQuery` compiles a method name such as
``findByAgeGreaterThanAndActiveIsNull`` into a `StructuredQuery`:

- construction parses the name once and rejects shapes the datastore cannot
  run (delete, distinct, OR predicates, unsupported operators);
- every call binds its arguments positionally, in clause order, builds a fresh
  query, executes it and shapes the result as a count, an existence check or
  a (projected) entity list.

Only AND-combined predicates are supported. Supported operators:

=====================  =====================  =========
Part type              Filter                 Arguments
=====================  =====================  =========
IS_NULL                field = null           0
IS_EMPTY               field = null           0
SIMPLE_PROPERTY        field = value          1
GREATER_THAN_EQUAL     field >= value         1
GREATER_THAN           field > value          1
LESS_THAN_EQUAL        field <= value         1
LESS_THAN              field < value          1
=====================  =====================  =========
"""

from typing import Any, Callable, Dict, Iterator, List, Sequence, Tuple

from ..abc import DatastoreOperations
from ..constants import ResultShape
from ..exceptions import TooFewArgumentsError, UnsupportedPredicateOperatorError, UnsupportedQueryShapeError
from ..mapping import MappingContext
from ..method import QueryMethod
from ..parser import Part, PartTree, PartType
from ..structured import CompositeFilter, Filter, OrderBy, PropertyFilter, StructuredQuery
from ..types import QueryArguments, QueryResult
from ..values import wrap_value
from .base import AbstractDatastoreQuery

__all__ = ("ArgumentCursor", "PartTreeDatastoreQuery", "SUPPORTED_PART_TYPES")

# IS_EMPTY has no stronger primitive on the datastore, so it filters on null too.
_NULL_CHECKS = frozenset({PartType.IS_NULL, PartType.IS_EMPTY})

_COMPARISONS: Dict[PartType, Callable[[str, Any], PropertyFilter]] = {
    PartType.SIMPLE_PROPERTY: PropertyFilter.eq,
    PartType.GREATER_THAN_EQUAL: PropertyFilter.ge,
    PartType.GREATER_THAN: PropertyFilter.gt,
    PartType.LESS_THAN_EQUAL: PropertyFilter.le,
    PartType.LESS_THAN: PropertyFilter.lt,
}

SUPPORTED_PART_TYPES = _NULL_CHECKS | frozenset(_COMPARISONS)


class ArgumentCursor:
    """Single-pass, in-order consumption of one call's arguments."""

    def __init__(self, arguments: Sequence[Any], method_name: str) -> None:
        self._iterator: Iterator[Any] = iter(arguments)
        self._method_name = method_name
        self.consumed = 0

    def next(self) -> Any:
        """Return the next argument.

        Raises:
            TooFewArgumentsError: If every argument has been consumed
        """
        try:
            value = next(self._iterator)
        except StopIteration:
            raise TooFewArgumentsError(
                f"Too few parameters are provided for query method: {self._method_name}",
                method_name=self._method_name,
                consumed=self.consumed,
            ) from None
        self.consumed += 1
        return value


class PartTreeDatastoreQuery(AbstractDatastoreQuery):
    """Query method implementation derived from the method name.

    Args:
        query_method: Method name, entity type and projection
        datastore_operations: Executes the compiled queries
        mapping_context: Supplies the kind and field names of the entity

    Raises:
        InvalidMethodNameError: If the name does not parse
        UnsupportedQueryShapeError: For delete, distinct or OR queries
        UnsupportedPredicateOperatorError: For operators outside the supported set
    """

    def __init__(
        self,
        query_method: QueryMethod,
        datastore_operations: DatastoreOperations,
        mapping_context: MappingContext,
    ) -> None:
        super().__init__(query_method, datastore_operations, mapping_context)
        self.tree = PartTree(query_method.name)
        self.entity_metadata = mapping_context.get_persistent_entity(self.entity_type)

        if self.tree.is_delete:
            raise UnsupportedQueryShapeError(
                f"Delete queries are not supported in the datastore: {query_method.name}",
                method_name=query_method.name,
            )
        if self.tree.is_distinct:
            raise UnsupportedQueryShapeError(
                "Datastore structured queries do not support the Distinct keyword",
                method_name=query_method.name,
            )
        if len(self.tree.or_parts) > 1:
            raise UnsupportedQueryShapeError(
                "The datastore only supports multiple filters combined with AND",
                method_name=query_method.name,
            )

        self.filter_parts: Tuple[Part, ...] = self.tree.or_parts[0].parts if self.tree.has_predicate else ()
        for part in self.filter_parts:
            if part.type not in SUPPORTED_PART_TYPES:
                raise UnsupportedPredicateOperatorError(
                    "Only equals, greater-than-or-equals, greater-than, less-than-or-equals, "
                    "less-than, is-null and is-empty are supported filters",
                    method_name=query_method.name,
                    property_name=part.property,
                    operator=part.type.name,
                )

        self.result_shape = self._result_shape()
        self.logger.message(
            "Bound query method %s: kind=%s filters=%d shape=%s",
            query_method.name,
            self.entity_metadata.kind_name,
            len(self.filter_parts),
            self.result_shape.value,
        )

    def _result_shape(self) -> ResultShape:
        if self.tree.is_count_projection:
            return ResultShape.COUNT
        if self.tree.is_exists_projection:
            return ResultShape.EXISTS
        return ResultShape.ENTITY_LIST

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def execute(self, parameters: QueryArguments = ()) -> QueryResult:
        results = self.execute_raw_result(parameters)
        if self.result_shape == ResultShape.COUNT:
            return len(results)
        if self.result_shape == ResultShape.EXISTS:
            return bool(results)
        return self.query_method.apply_projection(results)

    def execute_raw_result(self, parameters: QueryArguments = ()) -> List[Any]:
        found = self.datastore_operations.query(self.build_query(parameters), self.entity_type)
        return [] if found is None else list(found)

    # ------------------------------------------------------------------
    # Query building
    # ------------------------------------------------------------------
    def build_query(self, parameters: QueryArguments = ()) -> StructuredQuery:
        """Compile the query for one call's arguments."""
        builder = StructuredQuery.new_entity_query_builder()
        builder.set_kind(self.entity_metadata.kind_name)

        if self.filter_parts:
            builder.set_filter(self._build_filter(parameters))

        if not self.tree.sort.is_unsorted:
            builder.set_order_by(*self._build_order_by())

        if self.tree.is_limiting:
            builder.set_limit(self.tree.max_results)

        query = builder.build()
        self.logger.query(self.query_method.name, query)
        return query

    def _build_order_by(self) -> List[OrderBy]:
        orders = []
        for order in self.tree.sort.orders:
            field_name = self.entity_metadata.field_name(order.property)
            orders.append(OrderBy.asc(field_name) if order.is_ascending else OrderBy.desc(field_name))
        return orders

    def _build_filter(self, parameters: QueryArguments) -> Filter:
        cursor = ArgumentCursor(parameters, self.query_method.name)
        filters = [self._filter_for(part, cursor) for part in self.filter_parts]
        if len(filters) > 1:
            return CompositeFilter.and_(*filters)
        return filters[0]

    def _filter_for(self, part: Part, cursor: ArgumentCursor) -> PropertyFilter:
        field_name = self.entity_metadata.field_name(part.property)
        if part.type in _NULL_CHECKS:
            return PropertyFilter.is_null(field_name)
        return _COMPARISONS[part.type](field_name, wrap_value(cursor.next()))
