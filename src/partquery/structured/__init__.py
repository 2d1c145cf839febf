"""Structured query module.

Exports the native query representation produced by the query compiler and
consumed by `DatastoreOperations` implementations.
"""

from .filters import CompositeFilter, Filter, PropertyFilter, PropertyOperator
from .query import OrderBy, QueryBuilder, StructuredQuery

__all__ = (
    "CompositeFilter",
    "Filter",
    "OrderBy",
    "PropertyFilter",
    "PropertyOperator",
    "QueryBuilder",
    "StructuredQuery",
)
