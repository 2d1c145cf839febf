from .base import AbstractDatastoreQuery
from .factory import DatastoreRepository, DatastoreRepositoryFactory, is_query_method_name
from .part_tree import SUPPORTED_PART_TYPES, ArgumentCursor, PartTreeDatastoreQuery

__all__ = (
    "AbstractDatastoreQuery",
    "ArgumentCursor",
    "DatastoreRepository",
    "DatastoreRepositoryFactory",
    "PartTreeDatastoreQuery",
    "SUPPORTED_PART_TYPES",
    "is_query_method_name",
)
