"""
partquery compiles repository method names such as
``findByAgeGreaterThanAndActiveIsNull`` into structured datastore queries and
exposes the query compiler, the repository factory and an in-memory datastore.
"""

from .abc import DatastoreOperations
from .constants import Direction, ResultShape
from .dbs import InMemoryDatastore
from .mapping import EntityMetadata, MappingContext
from .method import QueryMethod
from .parser import PartTree, PartType
from .repository import DatastoreRepository, DatastoreRepositoryFactory, PartTreeDatastoreQuery
from .structured import StructuredQuery

__version__ = "0.1.0"

__all__ = [
    "DatastoreOperations",
    "DatastoreRepository",
    "DatastoreRepositoryFactory",
    "Direction",
    "EntityMetadata",
    "InMemoryDatastore",
    "MappingContext",
    "PartTree",
    "PartTreeDatastoreQuery",
    "PartType",
    "QueryMethod",
    "ResultShape",
    "StructuredQuery",
]
