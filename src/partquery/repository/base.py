"""Base class for repository queries."""

from abc import ABC, abstractmethod
from typing import Any, List

from ..abc import DatastoreOperations
from ..logger import Logger
from ..mapping import MappingContext
from ..method import QueryMethod
from ..types import QueryArguments, QueryResult

__all__ = ("AbstractDatastoreQuery",)


class AbstractDatastoreQuery(ABC):
    """A query bound to one repository method.

    Args:
        query_method: Metadata of the method this query implements
        datastore_operations: Executes the structured queries
        mapping_context: Supplies entity metadata for the target type
    """

    def __init__(
        self,
        query_method: QueryMethod,
        datastore_operations: DatastoreOperations,
        mapping_context: MappingContext,
    ) -> None:
        self.query_method = query_method
        self.datastore_operations = datastore_operations
        self.mapping_context = mapping_context
        self.entity_type = query_method.entity_type
        self.logger = Logger(self.__class__.__name__)

    @abstractmethod
    def execute(self, parameters: QueryArguments = ()) -> QueryResult:
        """Run the query with the call's arguments and shape the result."""
        raise NotImplementedError

    @abstractmethod
    def execute_raw_result(self, parameters: QueryArguments = ()) -> List[Any]:
        """Run the query and return the matching entities as a list."""
        raise NotImplementedError
