"""Abstract interfaces for datastore backends."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Type, TypeVar

from .structured import StructuredQuery

T = TypeVar("T")


class DatastoreOperations(ABC):
    """Executes structured queries against a datastore.

    Implementations map stored records back to the requested entity type.
    Errors raised by the backend propagate to the caller unchanged.
    """

    @abstractmethod
    def query(self, query: StructuredQuery, entity_type: Type[T]) -> Optional[Iterable[T]]:
        """Run a structured query.

        Args:
            query: Kind, filter, sort and limit to execute
            entity_type: Type each matching record is mapped to

        Returns:
            Matching entities in query order, or None when nothing matched
        """
        raise NotImplementedError
