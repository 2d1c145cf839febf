"""Repository binding.

Declare a repository as a subclass of ``DatastoreRepository[Entity]`` with
stub methods whose names follow the query grammar::

    class PersonRepository(DatastoreRepository[Person]):
        def find_by_age_greater_than(self, age: int) -> list[Person]: ...
        def count_by_city(self, city: str) -> int: ...
        def find_by_city(self, city: str) -> list[PersonName]: ...

`DatastoreRepositoryFactory.get_repository` compiles every stub into a
`PartTreeDatastoreQuery` when the repository is created, so an unsupported
method fails at startup instead of on first call. A ``list[Model]`` return
annotation naming a model other than the entity becomes the projection.
"""

import functools
import inspect
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Generic,
    List,
    Optional,
    Type,
    TypeVar,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel

from ..abc import DatastoreOperations
from ..constants import QUERY_PREFIXES
from ..exceptions import MappingError
from ..logger import Logger
from ..mapping import MappingContext
from ..method import QueryMethod
from ..utils import split_words
from .part_tree import PartTreeDatastoreQuery

__all__ = ("DatastoreRepository", "DatastoreRepositoryFactory", "is_query_method_name")

T = TypeVar("T")


class DatastoreRepository(Generic[T]):
    """Base class for declared repositories.

    The entity type is taken from the generic argument of the subclass.
    """

    entity_type: ClassVar[Optional[type]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in getattr(cls, "__orig_bases__", ()):
            if get_origin(base) is DatastoreRepository:
                args = get_args(base)
                if args and isinstance(args[0], type):
                    cls.entity_type = args[0]

    def __init__(self) -> None:
        self.queries: Dict[str, PartTreeDatastoreQuery] = {}


def is_query_method_name(name: str) -> bool:
    """Whether a public method name starts with a query prefix."""
    if name.startswith("_"):
        return False
    words = split_words(name)
    return bool(words) and words[0].key in QUERY_PREFIXES


class DatastoreRepositoryFactory:
    """Creates repository instances backed by name-derived queries.

    Args:
        datastore_operations: Executes the compiled queries
        mapping_context: Shared entity metadata cache; a new one is created
            when omitted
    """

    def __init__(
        self,
        datastore_operations: DatastoreOperations,
        mapping_context: Optional[MappingContext] = None,
    ) -> None:
        self.datastore_operations = datastore_operations
        self.mapping_context = mapping_context or MappingContext()
        self.logger = Logger(self.__class__.__name__)

    def get_repository(self, repository_type: Type[DatastoreRepository]) -> DatastoreRepository:
        entity_type = repository_type.entity_type
        if entity_type is None:
            raise MappingError(
                "Repository must declare its entity type, e.g. DatastoreRepository[Person]",
                repository=repository_type.__name__,
            )

        repository = repository_type()
        for name, stub in inspect.getmembers(repository_type, inspect.isfunction):
            if hasattr(DatastoreRepository, name) or not is_query_method_name(name):
                continue
            query_method = QueryMethod(name, entity_type, self._projection_for(stub, entity_type))
            query = PartTreeDatastoreQuery(query_method, self.datastore_operations, self.mapping_context)
            repository.queries[name] = query
            setattr(repository, name, self._bind(stub, query))

        self.logger.message(
            "Created %s with %d query methods for %s",
            repository_type.__name__,
            len(repository.queries),
            entity_type.__name__,
        )
        return repository

    @staticmethod
    def _projection_for(stub: Callable[..., Any], entity_type: type) -> Optional[type]:
        """Return the ``list[Model]`` element type when it is not the entity."""
        return_type = get_type_hints(stub).get("return")
        if get_origin(return_type) not in (list, List):
            return None
        args = get_args(return_type)
        if not args:
            return None
        element = args[0]
        if isinstance(element, type) and issubclass(element, BaseModel) and element is not entity_type:
            return element
        return None

    @staticmethod
    def _bind(stub: Callable[..., Any], query: PartTreeDatastoreQuery) -> Callable[..., Any]:
        signature = inspect.signature(stub)

        @functools.wraps(stub)
        def method(*args: Any, **kwargs: Any) -> Any:
            # Keyword arguments are placed in declaration order; a missing one
            # surfaces as TooFewArgumentsError from the query.
            bound = signature.bind_partial(None, *args, **kwargs)
            return query.execute(bound.args[1:])

        return method
