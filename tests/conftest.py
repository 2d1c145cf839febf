"""Pytest configuration and fixtures for partquery tests."""

from typing import Any, Iterable, List, Optional

import pytest
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from partquery.abc import DatastoreOperations
from partquery.dbs.memory import InMemoryDatastore
from partquery.mapping import MappingContext
from partquery.method import QueryMethod
from partquery.repository.part_tree import PartTreeDatastoreQuery
from partquery.structured import StructuredQuery

# Load environment variables
load_dotenv()


class Person(BaseModel):
    """Entity used across the query tests."""

    model_config = ConfigDict(populate_by_name=True)
    __kind__ = "Person"

    id: int
    name: str
    age: Optional[int] = None
    city: Optional[str] = None
    active: Optional[bool] = None
    email: Optional[str] = Field(None, alias="email_address")
    created_at: Optional[int] = None


class PersonName(BaseModel):
    """Projection exposing only the name."""

    name: str


class RecordingOperations(DatastoreOperations):
    """Operations double that records every query and returns canned results."""

    def __init__(self, results: Optional[Iterable[Any]] = None) -> None:
        self.results = results
        self.queries: List[StructuredQuery] = []
        self.entity_types: List[type] = []

    def query(self, query: StructuredQuery, entity_type: type) -> Optional[Iterable[Any]]:
        self.queries.append(query)
        self.entity_types.append(entity_type)
        return self.results

    @property
    def last_query(self) -> StructuredQuery:
        return self.queries[-1]


@pytest.fixture
def mapping_context():
    """Fresh entity metadata cache."""
    return MappingContext()


@pytest.fixture
def recording_operations():
    """Operations double with no canned results."""
    return RecordingOperations()


@pytest.fixture
def people():
    """Five people across Paris, Lyon and Berlin."""
    return [
        Person(id=1, name="Alice", age=34, city="Paris", active=True, email="alice@example.com"),
        Person(id=2, name="Bob", age=21, city="Paris"),
        Person(id=3, name="Carol", age=45, city="Lyon"),
        Person(id=4, name="Dave", age=19, city="Paris", active=False),
        Person(id=5, name="Eve", city="Berlin", active=True),
    ]


@pytest.fixture
def datastore(mapping_context, people):
    """In-memory datastore seeded with `people`."""
    store = InMemoryDatastore(mapping_context)
    store.save_all(people)
    return store


@pytest.fixture
def make_query(mapping_context):
    """Build a `PartTreeDatastoreQuery` for a method name against `Person`."""

    def _make(name: str, operations: DatastoreOperations, projection: Any = None) -> PartTreeDatastoreQuery:
        return PartTreeDatastoreQuery(QueryMethod(name, Person, projection), operations, mapping_context)

    return _make
