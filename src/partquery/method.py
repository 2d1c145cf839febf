"""Query method metadata."""

from typing import Any, Callable, List, Optional, Union

from pydantic import BaseModel

__all__ = ("QueryMethod",)

Projection = Union[type, Callable[[Any], Any]]


class QueryMethod:
    """A repository query method: its name, entity type and result projection.

    Args:
        name: Method name, parsed into the query (e.g. "findByAgeGreaterThan")
        entity_type: Entity type the query runs against
        projection: Optional view applied to each result. A pydantic model is
            built from the entity's attributes; any other callable is called
            with the entity. None, or the entity type itself, returns entities
            unchanged.
    """

    def __init__(self, name: str, entity_type: type, projection: Optional[Projection] = None) -> None:
        self.name = name
        self.entity_type = entity_type
        self.projection = None if projection is entity_type else projection

    @property
    def is_projecting(self) -> bool:
        return self.projection is not None

    def apply_projection(self, results: List[Any]) -> List[Any]:
        if self.projection is None:
            return results
        if isinstance(self.projection, type) and issubclass(self.projection, BaseModel):
            return [self.projection.model_validate(r, from_attributes=True) for r in results]
        return [self.projection(r) for r in results]

    def __repr__(self) -> str:
        return f"<QueryMethod {self.name} entity={self.entity_type.__name__}>"
