"""Entity metadata.

`EntityMetadata` is the lookup table from logical property names to storage
field names for one entity type, built once from a pydantic model:

- the kind is the ``__kind__`` class attribute, or the class name;
- a field's storage name is its pydantic ``alias``, or the attribute name.

`MappingContext` caches one `EntityMetadata` per entity type.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Type

from pydantic import BaseModel

from .exceptions import MappingError, PropertyNotFoundError

__all__ = ("EntityMetadata", "MappingContext")


class EntityMetadata:
    def __init__(self, entity_type: type) -> None:
        if not (isinstance(entity_type, type) and issubclass(entity_type, BaseModel)):
            raise MappingError(
                "Entity types must be pydantic models",
                entity_type=getattr(entity_type, "__name__", repr(entity_type)),
            )
        self.entity_type: Type[BaseModel] = entity_type
        self.kind_name: str = getattr(entity_type, "__kind__", None) or entity_type.__name__
        self._field_names: Mapping[str, str] = MappingProxyType(
            {name: info.alias or name for name, info in entity_type.model_fields.items()}
        )

    @property
    def property_names(self) -> Mapping[str, str]:
        """Read-only view of property name -> storage field name."""
        return self._field_names

    def field_name(self, property_name: str) -> str:
        """Return the storage field name for a logical property.

        Raises:
            PropertyNotFoundError: If the entity has no such property
        """
        try:
            return self._field_names[property_name]
        except KeyError:
            raise PropertyNotFoundError(
                f"No property {property_name!r} found on {self.entity_type.__name__}",
                property_name=property_name,
                kind=self.kind_name,
            ) from None

    def to_storage(self, entity: BaseModel) -> Dict[str, Any]:
        """Dump an entity keyed by storage field names."""
        if not isinstance(entity, self.entity_type):
            raise MappingError(
                f"Expected {self.entity_type.__name__}, got {type(entity).__name__}",
                kind=self.kind_name,
            )
        return entity.model_dump(by_alias=True)

    def from_storage(self, data: Mapping[str, Any]) -> BaseModel:
        """Build an entity from a record keyed by storage field names."""
        return self.entity_type.model_validate(dict(data))

    def __repr__(self) -> str:
        return f"<EntityMetadata kind={self.kind_name!r} fields={dict(self._field_names)}>"


class MappingContext:
    """Cache of `EntityMetadata`, one per entity type."""

    def __init__(self) -> None:
        self._entities: Dict[type, EntityMetadata] = {}

    def get_persistent_entity(self, entity_type: type) -> EntityMetadata:
        metadata = self._entities.get(entity_type)
        if metadata is None:
            metadata = self._entities.setdefault(entity_type, EntityMetadata(entity_type))
        return metadata
