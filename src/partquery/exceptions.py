"""Custom exceptions for partquery.

Every failure raised while binding or executing a name-derived query derives
from `PartQueryError`. Construction-time errors stop a repository method from
ever becoming callable; call-time errors surface once per invocation.
"""

from typing import Any, Dict


# Base exception
class PartQueryError(Exception):
    """Base exception for all partquery errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., method_name, property_name, kind)
        """
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message with details."""
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Method name exceptions
class InvalidMethodNameError(PartQueryError):
    """Raised when a method name does not follow the query method grammar.

    Example:
        >>> raise InvalidMethodNameError("Unknown query prefix", method_name="fetchByAge")
    """


class UnsupportedQueryShapeError(PartQueryError):
    """Raised at construction when the query shape cannot run on the datastore.

    Delete queries, distinct queries and predicates with more than one
    OR-group are rejected.

    Example:
        >>> raise UnsupportedQueryShapeError("Delete queries are not supported", method_name="deleteByAge")
    """


class UnsupportedPredicateOperatorError(PartQueryError):
    """Raised when a predicate uses an operator the datastore cannot filter on.

    Example:
        >>> raise UnsupportedPredicateOperatorError("Unsupported operator", operator="LIKE", property_name="name")
    """


# Argument exceptions
class TooFewArgumentsError(PartQueryError):
    """Raised when a call supplies fewer arguments than the predicate consumes.

    Example:
        >>> raise TooFewArgumentsError("Too few parameters", method_name="findByAgeGreaterThan")
    """

    @property
    def method_name(self) -> Any:
        return self.details.get("method_name")


class UnsupportedValueTypeError(PartQueryError):
    """Raised when an argument cannot be converted to a datastore value.

    Example:
        >>> raise UnsupportedValueTypeError("Unable to convert value", value_type="set")
    """


# Mapping exceptions
class MappingError(PartQueryError):
    """Raised when a class cannot be described as a datastore entity.

    Example:
        >>> raise MappingError("Not a pydantic model", entity_type="Person")
    """


class PropertyNotFoundError(MappingError):
    """Raised when a property name does not exist on the target entity.

    Example:
        >>> raise PropertyNotFoundError("No such property", property_name="nickname", kind="Person")
    """
