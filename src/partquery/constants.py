"""
Common constants shared by the parser, the query compiler and the datastores.
"""

from enum import Enum


class Direction(str, Enum):
    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


class ResultShape(str, Enum):
    """What a query method returns, decided once from its name."""

    COUNT = "count"
    EXISTS = "exists"
    ENTITY_LIST = "entity_list"


# Leading word of a query method name
QUERY_PREFIXES = frozenset(
    {"find", "read", "get", "query", "search", "stream", "count", "exists", "delete", "remove"}
)
COUNT_PREFIXES = frozenset({"count"})
EXISTS_PREFIXES = frozenset({"exists"})
DELETE_PREFIXES = frozenset({"delete", "remove"})
