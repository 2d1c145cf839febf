"""Type aliases for partquery.

Reusable type definitions shared by the compiler, the repository factory and
the datastores.
"""

from typing import Any, Sequence, Union

# Positional arguments of one query method call
QueryArguments = Sequence[Any]

# Anything `execute` can return
QueryResult = Union[int, bool, list]
