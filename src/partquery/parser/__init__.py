"""Method-name grammar.

Exports `PartTree` and its building blocks. The parser recognizes the full
keyword set; which operators a datastore can execute is decided by the query
compiler in `partquery.repository`.
"""

from .part import OrPart, Part, PartType
from .tree import Order, PartTree, Sort

__all__ = ("OrPart", "Order", "Part", "PartTree", "PartType", "Sort")
