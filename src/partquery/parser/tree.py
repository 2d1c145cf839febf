"""Method-name parser.

`PartTree` decomposes a repository method name into its subject (prefix,
``Distinct``, ``First``/``Top`` limits), its predicate (OR-groups of AND-ed
parts) and its ordering. The tree is built once and never mutated.

Example:
    tree = PartTree("findTop3ByAgeGreaterThanAndActiveIsNullOrderByNameDesc")
    tree.or_parts[0].parts   -> (age GREATER_THAN, active IS_NULL)
    tree.sort.orders         -> (name DESCENDING,)
    tree.max_results         -> 3
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from ..constants import COUNT_PREFIXES, DELETE_PREFIXES, EXISTS_PREFIXES, QUERY_PREFIXES, Direction
from ..exceptions import InvalidMethodNameError
from ..utils import NameStyle, Word, detect_style, join_property, split_on, split_words
from .part import OrPart, Part

__all__ = ("Order", "Sort", "PartTree")

_DIRECTIONS = {"asc": Direction.ASCENDING, "desc": Direction.DESCENDING}
_LIMIT_KEYWORDS = ("first", "top")


class Order(BaseModel):
    """A single sort key: a logical property and its direction."""

    model_config = ConfigDict(frozen=True)

    property: str
    direction: Direction = Direction.ASCENDING

    @property
    def is_ascending(self) -> bool:
        return self.direction == Direction.ASCENDING


class Sort(BaseModel):
    """Ordered sort keys; the first one is the primary key."""

    model_config = ConfigDict(frozen=True)

    orders: Tuple[Order, ...] = ()

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    @property
    def is_unsorted(self) -> bool:
        return not self.orders


class PartTree:
    """Parsed representation of a query method name.

    Attributes:
        source: The method name this tree was parsed from
        or_parts: OR-groups of predicate parts, in source order
        sort: Sort keys from the ``OrderBy`` clause
        max_results: Limit from ``First``/``Top``, or None
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self._style: NameStyle = detect_style(source)
        words = split_words(source)
        if not words or words[0].key not in QUERY_PREFIXES:
            raise InvalidMethodNameError(
                f"Method name must start with one of {sorted(QUERY_PREFIXES)}",
                method_name=source,
            )

        self._prefix = words[0].key
        subject, predicate = self._split_subject(words[1:])
        self._distinct = any(w.key == "distinct" for w in subject)
        self.max_results: Optional[int] = self._parse_limit(subject)

        predicate, order_words = self._split_order_by(predicate)
        self.or_parts: Tuple[OrPart, ...] = self._parse_predicate(predicate)
        self.sort: Sort = self._parse_sort(order_words) if order_words is not None else Sort.unsorted()

    # ------------------------------------------------------------------
    # Flags
    # ------------------------------------------------------------------
    @property
    def is_count_projection(self) -> bool:
        return self._prefix in COUNT_PREFIXES

    @property
    def is_exists_projection(self) -> bool:
        return self._prefix in EXISTS_PREFIXES

    @property
    def is_delete(self) -> bool:
        return self._prefix in DELETE_PREFIXES

    @property
    def is_distinct(self) -> bool:
        return self._distinct

    @property
    def is_limiting(self) -> bool:
        return self.max_results is not None

    @property
    def has_predicate(self) -> bool:
        return bool(self.or_parts)

    @property
    def parts(self) -> Iterator[Part]:
        """All parts across every OR-group, in source order."""
        for or_part in self.or_parts:
            yield from or_part.parts

    def __repr__(self) -> str:
        groups = " OR ".join("(" + " AND ".join(str(p) for p in g.parts) + ")" for g in self.or_parts)
        return f"<PartTree {self.source!r}: {groups or '-'} sort={[(o.property, o.direction.value) for o in self.sort.orders]}>"

    # ------------------------------------------------------------------
    # Parsing helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _split_subject(words: Sequence[Word]) -> Tuple[List[Word], List[Word]]:
        """Split on the first ``By``; without one the whole name is subject."""
        for index, word in enumerate(words):
            if word.key == "by":
                return list(words[:index]), list(words[index + 1 :])
        return list(words), []

    @staticmethod
    def _parse_limit(subject: Sequence[Word]) -> Optional[int]:
        """``First``/``Top`` only count directly after the prefix or ``Distinct``."""
        words = list(subject)
        if words and words[0].key == "distinct":
            words = words[1:]
        if not words or words[0].key not in _LIMIT_KEYWORDS:
            return None
        if len(words) > 1 and words[1].text.isdigit():
            return int(words[1].text)
        return 1

    def _split_order_by(self, words: Sequence[Word]) -> Tuple[List[Word], Optional[List[Word]]]:
        positions = [
            i for i in range(len(words) - 1) if words[i].key == "order" and words[i + 1].key == "by"
        ]
        if not positions:
            return list(words), None
        if len(positions) > 1:
            raise InvalidMethodNameError("OrderBy must not be used more than once", method_name=self.source)
        at = positions[0]
        return list(words[:at]), list(words[at + 2 :])

    def _parse_predicate(self, words: Sequence[Word]) -> Tuple[OrPart, ...]:
        if not words:
            return ()
        or_parts = []
        for group in split_on(words, "or"):
            clauses = split_on(group, "and")
            if any(not clause for clause in clauses):
                raise InvalidMethodNameError("Dangling And/Or in predicate", method_name=self.source)
            or_parts.append(OrPart(parts=tuple(Part.from_words(c, self._style, self.source) for c in clauses)))
        return tuple(or_parts)

    def _parse_sort(self, words: Sequence[Word]) -> Sort:
        orders: List[Order] = []
        pending: List[Word] = []
        for word in words:
            direction = _DIRECTIONS.get(word.key)
            if direction is None:
                pending.append(word)
                continue
            if not pending:
                raise InvalidMethodNameError("Sort direction without a property", method_name=self.source)
            orders.append(Order(property=join_property(pending, self._style), direction=direction))
            pending = []
        if pending:
            orders.append(Order(property=join_property(pending, self._style)))
        if not orders:
            raise InvalidMethodNameError("OrderBy requires at least one property", method_name=self.source)
        return Sort(orders=tuple(orders))
