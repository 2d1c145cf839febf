"""Predicate parts.

A `Part` is one clause of a method-name predicate, such as ``AgeGreaterThan``:
a property name plus the operator its trailing keyword selects.
"""

from enum import Enum
from typing import List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from ..exceptions import InvalidMethodNameError
from ..utils import NameStyle, Word, ends_with, join_property

__all__ = ("PartType", "Part", "OrPart")


class PartType(Enum):
    """Predicate operators recognized in method names.

    Each member carries the number of arguments it consumes and the keyword
    spellings (lowercase word sequences) that select it.
    """

    IS_NOT_NULL = (0, ("is not null", "not null"))
    IS_NULL = (0, ("is null", "null"))
    BETWEEN = (2, ("is between", "between"))
    LESS_THAN = (1, ("is less than", "less than"))
    LESS_THAN_EQUAL = (1, ("is less than equal", "less than equal"))
    GREATER_THAN = (1, ("is greater than", "greater than"))
    GREATER_THAN_EQUAL = (1, ("is greater than equal", "greater than equal"))
    BEFORE = (1, ("is before", "before"))
    AFTER = (1, ("is after", "after"))
    NOT_LIKE = (1, ("is not like", "not like"))
    LIKE = (1, ("is like", "like"))
    STARTING_WITH = (1, ("is starting with", "starting with", "starts with"))
    ENDING_WITH = (1, ("is ending with", "ending with", "ends with"))
    IS_NOT_EMPTY = (0, ("is not empty", "not empty"))
    IS_EMPTY = (0, ("is empty", "empty"))
    NOT_CONTAINING = (1, ("is not containing", "not containing", "not contains"))
    CONTAINING = (1, ("is containing", "containing", "contains"))
    NOT_IN = (1, ("is not in", "not in"))
    IN = (1, ("is in", "in"))
    NEAR = (1, ("is near", "near"))
    WITHIN = (1, ("is within", "within"))
    REGEX = (1, ("matches regex", "matches", "regex"))
    EXISTS = (0, ("exists",))
    TRUE = (0, ("is true", "true"))
    FALSE = (0, ("is false", "false"))
    NEGATING_SIMPLE_PROPERTY = (1, ("is not", "not"))
    SIMPLE_PROPERTY = (1, ("is", "equals"))

    @property
    def number_of_arguments(self) -> int:
        return self.value[0]

    @property
    def keywords(self) -> Tuple[Tuple[str, ...], ...]:
        return tuple(tuple(k.split()) for k in self.value[1])

    @classmethod
    def from_words(cls, words: Sequence[Word]) -> Tuple["PartType", int]:
        """Pick the operator selected by the trailing words of a clause.

        The longest matching keyword wins, and at least one word must remain
        for the property name. Without a keyword the clause is an equality.

        Returns:
            The part type and the number of trailing keyword words
        """
        for keyword, part_type in _KEYWORD_INDEX:
            if len(words) > len(keyword) and ends_with(words, keyword):
                return part_type, len(keyword)
        return cls.SIMPLE_PROPERTY, 0


def _build_keyword_index() -> List[Tuple[Tuple[str, ...], PartType]]:
    index = [(keyword, part_type) for part_type in PartType for keyword in part_type.keywords]
    # Longest first so "greater than equal" beats "greater than"
    index.sort(key=lambda item: len(item[0]), reverse=True)
    return index


_KEYWORD_INDEX = _build_keyword_index()


class Part(BaseModel):
    """One predicate clause: a single-segment property and its operator."""

    model_config = ConfigDict(frozen=True)

    property: str
    type: PartType

    @property
    def number_of_arguments(self) -> int:
        return self.type.number_of_arguments

    @classmethod
    def from_words(cls, words: Sequence[Word], style: NameStyle, method_name: str) -> "Part":
        part_type, keyword_length = PartType.from_words(words)
        property_words = words[: len(words) - keyword_length]
        name = join_property(property_words, style)
        if not name:
            raise InvalidMethodNameError("Predicate clause has no property", method_name=method_name)
        return cls(property=name, type=part_type)

    def __str__(self) -> str:
        return f"{self.property} {self.type.name}"


class OrPart(BaseModel):
    """Parts combined with AND between two ``Or`` keywords."""

    model_config = ConfigDict(frozen=True)

    parts: Tuple[Part, ...]

    def __len__(self) -> int:
        return len(self.parts)
