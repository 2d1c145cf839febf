"""Utility functions for partquery.

Helpers for splitting method names into words and joining words back into
property names. Both camelCase (``findByAgeGreaterThan``) and snake_case
(``find_by_age_greater_than``) names reduce to the same word sequence, so the
grammar only has to be written once.
"""

import re
from typing import List, Literal, NamedTuple, Sequence

NameStyle = Literal["camel", "snake"]

# "URLValue" -> "URL", "Value"; "First10" -> "First", "10"
_CAMEL_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
_SNAKE_WORD = re.compile(r"[A-Za-z]+|\d+")


class Word(NamedTuple):
    """One word of a method name.

    ``text`` keeps the original spelling; ``joiner`` is what separated it
    from the previous word in the source name ("" or "_").
    """

    text: str
    joiner: str = ""

    @property
    def key(self) -> str:
        return self.text.lower()


# ===========================================================================
# Name splitting
# ===========================================================================


def detect_style(name: str) -> NameStyle:
    """Return "snake" when the name uses underscores, else "camel"."""
    return "snake" if "_" in name.strip("_") else "camel"


def split_words(name: str) -> List[Word]:
    """Split a method name into words.

    Examples:
        split_words("findByAgeGreaterThan") -> find, By, Age, Greater, Than
        split_words("find_first10_by_age") -> find, first, 10, by, age
    """
    if detect_style(name) == "camel":
        return [Word(text) for text in _CAMEL_WORD.findall(name)]

    words: List[Word] = []
    for token in name.split("_"):
        for index, text in enumerate(_SNAKE_WORD.findall(token)):
            words.append(Word(text, "_" if index == 0 and words else ""))
    return words


def split_on(words: Sequence[Word], keyword: str) -> List[List[Word]]:
    """Split a word sequence on every occurrence of a single-word keyword."""
    groups: List[List[Word]] = [[]]
    for word in words:
        if word.key == keyword:
            groups.append([])
        else:
            groups[-1].append(word)
    return groups


def ends_with(words: Sequence[Word], keyword: Sequence[str]) -> bool:
    """Whether the lowercased word sequence ends with the keyword words."""
    if len(keyword) > len(words):
        return False
    tail = words[len(words) - len(keyword) :]
    return all(w.key == k for w, k in zip(tail, keyword))


# ===========================================================================
# Property names
# ===========================================================================


def decapitalize(name: str) -> str:
    """Lower the first character unless the name starts with an acronym.

    "Age" -> "age", "CreatedAt" -> "createdAt", "URL" -> "URL"
    """
    if not name:
        return name
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name
    return name[0].lower() + name[1:]


def join_property(words: Sequence[Word], style: NameStyle) -> str:
    """Re-join property words in the spelling of the source method name."""
    if not words:
        return ""
    joined = words[0].text + "".join(w.joiner + w.text for w in words[1:])
    if style == "camel":
        return decapitalize(joined)
    return joined
