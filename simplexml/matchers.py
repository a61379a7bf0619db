"""
Tag name matchers used to select child elements.
"""

import re
from dataclasses import dataclass
from typing import Union


class Matcher:
    """
    Base class of the tag name matchers. Subclasses implement :meth:`matches`.
    """

    def matches(self, tag: str) -> bool:
        raise NotImplementedError()


@dataclass(frozen=True)
class Exact(Matcher):
    """
    Matches a tag name in full, ignoring case. The namespace prefix, if any, is part of the tag name.
    """

    name: str

    def matches(self, tag: str) -> bool:
        return tag.lower() == self.name.lower()


@dataclass(frozen=True)
class NamespaceSuffix(Matcher):
    """
    Matches a prefixed tag name by its local part, ignoring case and the prefix itself: ``NamespaceSuffix("Signature")``
    matches ``ds:Signature`` and ``dsig:SIGNATURE``, but not an unprefixed ``Signature``.
    """

    name: str

    def matches(self, tag: str) -> bool:
        return tag.lower().endswith(":" + self.name.lower())


@dataclass(frozen=True)
class Pattern(Matcher):
    """
    Matches a tag name with a compiled regular expression (``re.search`` semantics). Case sensitivity follows the
    pattern's own flags.
    """

    regex: re.Pattern

    def matches(self, tag: str) -> bool:
        return self.regex.search(tag) is not None


MatcherLike = Union[Matcher, str, re.Pattern]


def as_matcher(value: MatcherLike) -> Matcher:
    """
    Convert a matcher shorthand into a :class:`Matcher`. A string of the form ``*:name`` becomes
    :class:`NamespaceSuffix`, any other string :class:`Exact`, and a compiled regular expression :class:`Pattern`.
    """
    if isinstance(value, Matcher):
        return value
    if isinstance(value, str):
        if value.startswith("*:"):
            return NamespaceSuffix(value[2:])
        return Exact(value)
    if isinstance(value, re.Pattern):
        return Pattern(value)
    raise TypeError(f"Expected a Matcher, a string or a compiled regular expression, got {type(value).__name__}")
