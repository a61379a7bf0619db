"""
A minimal, immutable XML document model.

A document is a tree of :class:`Element` and :class:`Text` nodes. Tag and attribute names are kept exactly as they
appear in the source, including any namespace prefix; namespace declarations (``xmlns``, ``xmlns:prefix``) are
ordinary attributes. Attribute and child order is document order, and duplicate attribute names are allowed (the
first one wins on lookup).

Trees are never modified in place. Operations that "remove" or "add" something return a new tree that shares the
untouched parts of the original.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from .exceptions import AttributeNotFound, ChildNotFound, NoChildrenFound, TextNotFound
from .matchers import MatcherLike, as_matcher


@dataclass(frozen=True)
class Text:
    """
    A run of character data, already decoded (entity and character references are resolved by the parser).
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(f"Text value must be a string, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Element:
    """
    An XML element. Lists passed as ``attributes`` or ``children`` are copied into tuples, so the element exclusively
    owns both sequences. Equality and hashing compare whole subtrees recursively, so they are bounded by the
    interpreter recursion limit for very deeply nested trees; serialize such trees with
    :func:`simplexml.c14n.tostring` to compare them.
    """

    tag: str
    "Tag name as written in the document, e.g. ``ds:Signature``"

    attributes: Tuple[Tuple[str, str], ...] = ()
    "Ordered ``(name, value)`` pairs"

    children: Tuple["Node", ...] = ()
    "Ordered child nodes"

    def __post_init__(self):
        if not isinstance(self.tag, str) or not self.tag:
            raise ValueError("Element tag must be a non-empty string")
        if isinstance(self.attributes, (str, bytes)) or isinstance(self.children, (str, bytes)):
            raise TypeError("Element attributes and children must be sequences, not strings")
        attributes = tuple(tuple(pair) for pair in self.attributes)
        for pair in attributes:
            if len(pair) != 2 or not all(isinstance(i, str) for i in pair):
                raise TypeError(f"Attributes must be (name, value) string pairs, got {pair!r}")
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, (Text, Element)):
                raise TypeError(f"Children must be Text or Element nodes, got {type(child).__name__}")
        object.__setattr__(self, "attributes", attributes)
        object.__setattr__(self, "children", children)


Node = Union[Text, Element]


def _element_matches(node: Node, matcher) -> bool:
    return isinstance(node, Element) and matcher.matches(node.tag)


def get_attribute(node: Element, name: str) -> str:
    """
    Return the value of the first attribute called **name**.

    :raises: :class:`simplexml.exceptions.AttributeNotFound`
    """
    for attr_name, value in node.attributes:
        if attr_name == name:
            return value
    raise AttributeNotFound(name)


def first_child(node: Element, matcher: MatcherLike) -> Element:
    """
    Return the first child element whose tag satisfies **matcher**. Text children never match.

    :param matcher:
        A :class:`simplexml.matchers.Matcher`, or a shorthand accepted by :func:`simplexml.matchers.as_matcher`:
        ``"bar"`` matches the tag ``bar`` ignoring case, ``"*:bar"`` matches ``bar`` under any namespace prefix, and
        a compiled regular expression is searched for in the tag.
    :raises: :class:`simplexml.exceptions.ChildNotFound`
    """
    matcher = as_matcher(matcher)
    for child in node.children:
        if _element_matches(child, matcher):
            return child  # type: ignore
    raise ChildNotFound(matcher, node.children)


def children(node: Element, matcher: Optional[MatcherLike] = None) -> Tuple[Node, ...]:
    """
    Without **matcher**, return all children of the node; this fails with
    :class:`simplexml.exceptions.NoChildrenFound` if the node holds nothing but a single text run.

    With **matcher**, return the (possibly empty) tuple of child elements that satisfy it.
    """
    if matcher is None:
        if len(node.children) == 1 and isinstance(node.children[0], Text):
            raise NoChildrenFound(node.children)
        return node.children
    matcher = as_matcher(matcher)
    return tuple(child for child in node.children if _element_matches(child, matcher))


def drop_children(node: Element, matcher: MatcherLike) -> Element:
    """
    Return a copy of the node without any of the child elements that satisfy **matcher**. The remaining children keep
    their relative order.
    """
    matcher = as_matcher(matcher)
    return replace(node, children=tuple(child for child in node.children if not _element_matches(child, matcher)))


def text(node: Element) -> str:
    """
    Return the text run in the first child slot of the node. Subsequent text runs are not concatenated.

    :raises: :class:`simplexml.exceptions.TextNotFound`
    """
    if node.children and isinstance(node.children[0], Text):
        return node.children[0].value
    raise TextNotFound(node.children)


def namespace_attribute(node: Element) -> Tuple[str, str]:
    """
    Return the ``(name, value)`` pair declaring the namespace of the node's own tag prefix: ``xmlns:ds`` for
    ``ds:Signature``, or ``xmlns`` for an unprefixed tag.
    """
    prefix, sep, _ = node.tag.rpartition(":")
    name = f"xmlns:{prefix}" if sep else "xmlns"
    return name, get_attribute(node, name)


def prepend_attribute(node: Element, name: str, value: str) -> Element:
    return replace(node, attributes=((name, value),) + node.attributes)
