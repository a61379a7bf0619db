"""
Serialization of :mod:`simplexml.node` trees.

The serialized form doubles as the canonical form used for digesting signed content. It is a deliberately narrow
subset of `Exclusive XML Canonicalization <http://www.w3.org/2001/10/xml-exc-c14n#>`_: empty elements are written as
start/end tag pairs, but attributes are neither sorted nor have namespace declarations moved in front of them,
whitespace is kept as is, and text is written without escaping (it is assumed to be already decoded). The result is
only canonical for producers that emit canonical markup in the first place.
"""

import logging
from dataclasses import dataclass

from .node import Element, Text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _EndTag:
    tag: str


def tostring(node) -> str:
    """
    Serialize a node, or a sequence of nodes, to a string. Trees of any depth are serialized without recursion.
    """
    parts = []
    pending = [node]
    while pending:
        item = pending.pop()
        if isinstance(item, _EndTag):
            parts.append(f"</{item.tag}>")
        elif isinstance(item, Text):
            parts.append(item.value)
        elif isinstance(item, Element):
            attributes = "".join(f' {name}="{value}"' for name, value in item.attributes)
            parts.append(f"<{item.tag}{attributes}>")
            pending.append(_EndTag(item.tag))
            pending.extend(reversed(item.children))
        elif isinstance(item, (tuple, list)):
            pending.extend(reversed(item))
        else:
            raise TypeError(f"Cannot serialize {type(item).__name__}")
    return "".join(parts)


def canonicalize(node) -> bytes:
    """
    Return the canonical form of a node as UTF-8 encoded bytes.
    """
    c14n = tostring(node).encode("utf-8")
    logger.debug("Canonicalized string: %s", c14n)
    return c14n
