import logging
import re
from typing import List, Optional, Tuple
from xml.etree import ElementTree as stdlibElementTree
from xml.sax import SAXParseException
from xml.sax.handler import ContentHandler

import defusedxml.sax
from defusedxml.common import DefusedXmlException
from lxml import etree

from .exceptions import InvalidInput, ParseError
from .node import Element, Node, Text
from .util import ensure_bytes

logger = logging.getLogger(__name__)

xml_declaration_encoding = re.compile(r"""<\?xml[^>]*?\sencoding\s*=\s*["']([^"']*)["']""")


class TreeBuilder(ContentHandler):
    """
    SAX content handler that assembles :class:`simplexml.node.Element` trees. Namespace processing is left off in the
    reader, so tag names keep their prefixes and namespace declarations arrive as ordinary attributes.
    """

    def __init__(self):
        super().__init__()
        self.locator = None
        self.root: Optional[Element] = None
        self._stack: List[Tuple[str, Tuple[Tuple[str, str], ...], List[Node]]] = []
        self._text: List[str] = []

    def setDocumentLocator(self, locator):
        self.locator = locator

    def _flush_text(self):
        if self._text:
            self._stack[-1][2].append(Text("".join(self._text)))
            self._text = []

    def startElement(self, name, attrs):
        if self._stack:
            self._flush_text()
        self._stack.append((name, tuple(attrs.items()), []))

    def endElement(self, name):
        self._flush_text()
        tag, attributes, children = self._stack.pop()
        element = Element(tag, attributes, children)
        if self._stack:
            self._stack[-1][2].append(element)
        else:
            self.root = element

    def characters(self, content):
        # Character data outside the root element is whitespace, which is not part of the tree
        if self._stack:
            self._text.append(content)

    def position(self) -> Optional[Tuple[int, int]]:
        if self.locator is None:
            return None
        line, column = self.locator.getLineNumber(), self.locator.getColumnNumber()
        if line is None or column is None:
            return None
        return line, column


class XMLProcessor:
    forbid_dtd = True
    """
    Reject documents carrying a document type declaration. Entity declarations and external references are always
    rejected.
    """

    def _encode(self, xml_string: str) -> bytes:
        # A declared encoding must agree with the UTF-8 bytes handed to the parser
        match = xml_declaration_encoding.match(xml_string)
        if match and match.group(1).lower() not in ("utf-8", "utf8"):
            raise ParseError(f"Unicode strings with encoding declaration {match.group(1)!r} are not supported", (1, 0))
        try:
            return ensure_bytes(xml_string)
        except UnicodeError as e:
            raise ParseError(f"Invalid character in XML string: {e}") from e

    def _fromstring(self, xml_string) -> Element:
        if isinstance(xml_string, str):
            xml_string = self._encode(xml_string)
        builder = TreeBuilder()
        try:
            defusedxml.sax.parseString(
                xml_string,
                builder,
                forbid_dtd=self.forbid_dtd,
                forbid_entities=True,
                forbid_external=True,
            )
        except SAXParseException as e:
            raise ParseError(e.getMessage(), (e.getLineNumber(), e.getColumnNumber())) from e
        except DefusedXmlException as e:
            logger.debug("Rejected XML input: %r", e)
            raise ParseError(f"Forbidden XML construct: {e}", builder.position()) from e
        if builder.root is None:
            raise ParseError("No root element found")
        return builder.root

    def get_root(self, data) -> Element:
        """
        Parse **data** into an :class:`simplexml.node.Element` tree.

        :param data: XML to parse
        :type data: String, bytes, or XML ElementTree Element API compatible object
        :raises: :class:`simplexml.exceptions.ParseError`
        """
        if isinstance(data, (str, bytes)):
            return self._fromstring(data)
        elif isinstance(data, stdlibElementTree.Element):
            return self._fromstring(stdlibElementTree.tostring(data, encoding="utf-8"))
        elif isinstance(data, (etree._Element, etree._ElementTree)):
            return self._fromstring(etree.tostring(data))
        raise InvalidInput(f"Unsupported XML input type: {type(data).__name__}")


def parse(data) -> Element:
    """
    Parse untrusted XML into an :class:`simplexml.node.Element` tree. The XML declaration, comments and processing
    instructions are dropped; DTDs, entity declarations and external references are rejected.

    :raises: :class:`simplexml.exceptions.ParseError`
    """
    return XMLProcessor().get_root(data)
