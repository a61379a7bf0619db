"""
SimpleXML exception types.
"""

import cryptography.exceptions


class SimpleXMLException(Exception):
    pass


class InvalidInput(ValueError, SimpleXMLException):
    pass


class ParseError(InvalidInput):
    """
    Raised when the XML input is malformed, or uses a construct (DTD, entity declaration, external reference) that is
    forbidden for untrusted input.
    """

    def __init__(self, reason, position=None):
        super().__init__(reason, position)
        self.reason = reason
        "Human-readable description of the parse failure"
        self.position = position
        "``(line, column)`` of the failure, or ``None`` if the parser could not locate it"

    def __str__(self):
        if self.position is None:
            return str(self.reason)
        return "{} (line {}, column {})".format(self.reason, *self.position)


class NodeLookupError(LookupError, SimpleXMLException):
    """
    Base class for failures to find an attribute, child or text within an element.
    """


class AttributeNotFound(NodeLookupError):
    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Attribute {self.name!r} not found"


class ChildNotFound(NodeLookupError):
    def __init__(self, matcher, actual_children):
        super().__init__(matcher, actual_children)
        self.matcher = matcher
        self.actual_children = actual_children

    def __str__(self):
        return f"No child matching {self.matcher!r} among {len(self.actual_children)} children"


class NoChildrenFound(NodeLookupError):
    def __init__(self, children):
        super().__init__(children)
        self.children = children

    def __str__(self):
        return "Element contains a single text run instead of child nodes"


class TextNotFound(NodeLookupError):
    def __init__(self, children):
        super().__init__(children)
        self.children = children

    def __str__(self):
        return "Element does not start with text"


class VerificationError(cryptography.exceptions.InvalidSignature, SimpleXMLException):
    """
    Raised when signature validation fails.
    """


class InvalidSignatureReferenceUri(VerificationError):
    """
    Raised when the signature reference does not point at the element being verified. This prevents a valid signature
    over one element from being presented as a signature over another.
    """

    def __init__(self, reference_uri, node_id):
        super().__init__(f"Reference URI {reference_uri!r} does not match #{node_id}")
        self.reference_uri = reference_uri
        self.node_id = node_id


class DigestVerificationFailed(VerificationError):
    """
    Raised when digest validation fails (causing the signature to be untrusted).
    """

    def __init__(self, expected, computed):
        super().__init__(f"Digest mismatch: expected {expected!r}, computed {computed!r}")
        self.expected = expected
        self.computed = computed


class SignatureVerificationFailed(VerificationError):
    pass


class VerificationFailed(VerificationError):
    """
    Raised for any failure that is not otherwise classified, e.g. an undecodable signature value. The underlying
    exception is available as ``__cause__``.
    """
