"""
Use :func:`simplexml.parse` to turn untrusted XML into an immutable tree of :class:`simplexml.Element` and
:class:`simplexml.Text` nodes, and :func:`simplexml.verify` to check the enveloped XML Signature it carries against a
trusted RSA key. See `SimpleXML documentation <#synopsis>`_ for examples.
"""

from .algorithms import DigestAlgorithm, SignatureMethod
from .c14n import canonicalize, tostring
from .exceptions import (
    AttributeNotFound,
    ChildNotFound,
    DigestVerificationFailed,
    InvalidInput,
    InvalidSignatureReferenceUri,
    NodeLookupError,
    NoChildrenFound,
    ParseError,
    SignatureVerificationFailed,
    SimpleXMLException,
    TextNotFound,
    VerificationError,
    VerificationFailed,
)
from .matchers import Exact, Matcher, NamespaceSuffix, Pattern, as_matcher
from .node import (
    Element,
    Node,
    Text,
    children,
    drop_children,
    first_child,
    get_attribute,
    namespace_attribute,
    prepend_attribute,
    text,
)
from .processor import XMLProcessor, parse
from .util import load_public_key, namespaces
from .verifier import SignatureConfiguration, SignatureDescriptor, VerifyResult, XMLVerifier, verify
