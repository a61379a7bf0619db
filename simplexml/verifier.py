import logging
from base64 import b64decode, b64encode
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.hashes import Hash

from .algorithms import DigestAlgorithm, SignatureMethod, digest_algorithm_implementations
from .c14n import canonicalize
from .exceptions import (
    DigestVerificationFailed,
    InvalidSignatureReferenceUri,
    SignatureVerificationFailed,
    SimpleXMLException,
    VerificationFailed,
)
from .matchers import NamespaceSuffix
from .node import Element, drop_children, first_child, get_attribute, namespace_attribute, prepend_attribute, text
from .processor import XMLProcessor
from .util import load_public_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignatureConfiguration:
    """
    A container holding signature settings that will be used to assert properties of the signature.
    """

    id_attribute: str = "ID"
    """
    Name of the attribute on the verified element whose value the signature's ``Reference URI`` must point at.
    """


@dataclass(frozen=True)
class SignatureDescriptor:
    """
    The parts of an enveloped ``Signature`` element that take part in verification.
    """

    signed_info: Element
    "The ``SignedInfo`` element, with the namespace declaration it inherits from ``Signature`` re-attached"

    reference_uri: str
    "The ``URI`` attribute of the single ``Reference``"

    digest_value: str
    "The base64-encoded ``DigestValue`` as written in the signature"

    signature_value: bytes
    "The decoded ``SignatureValue``"


@dataclass(frozen=True)
class VerifyResult:
    """
    This is a dataclass representing structured data returned by :func:`simplexml.XMLVerifier.verify`. Only data in
    this result is covered by the signature. Example usage:

        verified_xml = simplexml.verify(root, public_key).signed_xml
    """

    signed_data: bytes
    "The binary data as it was digested"

    signed_xml: Element
    "The verified element, without the enveloped signature"

    signature_xml: Element
    "The signature element"


class XMLVerifier(XMLProcessor):
    """
    Create a new XML Signature Verifier object, which can be used to verify multiple pieces of data. The verifier holds
    no state besides its configuration, so a single instance can be shared across threads.

    Signatures are expected to be enveloped (a ``Signature`` child of the verified element), with one ``Reference``
    to the verified element, exclusive canonicalization, a SHA-256 digest and an RSA-SHA256 signature.
    """

    signature_tag = NamespaceSuffix("Signature")
    signed_info_tag = NamespaceSuffix("SignedInfo")
    reference_tag = NamespaceSuffix("Reference")
    digest_value_tag = NamespaceSuffix("DigestValue")
    signature_value_tag = NamespaceSuffix("SignatureValue")

    digest_algorithm = DigestAlgorithm.SHA256
    signature_method = SignatureMethod.RSA_SHA256

    def __init__(self, config: SignatureConfiguration = SignatureConfiguration()):
        self.config = config

    def _get_digest(self, data: bytes) -> str:
        hasher = Hash(algorithm=digest_algorithm_implementations[self.digest_algorithm]())
        hasher.update(data)
        return b64encode(hasher.finalize()).decode()

    def _get_signed_info(self, signature: Element) -> Element:
        # SignedInfo is signed as if it carried the namespace declaration it inherits from Signature
        ns_name, ns_value = namespace_attribute(signature)
        return prepend_attribute(first_child(signature, self.signed_info_tag), ns_name, ns_value)

    def _verify_reference_uri(self, reference_uri: str, node_id: str) -> None:
        if reference_uri != "#" + node_id:
            raise InvalidSignatureReferenceUri(reference_uri, node_id)

    def _verify_digest(self, signed_data: bytes, digest_value: str) -> None:
        computed_digest = self._get_digest(signed_data)
        if computed_digest != digest_value:
            raise DigestVerificationFailed(digest_value, computed_digest)

    def _verify_signature_with_pubkey(self, descriptor: SignatureDescriptor, public_key) -> None:
        key = load_public_key(public_key)
        signed_info_c14n = canonicalize(descriptor.signed_info)
        digest_alg_impl = digest_algorithm_implementations[self.signature_method]()
        try:
            key.verify(
                descriptor.signature_value,
                data=signed_info_c14n,
                padding=self.signature_method.padding,
                algorithm=digest_alg_impl,
            )
        except InvalidSignature as e:
            msg = f"Signature verification failed for reference {descriptor.reference_uri}"
            raise SignatureVerificationFailed(msg) from e

    def _decode_signature_value(self, signature_value: str) -> bytes:
        # Signature values are commonly wrapped; any other non-alphabet character is an error
        return b64decode("".join(signature_value.split()), validate=True)

    def _verify(self, root: Element, public_key) -> VerifyResult:
        node_id = get_attribute(root, self.config.id_attribute)
        signature = first_child(root, self.signature_tag)
        signed_info = self._get_signed_info(signature)
        reference = first_child(signed_info, self.reference_tag)
        reference_uri = get_attribute(reference, "URI")
        self._verify_reference_uri(reference_uri, node_id)

        digest_value = text(first_child(reference, self.digest_value_tag))
        signed_xml = drop_children(root, self.signature_tag)
        signed_data = canonicalize(signed_xml)
        self._verify_digest(signed_data, digest_value)
        logger.debug("Digest verified for reference %s", reference_uri)

        descriptor = SignatureDescriptor(
            signed_info=signed_info,
            reference_uri=reference_uri,
            digest_value=digest_value,
            signature_value=self._decode_signature_value(text(first_child(signature, self.signature_value_tag))),
        )
        self._verify_signature_with_pubkey(descriptor, public_key)
        logger.debug("Signature verified for reference %s", reference_uri)
        return VerifyResult(signed_data=signed_data, signed_xml=signed_xml, signature_xml=signature)

    def verify(self, data, public_key) -> VerifyResult:
        """
        Verify the enveloped XML signature carried by **data** and return a :class:`VerifyResult`, or raise an
        exception if the signature is not valid.

        Verification stops at the first failure. In order, it checks that the element has an ``ID``, that it carries
        a ``Signature`` whose ``Reference URI`` points at that ``ID``, that the digest of the element without its
        signature matches ``DigestValue``, and finally that ``SignatureValue`` is a valid signature of ``SignedInfo``
        by **public_key**.

        .. admonition:: Canonicalization

         Signed content is canonicalized with the narrow serialization of :mod:`simplexml.c14n`. Signatures produced
         over markup that full Exclusive XML Canonicalization would rewrite (e.g. by moving namespace declarations in
         front of attributes) fail digest verification.

        :param data: The element to verify, or XML to parse into one (see :meth:`XMLProcessor.get_root`)
        :type data: :class:`simplexml.node.Element`, string, bytes, or XML ElementTree Element API compatible object
        :param public_key:
            The trusted RSA key of the signer, in any form accepted by :func:`simplexml.util.load_public_key`.

        :raises: :class:`simplexml.exceptions.NodeLookupError` if a required attribute or element is missing,
            :class:`simplexml.exceptions.VerificationError` if the signature is not valid,
            :class:`simplexml.exceptions.InvalidInput` if **data** or **public_key** cannot be used
        """
        root = data if isinstance(data, Element) else self.get_root(data)
        try:
            return self._verify(root, public_key)
        except SimpleXMLException:
            raise
        except Exception as e:
            logger.error("Verification failed: %r", e)
            raise VerificationFailed(f"Verification failed: {e}") from e


def verify(data, public_key) -> VerifyResult:
    """
    Verify the enveloped XML signature carried by **data** with the default :class:`XMLVerifier` configuration. See
    :meth:`XMLVerifier.verify`.
    """
    return XMLVerifier().verify(data, public_key)
