from enum import Enum
from typing import Dict, Type, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.padding import AsymmetricPadding, PKCS1v15


class DigestAlgorithm(Enum):
    """
    Digest algorithm used for the signed content. See the
    `Algorithm Identifiers and Implementation Requirements <http://www.w3.org/TR/xmldsig-core1/#sec-AlgID>`_ section of
    the XML Signature 1.1 standard for details.
    """

    SHA256 = "http://www.w3.org/2001/04/xmlenc#sha256"


class SignatureMethod(Enum):
    """
    Signature method used over ``SignedInfo``.
    """

    RSA_SHA256 = "http://www.w3.org/2001/04/xmldsig-more#rsa-sha256"
    """
    The RSASSA-PKCS1-v1_5 algorithm described in RFC 3447.
    """

    @property
    def padding(self) -> AsymmetricPadding:
        return PKCS1v15()


digest_algorithm_implementations: Dict[Union[DigestAlgorithm, SignatureMethod], Type[hashes.HashAlgorithm]] = {
    DigestAlgorithm.SHA256: hashes.SHA256,
    SignatureMethod.RSA_SHA256: hashes.SHA256,
}
