"""
SimpleXML utility functions
"""

import textwrap

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import load_pem_public_key

from ..exceptions import InvalidInput

PEM_HEADER = "-----BEGIN CERTIFICATE-----"
PEM_FOOTER = "-----END CERTIFICATE-----"
PUBLIC_KEY_PEM_HEADER = "-----BEGIN PUBLIC KEY-----"


class Namespace(dict):
    def __getattr__(self, a):
        return dict.__getitem__(self, a)


namespaces = Namespace(
    ds="http://www.w3.org/2000/09/xmldsig#",
)


def ensure_bytes(x, encoding="utf-8", none_ok=False):
    if none_ok is True and x is None:
        return x
    if not isinstance(x, bytes):
        x = x.encode(encoding)
    return x


def ensure_str(x, encoding="utf-8", none_ok=False):
    if none_ok is True and x is None:
        return x
    if not isinstance(x, str):
        x = x.decode(encoding)
    return x


def add_pem_header(bare_base64_cert):
    bare_base64_cert = ensure_str(bare_base64_cert)
    if bare_base64_cert.startswith(PEM_HEADER):
        return bare_base64_cert
    # X509Certificate element text is usually wrapped at 76 columns
    bare_base64_cert = "".join(bare_base64_cert.split())
    return PEM_HEADER + "\n" + textwrap.fill(bare_base64_cert, 64) + "\n" + PEM_FOOTER


def load_public_key(key) -> rsa.RSAPublicKey:
    """
    Obtain the RSA public key to verify signatures with.

    :param key:
        An RSA public key object, a :class:`cryptography.x509.Certificate`, a PEM-encoded certificate or public key,
        or the bare base64-encoded DER certificate found in an ``X509Certificate`` element. The certificate is trusted
        as given: no chain or validity checks are performed.
    :raises: :class:`simplexml.exceptions.InvalidInput` if the key cannot be loaded or is not an RSA key
    """
    if isinstance(key, (str, bytes)):
        key = ensure_str(key).strip()
        try:
            if key.startswith(PUBLIC_KEY_PEM_HEADER):
                key = load_pem_public_key(key.encode())
            else:
                key = x509.load_pem_x509_certificate(add_pem_header(key).encode())
        except ValueError as e:
            raise InvalidInput(f"Unable to load public key: {e}") from e
    if isinstance(key, x509.Certificate):
        key = key.public_key()
    if not isinstance(key, rsa.RSAPublicKey):
        raise InvalidInput(f"Expected an RSA public key, got {type(key).__name__}")
    return key
