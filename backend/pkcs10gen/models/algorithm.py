from enum import Enum

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec


class KeyType(str, Enum):
    EC = "ec"
    RSA = "rsa"


class SignatureAlgorithm(str, Enum):
    """
    Supported CSR signature algorithms.

    Each member fixes the key type, the digest and the AlgorithmIdentifier
    OID, so signing and the identifier embedded in the CSR come from one value.
    """
    ECDSA_SHA256 = "ECDSA_SHA256"
    ECDSA_SHA384 = "ECDSA_SHA384"
    RSA_SHA256 = "RSA_SHA256"
    RSA_SHA384 = "RSA_SHA384"

    @property
    def key_type(self) -> KeyType:
        if self.name.startswith("ECDSA"):
            return KeyType.EC
        return KeyType.RSA

    @property
    def hash_algorithm(self) -> hashes.HashAlgorithm:
        if self.name.endswith("SHA384"):
            return hashes.SHA384()
        return hashes.SHA256()

    @property
    def curve(self) -> ec.EllipticCurve:
        """Named curve for ECDSA members (P-256 or P-384)"""
        if self.key_type is not KeyType.EC:
            raise AttributeError(f"{self.value} has no elliptic curve")
        if self is SignatureAlgorithm.ECDSA_SHA384:
            return ec.SECP384R1()
        return ec.SECP256R1()

    @property
    def oid(self) -> str:
        return _SIGNATURE_OIDS[self]

    @property
    def has_null_parameters(self) -> bool:
        # sha*WithRSAEncryption carries an explicit NULL; ecdsa-with-SHA* omits parameters
        return self.key_type is KeyType.RSA


_SIGNATURE_OIDS = {
    SignatureAlgorithm.ECDSA_SHA256: "1.2.840.10045.4.3.2",
    SignatureAlgorithm.ECDSA_SHA384: "1.2.840.10045.4.3.3",
    SignatureAlgorithm.RSA_SHA256: "1.2.840.113549.1.1.11",
    SignatureAlgorithm.RSA_SHA384: "1.2.840.113549.1.1.12",
}
