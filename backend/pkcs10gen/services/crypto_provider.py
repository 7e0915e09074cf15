"""
Cryptographic provider used by the CSR pipeline.

The pipeline never touches key material directly: key generation, public key
export, signing and private key export all go through a CryptoProvider.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from pkcs10gen.core.config import settings
from pkcs10gen.core.errors import KeyGenerationFailed, SigningFailed
from pkcs10gen.core.logging import get_logger
from pkcs10gen.models.algorithm import KeyType, SignatureAlgorithm

logger = get_logger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """Opaque provider-owned key handles"""
    public_key: Any
    private_key: Any = None

    def __repr__(self) -> str:
        return f"KeyPair(public_key={type(self.public_key).__name__}, private_key=<redacted>)"


class CryptoProvider(ABC):
    """Key generation, signing and key export for a SignatureAlgorithm"""

    # Providers that cannot be called from several threads at once set this to False
    reentrant: bool = True

    def is_available(self) -> bool:
        return True

    @abstractmethod
    def generate_key_pair(self, algorithm: SignatureAlgorithm) -> KeyPair:
        ...

    @abstractmethod
    def public_key_der(self, public_key: Any) -> bytes:
        """DER encoded SubjectPublicKeyInfo"""

    @abstractmethod
    def sign(self, data: bytes, private_key: Any, algorithm: SignatureAlgorithm) -> bytes:
        ...

    @abstractmethod
    def export_private_key(self, private_key: Any) -> bytes:
        """DER encoded PKCS#8 PrivateKeyInfo"""


class CryptographyProvider(CryptoProvider):
    """CryptoProvider backed by the OpenSSL bindings of the cryptography package"""

    def __init__(
        self,
        rsa_key_size: Optional[int] = None,
        rsa_public_exponent: Optional[int] = None,
    ):
        self.rsa_key_size = rsa_key_size or settings.RSA_KEY_SIZE
        self.rsa_public_exponent = rsa_public_exponent or settings.RSA_PUBLIC_EXPONENT

    def is_available(self) -> bool:
        try:
            default_backend()
        except Exception as e:
            logger.error(f"Cryptographic backend unavailable: {e}")
            return False
        return True

    def generate_key_pair(self, algorithm: SignatureAlgorithm) -> KeyPair:
        logger.debug(f"Generating {algorithm.key_type.value} key pair for {algorithm.value}")
        try:
            if algorithm.key_type is KeyType.EC:
                private_key = ec.generate_private_key(algorithm.curve, backend=default_backend())
            else:
                private_key = rsa.generate_private_key(
                    public_exponent=self.rsa_public_exponent,
                    key_size=self.rsa_key_size,
                    backend=default_backend(),
                )
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise KeyGenerationFailed(f"Key generation failed for {algorithm.value}: {e}") from e

        return KeyPair(public_key=private_key.public_key(), private_key=private_key)

    def public_key_der(self, public_key: Any) -> bytes:
        try:
            return public_key.public_bytes(
                encoding=serialization.Encoding.DER,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        except (ValueError, TypeError, AttributeError, UnsupportedAlgorithm) as e:
            raise KeyGenerationFailed(f"Public key export failed: {e}") from e

    def sign(self, data: bytes, private_key: Any, algorithm: SignatureAlgorithm) -> bytes:
        try:
            if algorithm.key_type is KeyType.EC:
                if not isinstance(private_key, ec.EllipticCurvePrivateKey):
                    raise TypeError(f"{algorithm.value} requires an EC private key")
                return private_key.sign(data, ec.ECDSA(algorithm.hash_algorithm))

            if not isinstance(private_key, rsa.RSAPrivateKey):
                raise TypeError(f"{algorithm.value} requires an RSA private key")
            return private_key.sign(data, padding.PKCS1v15(), algorithm.hash_algorithm)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningFailed(f"Signing failed for {algorithm.value}: {e}") from e

    def export_private_key(self, private_key: Any) -> bytes:
        try:
            return private_key.private_bytes(
                encoding=serialization.Encoding.DER,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        except (ValueError, TypeError, AttributeError, UnsupportedAlgorithm) as e:
            raise KeyGenerationFailed(f"Private key export failed: {e}") from e
