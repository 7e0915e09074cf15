from typing import Any, Callable, Optional

from pkcs10gen.core.errors import SigningFailed
from pkcs10gen.core.logging import get_logger
from pkcs10gen.models.algorithm import SignatureAlgorithm
from pkcs10gen.services.crypto_provider import CryptoProvider

logger = get_logger(__name__)


class Signer:
    """
    Signs TBS bytes for one SignatureAlgorithm.

    The same `algorithm` value drives the provider call and must be used for
    the AlgorithmIdentifier of the final structure.
    """

    def __init__(
        self,
        provider: CryptoProvider,
        algorithm: SignatureAlgorithm,
        call: Optional[Callable] = None,
    ):
        self.provider = provider
        self.algorithm = algorithm
        # Wrapper used to run provider calls (lock / deadline); direct call by default
        self._call = call or (lambda fn, *args: fn(*args))

    def sign(self, tbs: bytes, private_key: Any) -> bytes:
        """
        Sign the DER encoded CertificationRequestInfo

        Args:
            tbs: Exact bytes to be signed
            private_key: Provider private key handle

        Returns:
            Raw signature bytes (DER Ecdsa-Sig-Value for ECDSA)
        """
        if private_key is None:
            raise SigningFailed("No private key to sign with")

        signature = self._call(self.provider.sign, tbs, private_key, self.algorithm)
        if not signature:
            raise SigningFailed(f"Provider returned an empty {self.algorithm.value} signature")

        logger.debug(f"Signed {len(tbs)} TBS bytes with {self.algorithm.value}")
        return signature
