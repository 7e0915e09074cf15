"""
CSR generation pipeline

    EnrollmentRequest -> key pair -> subject -> TBS -> signature
                      -> CertificationRequest -> PEM (CSR + PKCS#8 key)
"""
import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Callable, Optional

from pkcs10gen.core.config import settings
from pkcs10gen.core.errors import KeyGenerationFailed, ProviderTimeout, ProviderUnavailable
from pkcs10gen.core.logging import get_logger
from pkcs10gen.models.algorithm import SignatureAlgorithm
from pkcs10gen.schemas.enrollment import CSRResponse, EnrollmentRequest
from pkcs10gen.services.crypto_provider import CryptoProvider
from pkcs10gen.services.der_encoder import DEREncoder
from pkcs10gen.services.pem_formatter import PEMFormatter
from pkcs10gen.services.signer import Signer
from pkcs10gen.services.subject_builder import SubjectBuilder

logger = get_logger(__name__)


class CSRService:
    """Generates PKCS#10 certificate signing requests with fresh key pairs"""

    def __init__(
        self,
        provider: Optional[CryptoProvider],
        algorithm: Optional[SignatureAlgorithm] = None,
        timeout: Optional[float] = None,
        strict_subject: Optional[bool] = None,
    ):
        """
        Args:
            provider: Cryptographic provider constructed by the host
            algorithm: Default signature algorithm (settings.SIGNATURE_ALGORITHM)
            timeout: Deadline in seconds per provider call (settings.PROVIDER_TIMEOUT_SECONDS)
            strict_subject: Subject policy (settings.STRICT_SUBJECT_VALIDATION)
        """
        self.provider = provider
        self.algorithm = algorithm or settings.SIGNATURE_ALGORITHM
        self.timeout = timeout if timeout is not None else settings.PROVIDER_TIMEOUT_SECONDS

        self.subject_builder = SubjectBuilder(strict=strict_subject)
        self.encoder = DEREncoder()

        self._provider_lock = None
        if provider is not None and not provider.reentrant:
            self._provider_lock = threading.Lock()

        self._executor = None
        self._executor_lock = threading.Lock()

    def generate(
        self,
        request: EnrollmentRequest,
        algorithm: Optional[SignatureAlgorithm] = None,
    ) -> CSRResponse:
        """
        Generate a key pair and a signed CSR for the enrollment identity.

        Blocking; key generation (RSA especially) can be slow. Use
        generate_async() from an event loop.

        Args:
            request: Subject fields
            algorithm: Overrides the service's default algorithm

        Returns:
            CSRResponse with the CSR and PKCS#8 private key as PEM

        Raises:
            CSRGenerationError subclass; no partial output is returned
        """
        algorithm = SignatureAlgorithm(algorithm or self.algorithm)
        provider = self._acquire_provider()

        # Validate the subject before spending time on key generation
        subject = self.subject_builder.build(request)
        logger.info(
            f"Generating CSR for {SubjectBuilder.to_string(subject)} with {algorithm.value}"
        )

        key_pair = self._call_provider(provider.generate_key_pair, algorithm)
        if key_pair is None or key_pair.private_key is None:
            raise KeyGenerationFailed(f"Provider returned no key pair for {algorithm.value}")

        spki = self._call_provider(provider.public_key_der, key_pair.public_key)
        tbs = self.encoder.certification_request_info(subject, spki)

        signer = Signer(provider, algorithm, call=self._call_provider)
        signature = signer.sign(tbs, key_pair.private_key)
        csr_der = self.encoder.certification_request(tbs, signer.algorithm, signature)

        key_der = self._call_provider(provider.export_private_key, key_pair.private_key)

        response = CSRResponse(
            csr=PEMFormatter.certificate_request(csr_der),
            private_key=PEMFormatter.private_key(key_der),
        )
        logger.info(f"Generated CSR ({len(csr_der)} DER bytes) for CN={request.enrollment_id}")
        return response

    async def generate_async(
        self,
        request: EnrollmentRequest,
        algorithm: Optional[SignatureAlgorithm] = None,
    ) -> CSRResponse:
        """Run generate() on a worker thread without blocking the event loop"""
        return await asyncio.to_thread(self.generate, request, algorithm)

    def _acquire_provider(self) -> CryptoProvider:
        if self.provider is None:
            raise ProviderUnavailable("No cryptographic provider configured")
        if not self.provider.is_available():
            raise ProviderUnavailable(
                f"Cryptographic provider {type(self.provider).__name__} is not available"
            )
        return self.provider

    def _call_provider(self, fn: Callable, *args):
        """
        Invoke a provider operation under the provider lock and deadline

        The deadline covers time spent queued for a worker. A timed-out call keeps
        its worker busy until the provider returns, so with PROVIDER_MAX_WORKERS
        slow calls outstanding, later calls can time out before they start.
        """
        if self.timeout is None:
            return self._locked(fn, *args)

        future = self._get_executor().submit(self._locked, fn, *args)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as e:
            # The worker is not interrupted; its result is discarded
            logger.error(f"Provider call {fn.__name__} exceeded {self.timeout}s")
            raise ProviderTimeout(
                f"Provider call {fn.__name__} did not complete within {self.timeout}s"
            ) from e

    def _locked(self, fn: Callable, *args):
        if self._provider_lock is None:
            return fn(*args)
        with self._provider_lock:
            return fn(*args)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=settings.PROVIDER_MAX_WORKERS,
                    thread_name_prefix="pkcs10gen-provider",
                )
            return self._executor

    def close(self, wait: bool = False) -> None:
        """
        Shut down the provider worker pool, if one was started

        Args:
            wait: Join the worker threads, including ones still running a
                provider call that already timed out
        """
        with self._executor_lock:
            if self._executor is not None:
                self._executor.shutdown(wait=wait)
                self._executor = None

    def __enter__(self) -> "CSRService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
