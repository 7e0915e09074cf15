"""PKCS#10 certificate signing request generation for enrollment identities."""
from pkcs10gen.core.errors import (
    CSRGenerationError,
    InvalidSubjectField,
    KeyGenerationFailed,
    MalformedStructure,
    ProviderTimeout,
    ProviderUnavailable,
    SigningFailed,
)
from pkcs10gen.models.algorithm import SignatureAlgorithm
from pkcs10gen.schemas.enrollment import CSRResponse, EnrollmentRequest
from pkcs10gen.services.crypto_provider import CryptographyProvider, CryptoProvider, KeyPair
from pkcs10gen.services.csr_service import CSRService

__version__ = "1.0.0"

__all__ = [
    "CSRGenerationError",
    "CSRResponse",
    "CSRService",
    "CryptoProvider",
    "CryptographyProvider",
    "EnrollmentRequest",
    "InvalidSubjectField",
    "KeyGenerationFailed",
    "KeyPair",
    "MalformedStructure",
    "ProviderTimeout",
    "ProviderUnavailable",
    "SignatureAlgorithm",
    "SigningFailed",
]
