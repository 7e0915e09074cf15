"""
Error taxonomy for CSR generation.

Every failure aborts the whole generate() call; nothing here is retried.
"""
from typing import Optional


class CSRGenerationError(Exception):
    """Base class for all CSR generation failures"""


class ProviderUnavailable(CSRGenerationError):
    """No cryptographic provider is configured or reachable"""


class InvalidSubjectField(CSRGenerationError):
    """A subject field is missing or rejected by the subject policy"""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Missing required subject field: {field}")


class KeyGenerationFailed(CSRGenerationError):
    """The provider could not generate a key pair for the algorithm"""


class SigningFailed(CSRGenerationError):
    """The provider rejected the key or algorithm while signing"""


class MalformedStructure(CSRGenerationError):
    """A DER encoding invariant would be violated"""


class ProviderTimeout(CSRGenerationError):
    """A configured deadline elapsed before the provider returned"""
