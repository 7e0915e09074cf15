from pydantic_settings import BaseSettings
from typing import Optional

from pkcs10gen.models.algorithm import SignatureAlgorithm


class Settings(BaseSettings):
    # Signature algorithm used for key generation, signing and the CSR's AlgorithmIdentifier
    SIGNATURE_ALGORITHM: SignatureAlgorithm = SignatureAlgorithm.ECDSA_SHA256

    # RSA key parameters (only used by the RSA_* algorithms)
    RSA_KEY_SIZE: int = 2048
    RSA_PUBLIC_EXPONENT: int = 65537

    # Provider calls
    PROVIDER_TIMEOUT_SECONDS: Optional[float] = None  # None = wait for the provider
    PROVIDER_MAX_WORKERS: int = 4

    # Subject policy
    STRICT_SUBJECT_VALIDATION: bool = False

    # Application
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "pkcs10gen"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
