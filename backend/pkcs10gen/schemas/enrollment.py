from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from pkcs10gen.models.algorithm import SignatureAlgorithm


class EnrollmentRequest(BaseModel):
    """
    Subject attributes for one enrollment identity.

    Fields are optional at the schema level so that a missing field reaches
    the SubjectBuilder and is reported as InvalidSubjectField.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enrollment_id: Optional[str] = Field(default=None, alias="enrollmentID")
    organization_unit: Optional[str] = Field(default=None, alias="organizationUnit")
    organization: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class CSRGenerationRequest(EnrollmentRequest):
    algorithm: Optional[SignatureAlgorithm] = Field(
        default=None,
        description="Signature algorithm. If not provided, the configured default is used.",
    )

    def to_enrollment(self) -> EnrollmentRequest:
        return EnrollmentRequest(**self.model_dump(exclude={"algorithm"}))


class CSRResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    csr: str  # PEM encoded CERTIFICATE REQUEST
    private_key: str = Field(alias="privateKey", repr=False)  # PEM encoded PKCS#8 PRIVATE KEY


class AlgorithmListResponse(BaseModel):
    default: SignatureAlgorithm
    algorithms: List[SignatureAlgorithm]
