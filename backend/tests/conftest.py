import time

import pytest
from asn1crypto import csr as asn1_csr, pem

from pkcs10gen.schemas.enrollment import EnrollmentRequest
from pkcs10gen.services.crypto_provider import CryptographyProvider
from pkcs10gen.services.csr_service import CSRService


FARMER_FIELDS = {
    "enrollment_id": "user1",
    "organization": "Farmer Market",
    "organization_unit": "Marketing",
    "state": "M",
    "country": "V",
}


class SlowProvider(CryptographyProvider):
    def generate_key_pair(self, algorithm):
        time.sleep(0.5)
        return super().generate_key_pair(algorithm)


@pytest.fixture
def farmer_request() -> EnrollmentRequest:
    return EnrollmentRequest(**FARMER_FIELDS)


@pytest.fixture
def provider() -> CryptographyProvider:
    return CryptographyProvider()


@pytest.fixture
def csr_service(provider):
    service = CSRService(provider, strict_subject=False)
    yield service
    service.close()


def load_csr_der(csr_pem: str) -> bytes:
    label, _, der = pem.unarmor(csr_pem.encode())
    assert label == "CERTIFICATE REQUEST"
    return der


def load_csr(csr_pem: str) -> asn1_csr.CertificationRequest:
    return asn1_csr.CertificationRequest.load(load_csr_der(csr_pem))
