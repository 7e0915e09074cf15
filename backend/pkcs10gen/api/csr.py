from fastapi import APIRouter, Depends, HTTPException, Request, status

from pkcs10gen.core.errors import (
    CSRGenerationError,
    InvalidSubjectField,
    ProviderTimeout,
    ProviderUnavailable,
)
from pkcs10gen.core.logging import get_logger
from pkcs10gen.models.algorithm import SignatureAlgorithm
from pkcs10gen.schemas.enrollment import (
    AlgorithmListResponse,
    CSRGenerationRequest,
    CSRResponse,
)
from pkcs10gen.services.csr_service import CSRService

logger = get_logger(__name__)

router = APIRouter(prefix="/csr", tags=["csr"])


def get_csr_service(request: Request) -> CSRService:
    """CSRService constructed by the application factory"""
    return request.app.state.csr_service


@router.post("", response_model=CSRResponse)
async def generate_csr(
    request: CSRGenerationRequest,
    csr_service: CSRService = Depends(get_csr_service),
):
    """
    Generate a key pair and a PKCS#10 CSR for an enrollment identity
    The private key is only returned in this response and is never stored
    """
    try:
        return await csr_service.generate_async(request.to_enrollment(), request.algorithm)
    except InvalidSubjectField as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ProviderUnavailable as e:
        logger.error(f"CSR generation unavailable: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except ProviderTimeout as e:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e))
    except CSRGenerationError as e:
        logger.error(f"CSR generation failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/algorithms", response_model=AlgorithmListResponse)
async def list_algorithms(csr_service: CSRService = Depends(get_csr_service)):
    """Supported signature algorithms and the configured default"""
    return AlgorithmListResponse(
        default=csr_service.algorithm,
        algorithms=list(SignatureAlgorithm),
    )
