from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from pkcs10gen.api import csr
from pkcs10gen.core.config import settings
from pkcs10gen.core.logging import configure_logging, get_logger
from pkcs10gen.services.crypto_provider import CryptographyProvider
from pkcs10gen.services.csr_service import CSRService

logger = get_logger(__name__)


def create_app(csr_service: Optional[CSRService] = None) -> FastAPI:
    """
    Build the HTTP host for CSR generation

    Args:
        csr_service: Service to expose; by default one backed by CryptographyProvider
    """
    configure_logging()

    if csr_service is None:
        csr_service = CSRService(CryptographyProvider())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        csr_service.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="PKCS#10 Certificate Signing Request generation",
        version="1.0.0",
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        redoc_url=f"{settings.API_V1_PREFIX}/redoc",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.csr_service = csr_service

    # Include routers
    app.include_router(csr.router, prefix=settings.API_V1_PREFIX)

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "healthy"}

    logger.info(f"{settings.PROJECT_NAME} ready, default algorithm {csr_service.algorithm.value}")
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
