"""
HTTP application factory.

Builds the FastAPI app around an already-wired ProductService and
translates domain error kinds into status codes. Which storage backend
sits behind the service is invisible here.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.application.product_service import ProductService
from catalog.domain.exceptions import DomainException, ErrorKind
from catalog.infrastructure.http import products

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.IDENTIFIER_MISMATCH: status.HTTP_400_BAD_REQUEST,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(service: ProductService) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("Shutting down, releasing storage backend")
        service.close()

    app = FastAPI(title="Product Catalog", lifespan=lifespan)
    app.state.product_service = service
    app.include_router(products.router)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        return error_response(STATUS_BY_KIND[exc.kind], str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request body for {request.method} {request.url.path}: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST, "invalid request body")

    # Starlette re-raises after this handler so the server logs the traceback.
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")

    return app
