# product_api/errors.py

"""
Error taxonomy for the Product API and the exception handlers that turn
each error into its stable JSON response.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Producto no encontrado."
INTERNAL_ERROR = "Error interno del servidor."


class ProductAPIError(Exception):
    """Base class for errors raised while serving a product request."""


class RequestValidationFailed(ProductAPIError):
    """One or more field rules failed; carries every field error in order."""

    def __init__(self, errors):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class ProductNotFoundError(ProductAPIError):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class StorageError(ProductAPIError):
    """The backing store failed while serving a request."""

    def __init__(self, operation: str):
        super().__init__(f"Storage failure during {operation}")
        self.operation = operation


def register_error_handlers(app: FastAPI) -> None:
    """Register the product error handlers on the FastAPI app."""

    @app.exception_handler(RequestValidationFailed)
    async def validation_failed_handler(request: Request, exc: RequestValidationFailed):
        logger.warning(
            f"Validation failed on {request.method} {request.url.path}: "
            f"{[e['msg'] for e in exc.errors]}"
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": exc.errors},
        )

    @app.exception_handler(ProductNotFoundError)
    async def not_found_handler(request: Request, exc: ProductNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": PRODUCT_NOT_FOUND},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR},
        )
