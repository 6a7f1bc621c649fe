"""HTTP error type and exception handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from virtual_fridge.errors import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationFailedError,
    VirtualFridgeError,
)

_DOMAIN_STATUS: list[tuple[type[VirtualFridgeError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (ValidationFailedError, status.HTTP_400_BAD_REQUEST),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
]

_logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error rendered as a JSON body with the given status code."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        error: str | None = None,
        details: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message or error or "")
        self.status_code = status_code
        self.message = message
        self.error = error
        self.details = details

    def to_body(self) -> dict[str, object]:
        body: dict[str, object] = {}
        if self.error is not None:
            body["error"] = self.error
        if self.message is not None:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on the application."""

    @app.exception_handler(ApiError)
    async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(VirtualFridgeError)
    async def domain_error_handler(
        request: Request, exc: VirtualFridgeError
    ) -> JSONResponse:
        for error_type, status_code in _DOMAIN_STATUS:
            if isinstance(exc, error_type):
                return JSONResponse(
                    status_code=status_code, content={"message": str(exc)}
                )
        return await unhandled_error_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {
                "field": ".".join(
                    str(part) for part in error["loc"] if part not in {"body", "query"}
                ),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Validation error",
                "message": "Invalid input data",
                "details": details,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "error": "Route not found",
                    "message": f"Cannot {request.method} {request.url.path}",
                    "path": request.url.path,
                    "method": request.method,
                },
            )
        return JSONResponse(
            status_code=exc.status_code, content={"message": str(exc.detail)}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        _logger.exception(
            "Unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )
