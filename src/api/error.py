"""API error types and handlers

Use case errors are raised as ClientError and rendered as
{"error": {"code": ..., "message": ...}}.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from libs.result import Error

logger = logging.getLogger(__name__)

CONFLICT_CODES = {
    "INVALID_STATUS_TRANSITION",
    "INVOICE_NOT_EDITABLE",
    "INVOICE_NOT_SENDABLE",
}

EXPLICIT_STATUS_CODES = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "EMAIL_DELIVERY_FAILED": status.HTTP_502_BAD_GATEWAY,
}


def status_code_for(error: Error) -> int:
    """Map an error code to its HTTP status"""
    if error.code in EXPLICIT_STATUS_CODES:
        return EXPLICIT_STATUS_CODES[error.code]
    if error.code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    if error.code.endswith("_ALREADY_EXISTS") or error.code in CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


class ClientError(Exception):
    """Error caused by the request, carries a use case Error"""

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_code_for(error)

    def to_response(self) -> dict:
        return {"error": {"code": self.error.code, "message": self.error.message}}


def _error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


async def _client_error_handler(request: Request, exc: ClientError):
    if exc.status_code >= 500:
        logger.error(
            f"client_error | method={request.method} url={request.url.path} "
            f"code={exc.error.code} reason={exc.error.reason}"
        )
    else:
        logger.info(
            f"client_error | method={request.method} url={request.url.path} "
            f"status_code={exc.status_code} code={exc.error.code}"
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    """Format validation errors as a single readable message"""
    error_messages = []
    for err in exc.errors():
        field_path = " -> ".join(str(loc) for loc in err.get("loc", []))
        error_messages.append(f"{field_path}: {err.get('msg', 'Invalid input')}")

    logger.warning(
        f"validation_error | method={request.method} url={request.url.path} errors={error_messages}"
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("VALIDATION_ERROR", "; ".join(error_messages) or "Invalid request data"),
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code = "NOT_FOUND"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        code = "METHOD_NOT_ALLOWED"
    else:
        code = "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _general_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"unhandled_exception | method={request.method} url={request.url.path} "
        f"exception_type={type(exc).__name__} exception_message={exc}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("INTERNAL_SERVER_ERROR", "Something went wrong"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the given FastAPI instance."""
    app.add_exception_handler(ClientError, _client_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _general_exception_handler)


def error_example(description: str, code: str, message: str) -> dict:
    """OpenAPI `responses` entry for an error body"""
    return {
        "description": description,
        "content": {
            "application/json": {
                "example": {"error": {"code": code, "message": message}}
            }
        },
    }
