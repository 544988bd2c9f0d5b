"""HTTP mapping for order exceptions.

Order-specific exceptions get their own status codes; everything else falls
through to Protean's generic handlers (``ValidationError`` → 400,
``ObjectNotFoundError`` → 404).
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers

from catering.order.errors import (
    InvalidStatusTransition,
    OrderAccessDenied,
    OrderConflict,
    OrderNotEditable,
    OrderNotFound,
)

_STATUS_CODES = {
    OrderNotFound: 404,
    OrderAccessDenied: 403,
    InvalidStatusTransition: 409,
    OrderNotEditable: 409,
    OrderConflict: 409,
    ExpectedVersionError: 409,
}


def _error_body(exc: Exception) -> dict:
    messages = getattr(exc, "messages", None)
    return {"error": messages if messages else str(exc)}


def register_error_handlers(app: FastAPI) -> None:
    for exc_class, status_code in _STATUS_CODES.items():

        async def handler(request: Request, exc: Exception, status_code: int = status_code) -> JSONResponse:
            return JSONResponse(status_code=status_code, content=_error_body(exc))

        app.add_exception_handler(exc_class, handler)

    register_exception_handlers(app)
