"""Translate exceptions raised below the router into HTTP responses."""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse
from src.core.exceptions import InvalidRequestError, RecordNotFoundError

logger = logging.getLogger(__name__)


def serialize_error(exc: Exception) -> dict[str, str]:
    """Raw error content as a JSON object, no sanitization."""
    return ErrorResponse(error=type(exc).__name__, message=str(exc)).model_dump()


def server_error_response(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=serialize_error(exc),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: Request, exc: RecordNotFoundError) -> Response:
        logger.debug("%s %s: %s", request.method, request.url.path, exc)
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=serialize_error(exc),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        # Unparseable JSON is a plain bad request; anything else keeps FastAPI's 422
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"detail": jsonable_encoder(exc.errors())},
            )
        return await request_validation_exception_handler(request, exc)
