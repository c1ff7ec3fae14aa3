import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from shared.core.exceptions import ServiceException
from shared.helpers.json_response_helper import failure_result
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(ServiceException)
    async def service_exception_handler(request: Request, exc: ServiceException):
        if exc.http_status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)

        wrapped = failure_result(
            message=exc.message,
            status_code=exc.app_status_code,
            errors=jsonable_encoder(exc.errors)
        )
        return JSONResponse(content=wrapped, status_code=exc.http_status)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        wrapped = failure_result(
            message=str(exc.detail),
            status_code=str(exc.status_code or AppStatusCode.OPERATION_FAILED)
        )
        return JSONResponse(content=wrapped, status_code=exc.status_code or 400)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = failure_result(
            message="Validation failed",
            status_code=AppStatusCode.INVALID_INPUT,
            errors=jsonable_encoder(exc.errors())
        )
        return JSONResponse(content=wrapped, status_code=422)

    @app.exception_handler(ValidationError)
    async def schema_exception_handler(request: Request, exc: ValidationError):
        # Raised when a JSON form field does not match its schema
        wrapped = failure_result(
            message="Validation failed",
            status_code=AppStatusCode.INVALID_INPUT,
            errors=jsonable_encoder(exc.errors(include_url=False, include_context=False))
        )
        return JSONResponse(content=wrapped, status_code=422)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

        wrapped = failure_result(
            message="An internal server error occurred",
            status_code=AppStatusCode.INTERNAL_ERROR
        )
        return JSONResponse(content=wrapped, status_code=500)
