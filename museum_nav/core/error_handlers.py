"""
Error handlers for the FastAPI application.
Every failure leaves the API in the same ``{success, data, message, error}``
envelope as a successful response.
"""

from fastapi import Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import traceback
import time
from typing import Dict, Any, Optional

from museum_nav.core.exceptions import MuseumNavException, ErrorCode
from museum_nav.schemas.base import fail

logger = logging.getLogger(__name__)


class ErrorHandler:
    """
    Maps exceptions to envelope responses, logs them with request context
    and keeps per-code counters for the health endpoint.
    """

    def __init__(self, expose_tracebacks: bool = True):
        self.expose_tracebacks = expose_tracebacks
        self.error_counts: Dict[str, int] = {}
        self.last_error_time: Dict[str, float] = {}

    async def handle_museum_nav_exception(
        self,
        request: Request,
        exc: MuseumNavException
    ) -> JSONResponse:
        request_id = getattr(request.state, 'request_id', 'unknown')

        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            f"{type(exc).__name__} in request {request_id}: {exc.message}",
            extra={
                'request_id': request_id,
                'error_code': exc.error_code.value,
                'status_code': exc.status_code,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )

        self._track_error(exc.error_code.value)

        return self._create_error_response(
            message=exc.message,
            status_code=exc.status_code,
            error=exc.details or exc.message,
        )

    async def handle_validation_error(
        self,
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """
        Malformed bodies (e.g. invalid JSON) are client errors and map to 400.
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        validation_errors = []
        for error in exc.errors():
            validation_errors.append({
                'field': '.'.join(str(loc) for loc in error['loc']),
                'message': error['msg'],
                'type': error['type'],
            })

        logger.info(
            f"Validation error in request {request_id}: {len(validation_errors)} field errors",
            extra={
                'request_id': request_id,
                'validation_errors': validation_errors,
                'request_path': request.url.path
            }
        )

        self._track_error(ErrorCode.VALIDATION_ERROR.value)

        return self._create_error_response(
            message="Invalid request payload",
            status_code=400,
            error={'validation_errors': validation_errors},
        )

    async def handle_http_exception(
        self,
        request: Request,
        exc: StarletteHTTPException
    ) -> JSONResponse:
        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.warning(
            f"HTTP exception in request {request_id}: {exc.status_code} - {exc.detail}",
            extra={
                'request_id': request_id,
                'status_code': exc.status_code,
                'request_path': request.url.path
            }
        )

        return self._create_error_response(
            message=str(exc.detail),
            status_code=exc.status_code,
            error=str(exc.detail),
            headers=getattr(exc, 'headers', None),
        )

    async def handle_generic_exception(
        self,
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.error(
            f"Unhandled exception in request {request_id}: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                'request_id': request_id,
                'exception_type': type(exc).__name__,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )

        self._track_error(ErrorCode.INTERNAL_SERVER_ERROR.value)

        error = None
        if self.expose_tracebacks:
            error = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        return self._create_error_response(
            message="An internal server error occurred",
            status_code=500,
            error=error,
        )

    def _create_error_response(
        self,
        message: str,
        status_code: int,
        error: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(fail(message, error)),
            headers=headers,
        )

    def _track_error(self, error_code: str) -> None:
        current_time = time.time()

        self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1
        self.last_error_time[error_code] = current_time

        if self.error_counts[error_code] % 10 == 0:
            logger.warning(
                f"High frequency error detected: {error_code} occurred {self.error_counts[error_code]} times"
            )

    def get_error_statistics(self) -> Dict[str, Any]:
        current_time = time.time()

        return {
            'error_counts': dict(self.error_counts),
            'recent_errors': {
                code: count for code, count in self.error_counts.items()
                if current_time - self.last_error_time.get(code, 0) < 3600  # Last hour
            },
            'total_errors': sum(self.error_counts.values())
        }


def setup_error_handlers(app, expose_tracebacks: bool = True) -> ErrorHandler:
    """
    Register all exception handlers on the application.

    Returns:
        The ErrorHandler instance, also stored on ``app.state.error_handler``
    """
    error_handler = ErrorHandler(expose_tracebacks=expose_tracebacks)
    app.state.error_handler = error_handler

    @app.exception_handler(MuseumNavException)
    async def museum_nav_exception_handler(request: Request, exc: MuseumNavException):
        return await error_handler.handle_museum_nav_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return await error_handler.handle_validation_error(request, exc)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return await error_handler.handle_http_exception(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException):
        return await error_handler.handle_http_exception(request, exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return await error_handler.handle_generic_exception(request, exc)

    return error_handler
