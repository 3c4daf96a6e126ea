from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, ErrorType
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

_VALUE_ERROR_PREFIX = 'Value error, '


def _error_body(
    *, status_code: int, error_type: str, message: str, details: str | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {
        'status': status_code,
        'errorType': error_type,
        'message': message,
    }
    if details is not None:
        body['details'] = details
    return body


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    # ('body', 'seatNumber') -> 'seatNumber'; ('path', 'id') -> 'id'
    parts = [str(p) for p in loc if p not in ('body', 'query', 'path')]
    return '.'.join(parts) if parts else 'body'


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(
            status_code=error.status_code,
            error_type=error.error_type.value,
            message=error.message,
            details=error.details,
        ),
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_type=ErrorType.VALIDATION_ERROR.value,
            message=str(exc),
        ),
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    validation_errors: dict[str, str] = {}
    for err in error.errors():
        message = str(err.get('msg', 'Invalid value')).removeprefix(_VALUE_ERROR_PREFIX)
        validation_errors.setdefault(_field_name(err.get('loc', ())), message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            'status': status.HTTP_400_BAD_REQUEST,
            'error': 'Validation Error',
            'validationErrors': validation_errors,
        },
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'Unhandled {type(exc).__name__} on {request.method} {request.url.path}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_type=ErrorType.INTERNAL_SERVER_ERROR.value,
            message='Internal server error',
        ),
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
