import logging
from functools import wraps
from typing import Any, Callable, Coroutine, Optional, TypeVar

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi import Request
from fastapi.responses import JSONResponse

from .logging_config import configure_logging
from .result import Result
from .status import StatusCode

configure_logging()
logger = logging.getLogger(__name__)

NOT_EXIST_MARKER = "NOT_EXIST"
T = TypeVar("T")


class APIException(Exception):
    """Base exception for API errors, carrying a message and HTTP status code."""

    def __init__(self, message: str, code: int = StatusCode.INTERNAL_SERVER_ERROR):
        super().__init__(message)
        self.code = code
        self.message = message


class CatalogErrorException(APIException):
    """A failed facade result travelling towards the error translation layer."""

    def __init__(self, result: Result[Any], code: int) -> None:
        super().__init__(", ".join(result.keys()) or "ERROR", code)
        self.result = result

    def __repr__(self) -> str:
        return f"CatalogErrorException(code={int(self.code)}, keys={self.result.keys()})"


class InputException(CatalogErrorException):
    """Error raised by the web layer itself, outside of any facade."""

    def __init__(
        self,
        key: str,
        message: str,
        code: int = StatusCode.UNPROCESSABLE_ENTITY,
    ) -> None:
        super().__init__(Result.error(key, message), code)


def error_status(result: Result[Any]) -> StatusCode:
    """Return 404 when any event reports a missing record, 422 otherwise."""
    if any(NOT_EXIST_MARKER in key for key in result.keys()):
        return StatusCode.NOT_FOUND
    return StatusCode.UNPROCESSABLE_ENTITY


def process_result(result: Result[T], *, required: bool = False) -> Optional[T]:
    """Unwrap a facade result.

    Args:
        result (Result[T]): Outcome returned by a facade.
        required (bool): When ``True`` the data must be present, which holds
            for endpoints that always produce a value (lists, counters).

    Returns:
        Optional[T]: The result data.

    Raises:
        CatalogErrorException: If the result carries an error event.
        ValueError: If ``result`` is ``None`` or required data is missing.
    """
    if result is None:
        raise ValueError("Result mustn't be None.")
    if result.is_error():
        raise CatalogErrorException(result, error_status(result))
    if required and result.data is None:
        raise ValueError("Result data mustn't be None.")
    return result.data


F = TypeVar("F", bound=Callable[..., Coroutine[Any, Any, Any]])


def handle_exceptions(func: F) -> F:
    """Decorator wrapping controller methods with logging and error conversion.

    Structured failures propagate unchanged. Anything unexpected is logged with
    its traceback and converted into a 500 ``ERROR`` result.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        logger.info(f"Executing {func.__name__} with args={args[1:]} kwargs={kwargs}")
        try:
            result = await func(*args, **kwargs)
        except CatalogErrorException as e:
            logger.error(
                f"CatalogErrorException in {func.__name__}: {e.message} (code={int(e.code)})"
            )
            raise
        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"Unhandled exception in {func.__name__}: {e}")
            raise CatalogErrorException(
                Result.error("ERROR", f"{type(e).__name__}: {e}"),
                StatusCode.INTERNAL_SERVER_ERROR,
            ) from e
        logger.info(f"{func.__name__} completed successfully.")
        return result

    return wrapper  # type: ignore


class Controller:
    """Base controller holding the package logger.

    Subclasses decorate their endpoint methods with :func:`handle_exceptions`.
    """

    def __init__(self) -> None:
        self.logger = logger


async def _catalog_error_handler(
    request: Request, exc: CatalogErrorException
) -> JSONResponse:
    return JSONResponse(status_code=int(exc.code), content=exc.result.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Translate structured catalog errors into JSON error responses."""

    app.add_exception_handler(CatalogErrorException, _catalog_error_handler)


__all__ = [
    "APIException",
    "CatalogErrorException",
    "Controller",
    "InputException",
    "error_status",
    "handle_exceptions",
    "process_result",
    "register_exception_handlers",
]
