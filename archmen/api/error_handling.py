"""
API error handling.

handle_api_errors maps the application exception hierarchy to
HTTPExceptions so every route reports failures the same way.

    ValidationError (incl. ChunkingConfigurationError) -> 400
    AuthenticationError                              -> 401
    NotFoundError                                    -> 404
    ConflictError (session transitions, duplicates)  -> 409
    anything else                                    -> 500 with detail
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from archmen.core.exceptions import (
    ArchMenException,
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from archmen.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _detail(e: ArchMenException) -> dict[str, Any]:
    return {"error": e.message, "details": e.details}


def handle_api_errors(func: F) -> F:
    """
    Decorator to transform application errors into HTTPExceptions.

    Client errors are logged as warnings; unexpected failures are logged
    with their traceback and returned as 500 with the error message.
    HTTPExceptions raised by the route pass through unchanged.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ValidationError as e:
            log_with_context(logger, logging.WARNING, "Invalid request", error=e.message, details=e.details)
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=_detail(e))

        except AuthenticationError as e:
            logger.warning("Authentication failed", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=_detail(e),
                headers={"WWW-Authenticate": "Bearer"},
            )

        except NotFoundError as e:
            log_with_context(logger, logging.WARNING, "Resource not found", error=e.message, details=e.details)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_detail(e))

        except ConflictError as e:
            log_with_context(logger, logging.WARNING, "Conflicting request", error=e.message, details=e.details)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=_detail(e))

        except ArchMenException as e:
            logger.exception("Operation failed", extra={"error": e.message, "details": e.details})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": "Internal server error", "details": e.message},
            )

        except Exception as e:
            logger.exception("Unexpected failure", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": "Internal server error", "details": str(e)},
            )

    return wrapper  # type: ignore
