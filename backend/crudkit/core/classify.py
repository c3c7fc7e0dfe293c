"""Exception Classifier — maps any error raised inside a REST action to an HTTP error.

Invariants:
    - Rules apply in fixed priority order; a specific rule is never overridden
      by the generic fallback
    - Pre-classified errors (HttpError, Starlette HTTPException) are returned unchanged
    - NoResultFound → 404, MultipleResultsFound → 500, regardless of origin layer
    - Fallback status is the exception's own integer `code` when it is a usable
      HTTP status, else 400
    - Other database errors get a generic message; the driver text, which can
      carry SQL and bound values, is only logged
"""

import logging

from sqlalchemy.exc import MultipleResultsFound, NoResultFound, SQLAlchemyError
from starlette.exceptions import HTTPException

from crudkit.core.errors import ConfigurationError, HttpError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_STATUS = 400
DATABASE_ERROR_MESSAGE = "Request could not be processed by the database"


def classify_exception(exc: Exception) -> HttpError | HTTPException:
    """Convert `exc` into a classified HTTP error.

    ConfigurationError is rejected here: wiring defects must not be
    disguised as client errors.
    """
    if isinstance(exc, ConfigurationError):
        raise TypeError("ConfigurationError cannot be classified") from exc

    if isinstance(exc, (HttpError, HTTPException)):
        return exc

    if isinstance(exc, NoResultFound):
        return NotFoundError("Not found", cause=exc)

    if isinstance(exc, MultipleResultsFound):
        return HttpError(500, str(exc), cause=exc)

    if isinstance(exc, SQLAlchemyError):
        logger.warning(f"Database error: {exc}", extra={"error_type": type(exc).__name__})
        return HttpError(status_from_code(exc), DATABASE_ERROR_MESSAGE, cause=exc)

    return HttpError(status_from_code(exc), str(exc), cause=exc)


def status_from_code(exc: Exception) -> int:
    """Status carried by the exception itself, or DEFAULT_STATUS."""
    code = getattr(exc, "code", 0)
    if isinstance(code, bool) or not isinstance(code, int):
        return DEFAULT_STATUS
    if code == 0 or not 100 <= code <= 599:
        return DEFAULT_STATUS
    return code
