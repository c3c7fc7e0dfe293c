"""Response Handler — serializes action results and surfaces form failures.

Invariants:
    - Entities are serialized through their resource (columns + populated associations)
    - handle_form_error never returns: it raises ValidationFailedError (400)
    - Field paths are dotted strings (`address.city`, `tags.0`)
"""

import logging
from typing import Any, NoReturn, Iterable

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from crudkit.core.errors import FieldError, ValidationFailedError
from crudkit.db.base import Base

logger = logging.getLogger(__name__)


class ResponseHandler:
    """Builds JSON responses for REST actions."""

    def create_response(
        self,
        data: Any,
        status_code: int = 200,
        resource=None,
        populate: Iterable[str] = (),
    ) -> JSONResponse:
        populate = list(populate)
        if resource is not None:
            if isinstance(data, Base):
                data = resource.serialize(data, populate)
            elif isinstance(data, list):
                data = [
                    resource.serialize(item, populate) if isinstance(item, Base) else item
                    for item in data
                ]
        return JSONResponse(status_code=status_code, content=jsonable_encoder(data))

    def handle_form_error(self, errors: list[FieldError]) -> NoReturn:
        logger.info(
            f"Form validation failed: {[e.field for e in errors]}",
        )
        raise ValidationFailedError(errors)


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ValidationError into field-level errors."""
    return [
        FieldError(
            field=".".join(str(loc) for loc in e["loc"]) or "__root__",
            message=e["msg"],
            type=e["type"],
        )
        for e in exc.errors()
    ]
