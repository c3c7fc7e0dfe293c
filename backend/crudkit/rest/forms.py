"""Form Processing — binds a request body to the form type of a REST method.

Invariants:
    - Form type: controller override for the method, else the resource default
    - With an identifier the stored entity is loaded BEFORE binding; a missing
      entity raises NoResultFound (404 after classification)
    - PATCH binds partially: stored values fill every field absent from the payload,
      and only payload fields are reported as changed
    - PUT/POST bind fully: the payload alone must validate
    - Without an identifier (create) nothing is loaded
    - An invalid form is handed to the response handler, which raises (400)
"""

import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from crudkit.core.domain_types import HttpMethod
from crudkit.core.errors import FieldError, HttpError
from crudkit.rest.response_handler import field_errors
from crudkit.schemas.base import RestDto


@dataclass
class BoundForm:
    """Result of binding a payload to a form type."""
    valid: bool
    data: RestDto | None = None
    errors: list[FieldError] = field(default_factory=list)
    changed_fields: tuple[str, ...] = ()


async def read_payload(request: Request) -> dict[str, Any]:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        raise HttpError(400, "Request body is not valid JSON")
    if not isinstance(payload, dict):
        raise HttpError(400, "Request body must be a JSON object")
    return payload


def bind_form(
    form_type: type[RestDto],
    payload: dict[str, Any],
    initial: dict[str, Any] | None = None,
    partial: bool = False,
) -> BoundForm:
    """Validate `payload` as `form_type`, over `initial` when binding partially."""
    fields = form_type.model_fields
    if partial:
        data = {k: v for k, v in (initial or {}).items() if k in fields}
        data.update(payload)
        changed = tuple(k for k in payload if k in fields)
    else:
        data = dict(payload)
        changed = tuple(fields)

    try:
        dto = form_type.model_validate(data)
    except ValidationError as e:
        return BoundForm(valid=False, errors=field_errors(e))
    return BoundForm(valid=True, data=dto, changed_fields=changed)


async def process_form(
    controller,
    request: Request,
    db: AsyncSession,
    method: str,
    identifier: str | None = None,
) -> BoundForm:
    form_type = controller.get_form_type(method)
    payload = await read_payload(request)

    initial = None
    if identifier is not None:
        existing = await controller.get_resource().get_dto_for_entity(
            db, identifier, controller.get_dto_class(method),
        )
        initial = existing.model_dump()

    form = bind_form(
        form_type, payload, initial,
        partial=request.method == HttpMethod.PATCH.value,
    )
    if not form.valid:
        controller.get_response_handler().handle_form_error(form.errors)
    return form
