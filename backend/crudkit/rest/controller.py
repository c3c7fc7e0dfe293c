"""RestController — resource, response handler and per-method DTO/form configuration.

Invariants:
    - Accessors raise ConfigurationError when a collaborator is missing
    - get_dto_class() only ever returns RestDto subclasses
    - Method names may be qualified (`UserController::patch`); only the part
      after the last `::` is used for override lookup
    - DTO/form overrides are instance configuration, never class attributes

Design Decisions:
    - Composition over mixins: actions receive the controller instead of being
      inherited into it
"""

from typing import Mapping

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException
from starlette.requests import Request

from crudkit.core.classify import classify_exception
from crudkit.core.errors import ConfigurationError, ErrorContext, HttpError
from crudkit.core.verbs import validate_rest_method
from crudkit.rest.forms import BoundForm, process_form
from crudkit.rest.resource import RestResource
from crudkit.rest.response_handler import ResponseHandler
from crudkit.schemas.base import RestDto


def _method_name(method: str | None) -> str:
    method = method or ""
    position = method.rfind("::")
    return method[position + 2:] if position > 0 else method


class RestController:
    """Holds what every REST action of one resource needs."""

    def __init__(
        self,
        resource: RestResource | None,
        response_handler: ResponseHandler | None = None,
        dto_classes: Mapping[str, type] | None = None,
        form_types: Mapping[str, type] | None = None,
        name: str | None = None,
    ):
        self.resource = resource
        self.response_handler = response_handler
        self.dto_classes = dict(dto_classes or {})
        self.form_types = dict(form_types or {})
        self.name = name or (
            f"{resource.entity_name}Controller" if resource else type(self).__name__
        )

    def get_resource(self) -> RestResource:
        if not isinstance(self.resource, RestResource):
            raise ConfigurationError("Resource service not set")
        return self.resource

    def get_response_handler(self) -> ResponseHandler:
        if not isinstance(self.response_handler, ResponseHandler):
            raise ConfigurationError("ResponseHandler service not set")
        return self.response_handler

    def get_dto_class(self, method: str | None = None) -> type[RestDto]:
        method = _method_name(method)
        dto_class = self.dto_classes.get(method) or self.get_resource().get_dto_class()
        if not (isinstance(dto_class, type) and issubclass(dto_class, RestDto)):
            raise ConfigurationError(
                f"Given DTO class '{dto_class!r}' is not a subclass of '{RestDto.__name__}'."
            )
        return dto_class

    def get_form_type(self, method: str | None = None) -> type[RestDto]:
        method = _method_name(method)
        return self.form_types.get(method) or self.get_resource().get_form_type()

    def validate_rest_method(
        self, request: Request, allowed_methods: tuple[str, ...],
        context: ErrorContext | None = None,
    ) -> None:
        validate_rest_method(self, request.method, allowed_methods, context)

    def handle_rest_method_exception(
        self, exc: Exception, context: ErrorContext | None = None,
    ) -> HttpError | HTTPException:
        classified = classify_exception(exc)
        if isinstance(classified, HttpError) and context is not None and classified.context.action is None:
            classified.context = context
        return classified

    async def process_form(
        self,
        request: Request,
        db: AsyncSession,
        method: str,
        identifier: str | None = None,
    ) -> BoundForm:
        return await process_form(self, request, db, method, identifier)
