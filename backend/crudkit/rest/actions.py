"""REST Actions — one object per verb, all sharing a single dispatch pipeline.

Invariants:
    - dispatch() validates the verb before anything else; a rejected verb never
      reaches the resource
    - Body-bearing actions (create/update/patch) bind a form before the resource call
    - Every exception except ConfigurationError leaves dispatch() classified
      (HttpError or Starlette HTTPException)
    - ConfigurationError propagates untouched

Design Decisions:
    - Subclasses only implement perform(); metadata comes from core.domain_types.ACTIONS
"""

import logging

from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from crudkit.core.domain_types import ACTIONS, ActionMetadata, ActionName
from crudkit.core.errors import ConfigurationError, ErrorContext
from crudkit.core.verbs import validate_rest_method
from crudkit.rest import request_params

logger = logging.getLogger(__name__)


class RestAction:
    """Fixed pipeline: verb check → perform() → classify failures."""

    metadata: ActionMetadata

    def __init__(self, controller):
        self.controller = controller

    @property
    def name(self) -> str:
        return self.metadata.name.value

    async def dispatch(
        self, request: Request, db: AsyncSession, identifier: str | None = None,
    ) -> Response:
        context = ErrorContext(
            action=self.name,
            resource=getattr(self.controller, "name", None),
            identifier=identifier,
        )
        try:
            validate_rest_method(
                self.controller, request.method, self.metadata.allowed_methods, context,
            )
            return await self.perform(request, db, identifier)
        except ConfigurationError:
            logger.critical(
                f"REST action '{self.name}' is misconfigured",
                extra={"action": self.name, "path": request.url.path},
                exc_info=True,
            )
            raise
        except Exception as exc:
            classified = self.controller.handle_rest_method_exception(exc, context)
            status = getattr(classified, "status_code", 500)
            log = logger.error if status >= 500 else logger.info
            log(
                f"REST action '{self.name}' failed with {status}: {exc}",
                extra={
                    "action": self.name,
                    "path": request.url.path,
                    "method": request.method,
                    "identifier": identifier,
                },
            )
            if classified is exc:
                raise
            raise classified from exc

    async def perform(
        self, request: Request, db: AsyncSession, identifier: str | None,
    ) -> Response:
        raise NotImplementedError

    def _respond(self, data, status_code: int | None = None, populate=()) -> Response:
        return self.controller.get_response_handler().create_response(
            data,
            status_code=status_code or self.metadata.status_code,
            resource=self.controller.get_resource(),
            populate=populate,
        )


class FindAction(RestAction):
    metadata = ACTIONS[ActionName.FIND]

    async def perform(self, request, db, identifier):
        params = request.query_params
        populate = request_params.get_populate(params)
        entities = await self.controller.get_resource().find(
            db,
            criteria=request_params.get_criteria(params),
            order_by=request_params.get_order_by(params),
            limit=request_params.get_limit(params),
            offset=request_params.get_offset(params),
            search=request_params.get_search_terms(params),
            populate=populate,
        )
        return self._respond(entities, populate=populate)


class FindOneAction(RestAction):
    metadata = ACTIONS[ActionName.FIND_ONE]

    async def perform(self, request, db, identifier):
        populate = request_params.get_populate(request.query_params)
        entity = await self.controller.get_resource().find_one(
            db, identifier, throw_if_not_found=True, populate=populate,
        )
        return self._respond(entity, populate=populate)


class CreateAction(RestAction):
    metadata = ACTIONS[ActionName.CREATE]

    async def perform(self, request, db, identifier):
        form = await self.controller.process_form(request, db, self.name)
        entity = await self.controller.get_resource().create(db, form.data)
        return self._respond(entity)


class UpdateAction(RestAction):
    metadata = ACTIONS[ActionName.UPDATE]

    async def perform(self, request, db, identifier):
        form = await self.controller.process_form(request, db, self.name, identifier)
        entity = await self.controller.get_resource().update(
            db, identifier, form.data, form.changed_fields,
        )
        return self._respond(entity)


class PatchAction(RestAction):
    metadata = ACTIONS[ActionName.PATCH]

    async def perform(self, request, db, identifier):
        form = await self.controller.process_form(request, db, self.name, identifier)
        entity = await self.controller.get_resource().patch(
            db, identifier, form.data, form.changed_fields,
        )
        return self._respond(entity)


class DeleteAction(RestAction):
    metadata = ACTIONS[ActionName.DELETE]

    async def perform(self, request, db, identifier):
        entity = await self.controller.get_resource().delete(db, identifier)
        return self._respond(entity)


class CountAction(RestAction):
    metadata = ACTIONS[ActionName.COUNT]

    async def perform(self, request, db, identifier):
        params = request.query_params
        count = await self.controller.get_resource().count(
            db,
            criteria=request_params.get_criteria(params),
            search=request_params.get_search_terms(params),
        )
        return self._respond({"count": count})


class IdsAction(RestAction):
    metadata = ACTIONS[ActionName.IDS]

    async def perform(self, request, db, identifier):
        params = request.query_params
        ids = await self.controller.get_resource().ids(
            db,
            criteria=request_params.get_criteria(params),
            search=request_params.get_search_terms(params),
        )
        return self._respond(ids)


ALL_ACTIONS: tuple[type[RestAction], ...] = (
    FindAction, CountAction, IdsAction, FindOneAction,
    CreateAction, UpdateAction, PatchAction, DeleteAction,
)

READ_ONLY_ACTIONS: tuple[type[RestAction], ...] = (
    FindAction, CountAction, IdsAction, FindOneAction,
)
