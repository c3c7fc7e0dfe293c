"""Router Builder — registers a controller's REST actions as FastAPI routes.

Invariants:
    - Collection routes (``, `/count`, `/ids`) are registered before `/{id}` routes
    - `/{id}` only accepts UUID-v4 shaped identifiers
    - Query parameters of each operation are described at registration time
      (openapi_extra), never by walking the app's route list afterwards
    - HEAD is served by its own route, hidden from the schema, so every
      documented operation has a unique operationId
"""

from typing import Sequence

from fastapi import APIRouter, Depends, Path, params
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from crudkit.core.domain_types import UUID_V4_PATTERN, HttpMethod
from crudkit.infrastructure.database import get_db
from crudkit.rest.actions import RestAction
from crudkit.rest.controller import RestController
from crudkit.rest.describer.parameters import Parameters


def build_rest_router(
    controller: RestController,
    actions: Sequence[type[RestAction]],
    prefix: str,
    tags: list[str] | None = None,
    dependencies: Sequence[params.Depends] | None = None,
    describer: Parameters | None = None,
) -> APIRouter:
    """APIRouter exposing `actions` of `controller` under `prefix`."""
    router = APIRouter(prefix=prefix, tags=tags, dependencies=dependencies)
    describer = describer or Parameters()
    instances = sorted(
        (action_class(controller) for action_class in actions),
        key=lambda a: a.metadata.requires_identifier,
    )
    entity_name = controller.get_resource().entity_name
    for action in instances:
        endpoint = _endpoint(action)
        name = f"{controller.name}.{action.name}"
        methods = [m for m in action.metadata.allowed_methods if m != HttpMethod.HEAD.value]
        router.add_api_route(
            action.metadata.path,
            endpoint,
            methods=methods,
            status_code=action.metadata.status_code,
            name=name,
            summary=f"{action.name.replace('_', ' ').capitalize()} {entity_name}",
            openapi_extra=describe_operation(action, describer),
        )
        if HttpMethod.HEAD.value in action.metadata.allowed_methods:
            router.add_api_route(
                action.metadata.path,
                endpoint,
                methods=[HttpMethod.HEAD.value],
                status_code=action.metadata.status_code,
                name=f"{name}.head",
                include_in_schema=False,
            )
    return router


def describe_operation(action: RestAction, describer: Parameters) -> dict:
    """OpenAPI fragment merged into the generated operation of `action`.

    The `id` path parameter is documented here instead of from the endpoint
    signature, so the describer can annotate it.
    """
    operation: dict = {"parameters": []}
    if action.metadata.requires_identifier:
        operation["parameters"].append({
            "name": "id",
            "in": "path",
            "required": True,
            "schema": {"type": "string", "pattern": UUID_V4_PATTERN},
        })
    return describer.process(
        operation, action.metadata.name, action.controller.get_resource(),
    )


def _endpoint(action: RestAction):
    if action.metadata.requires_identifier:
        async def endpoint(
            request: Request,
            id: str = Path(..., pattern=UUID_V4_PATTERN, include_in_schema=False),
            db: AsyncSession = Depends(get_db),
        ):
            return await action.dispatch(request, db, id)
    else:
        async def endpoint(request: Request, db: AsyncSession = Depends(get_db)):
            return await action.dispatch(request, db)

    endpoint.__name__ = f"{action.name}_action"
    return endpoint
