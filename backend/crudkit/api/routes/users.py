"""User Routes — full CRUD through the generic REST actions.

Invariants:
    - POST binds UserCreateDto (username lower-cased); PUT/PATCH bind UserDto
    - GET /users/{id}?populate[]=User.groups embeds group membership
"""

from crudkit.config import get_settings
from crudkit.resources.user import create_user_resource
from crudkit.rest.actions import ALL_ACTIONS
from crudkit.rest.controller import RestController
from crudkit.rest.response_handler import ResponseHandler
from crudkit.rest.router import build_rest_router
from crudkit.schemas.user import UserCreateDto

controller = RestController(
    create_user_resource(),
    ResponseHandler(),
    form_types={"create": UserCreateDto},
)

router = build_rest_router(
    controller, ALL_ACTIONS, f"{get_settings().api_prefix}/users", tags=["users"],
)
