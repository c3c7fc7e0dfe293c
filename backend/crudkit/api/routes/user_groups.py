"""UserGroup Routes — full CRUD through the generic REST actions."""

from crudkit.config import get_settings
from crudkit.resources.user_group import create_user_group_resource
from crudkit.rest.actions import ALL_ACTIONS
from crudkit.rest.controller import RestController
from crudkit.rest.response_handler import ResponseHandler
from crudkit.rest.router import build_rest_router

controller = RestController(create_user_group_resource(), ResponseHandler())

router = build_rest_router(
    controller, ALL_ACTIONS, f"{get_settings().api_prefix}/user_groups",
    tags=["user groups"],
)
