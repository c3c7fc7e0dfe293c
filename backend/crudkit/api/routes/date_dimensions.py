"""DateDimension Routes — read-only; rows come from `crudkit create-date-dimension-entities`."""

from crudkit.config import get_settings
from crudkit.resources.date_dimension import DateDimensionResource
from crudkit.rest.actions import READ_ONLY_ACTIONS
from crudkit.rest.controller import RestController
from crudkit.rest.response_handler import ResponseHandler
from crudkit.rest.router import build_rest_router

controller = RestController(DateDimensionResource(), ResponseHandler())

router = build_rest_router(
    controller, READ_ONLY_ACTIONS, f"{get_settings().api_prefix}/date_dimensions",
    tags=["date dimensions"],
)
