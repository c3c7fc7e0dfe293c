"""RestController — verifies collaborator accessors and per-method overrides."""

import pytest
from pydantic import BaseModel

from crudkit.core.errors import ConfigurationError, ErrorContext, HttpError
from crudkit.models.user import User
from crudkit.rest.controller import RestController
from crudkit.rest.resource import RestResource
from crudkit.rest.response_handler import ResponseHandler
from crudkit.schemas.base import RestDto
from crudkit.schemas.user import UserCreateDto, UserDto


class PlainModel(BaseModel):
    name: str


class ShortUserDto(RestDto):
    username: str


@pytest.fixture
def resource():
    return RestResource(User, UserDto)


def test_missing_resource_raises(resource):
    controller = RestController(None, ResponseHandler())
    with pytest.raises(ConfigurationError, match="Resource service not set"):
        controller.get_resource()


def test_missing_response_handler_raises(resource):
    controller = RestController(resource)
    with pytest.raises(ConfigurationError, match="ResponseHandler service not set"):
        controller.get_response_handler()


def test_default_name_comes_from_entity(resource):
    assert RestController(resource).name == "UserController"


def test_dto_class_defaults_to_resource(resource):
    controller = RestController(resource, ResponseHandler())
    assert controller.get_dto_class("find_one") is UserDto
    assert controller.get_dto_class() is UserDto


def test_dto_class_override_with_qualified_method(resource):
    controller = RestController(resource, ResponseHandler(), dto_classes={"patch": ShortUserDto})
    assert controller.get_dto_class("UserController::patch") is ShortUserDto
    assert controller.get_dto_class("update") is UserDto


def test_dto_class_must_be_rest_dto(resource):
    controller = RestController(resource, ResponseHandler(), dto_classes={"patch": PlainModel})
    with pytest.raises(ConfigurationError, match="is not a subclass of 'RestDto'"):
        controller.get_dto_class("patch")


def test_form_type_override(resource):
    controller = RestController(resource, ResponseHandler(), form_types={"create": UserCreateDto})
    assert controller.get_form_type("create") is UserCreateDto
    assert controller.get_form_type("update") is UserDto


def test_overrides_are_per_instance(resource):
    first = RestController(resource, ResponseHandler(), form_types={"create": UserCreateDto})
    second = RestController(resource, ResponseHandler())
    assert first.get_form_type("create") is UserCreateDto
    assert second.get_form_type("create") is UserDto


def test_handled_exception_gets_context(resource):
    controller = RestController(resource, ResponseHandler())
    context = ErrorContext(action="find_one", resource="UserController")
    error = controller.handle_rest_method_exception(ValueError("boom"), context)
    assert isinstance(error, HttpError)
    assert error.status_code == 400
    assert error.context is context


def test_existing_context_is_kept(resource):
    controller = RestController(resource, ResponseHandler())
    original = HttpError(409, "Conflict", context=ErrorContext(action="create"))
    result = controller.handle_rest_method_exception(original, ErrorContext(action="update"))
    assert result is original
    assert result.context.action == "create"
