"""REST Actions — verifies the shared dispatch pipeline.

Tests:
    - A rejected verb never reaches the resource
    - Resource failures leave dispatch() classified (404 / 500 / passthrough)
    - ConfigurationError propagates untouched
    - Successful actions answer with the action's status code
"""

import json

import pytest
from sqlalchemy.exc import MultipleResultsFound, NoResultFound

from crudkit.core.errors import (
    ConfigurationError, HttpError, MethodNotAllowedError, NotFoundError,
)
from crudkit.core.domain_types import HttpMethod
from crudkit.rest.actions import (
    ALL_ACTIONS, CountAction, CreateAction, DeleteAction, FindAction,
    FindOneAction, IdsAction, PatchAction,
)
from crudkit.rest.controller import RestController
from crudkit.rest.response_handler import ResponseHandler

USER_ID = "5b9f2a3e-8c1d-4e6f-9a2b-3c4d5e6f7a8b"


def controller_for(resource):
    return RestController(resource, ResponseHandler())


REJECTED_VERBS = [
    (action_class, method.value)
    for action_class in ALL_ACTIONS
    for method in HttpMethod
    if method.value not in action_class.metadata.allowed_methods
]


def test_every_action_rejects_some_verbs():
    assert {action_class for action_class, _ in REJECTED_VERBS} == set(ALL_ACTIONS)


@pytest.mark.parametrize("action_class, method", REJECTED_VERBS)
async def test_rejected_verb_never_reaches_resource(make_request, make_resource, action_class, method):
    resource = make_resource()
    action = action_class(controller_for(resource))

    with pytest.raises(MethodNotAllowedError) as info:
        await action.dispatch(make_request(method), None, USER_ID)

    assert resource.calls == []
    assert info.value.context.action == action.name


async def test_no_result_becomes_not_found(make_request, make_resource):
    original = NoResultFound("No row was found")
    action = DeleteAction(controller_for(make_resource(raises=original)))

    with pytest.raises(NotFoundError) as info:
        await action.dispatch(make_request("DELETE"), None, USER_ID)

    assert info.value.status_code == 404
    assert info.value.__cause__ is original
    assert info.value.context.identifier == USER_ID


async def test_multiple_results_become_500(make_request, make_resource):
    action = FindOneAction(controller_for(make_resource(raises=MultipleResultsFound("many"))))

    with pytest.raises(HttpError) as info:
        await action.dispatch(make_request("GET"), None, USER_ID)

    assert info.value.status_code == 500


async def test_classified_error_is_reraised_as_is(make_request, make_resource):
    original = HttpError(409, "Conflict")
    action = FindAction(controller_for(make_resource(raises=original)))

    with pytest.raises(HttpError) as info:
        await action.dispatch(make_request("GET"), None)

    assert info.value is original


async def test_configuration_error_propagates(make_request):
    action = FindAction(RestController(None, ResponseHandler(), name="BrokenController"))

    with pytest.raises(ConfigurationError):
        await action.dispatch(make_request("GET"), None)


async def test_find_passes_query_to_resource(make_request, make_resource):
    resource = make_resource()
    action = FindAction(controller_for(resource))

    response = await action.dispatch(
        make_request("GET", query="order=-username&limit=5&search=john"), None,
    )

    assert response.status_code == 200
    _, kwargs = resource.calls[0]
    assert kwargs["order_by"] == {"username": "DESC"}
    assert kwargs["limit"] == 5
    assert kwargs["search"] == {"or": ["john"]}


async def test_count_wraps_number(make_request, make_resource):
    response = await CountAction(controller_for(make_resource())).dispatch(
        make_request("GET"), None,
    )
    assert json.loads(response.body) == {"count": 3}


async def test_ids_returns_list(make_request, make_resource):
    response = await IdsAction(controller_for(make_resource())).dispatch(
        make_request("HEAD"), None,
    )
    assert json.loads(response.body) == ["a", "b"]


async def test_create_answers_201(make_request, make_resource, john):
    resource = make_resource()
    response = await CreateAction(controller_for(resource)).dispatch(
        make_request("POST", body=john), None,
    )
    assert response.status_code == 201
    assert resource.calls[0][0] == "create"


async def test_patch_sends_changed_fields(make_request, make_resource, john):
    resource = make_resource(stored=john)
    response = await PatchAction(controller_for(resource)).dispatch(
        make_request("PATCH", body={"first_name": "Johnny"}), None, USER_ID,
    )
    assert response.status_code == 200
    name, identifier, dto, fields = resource.calls[-1]
    assert (name, identifier, fields) == ("patch", USER_ID, ("first_name",))
    assert dto.last_name == "Doe"
