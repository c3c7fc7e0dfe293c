"""Domain Types — action metadata and HTTP verb enums shared by every REST action.

Invariants:
    - Every action has exactly one ActionMetadata, defined once in ACTIONS
    - Allow-lists are tuples of upper-case HTTP verbs
    - Identifier-bearing actions route on `/{id}` with a UUID-v4 shaped id
"""

from dataclasses import dataclass
from enum import Enum


UUID_V4_PATTERN = (
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


class HttpMethod(str, Enum):
    """HTTP verbs understood by the REST actions."""
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ActionName(str, Enum):
    """REST action names — also the method names used for DTO/form overrides."""
    FIND = "find"
    FIND_ONE = "find_one"
    CREATE = "create"
    UPDATE = "update"
    PATCH = "patch"
    DELETE = "delete"
    COUNT = "count"
    IDS = "ids"


@dataclass(frozen=True)
class ActionMetadata:
    """Static description of one REST action."""
    name: ActionName
    allowed_methods: tuple[str, ...]
    requires_identifier: bool = False
    path: str = ""
    status_code: int = 200


ACTIONS: dict[ActionName, ActionMetadata] = {
    ActionName.FIND: ActionMetadata(
        ActionName.FIND, (HttpMethod.GET.value, HttpMethod.HEAD.value),
    ),
    ActionName.COUNT: ActionMetadata(
        ActionName.COUNT, (HttpMethod.GET.value, HttpMethod.HEAD.value),
        path="/count",
    ),
    ActionName.IDS: ActionMetadata(
        ActionName.IDS, (HttpMethod.GET.value, HttpMethod.HEAD.value),
        path="/ids",
    ),
    ActionName.FIND_ONE: ActionMetadata(
        ActionName.FIND_ONE, (HttpMethod.GET.value, HttpMethod.HEAD.value),
        requires_identifier=True, path="/{id}",
    ),
    ActionName.CREATE: ActionMetadata(
        ActionName.CREATE, (HttpMethod.POST.value,),
        status_code=201,
    ),
    ActionName.UPDATE: ActionMetadata(
        ActionName.UPDATE, (HttpMethod.PUT.value,),
        requires_identifier=True, path="/{id}",
    ),
    ActionName.PATCH: ActionMetadata(
        ActionName.PATCH, (HttpMethod.PATCH.value,),
        requires_identifier=True, path="/{id}",
    ),
    ActionName.DELETE: ActionMetadata(
        ActionName.DELETE, (HttpMethod.DELETE.value,),
        requires_identifier=True, path="/{id}",
    ),
}
