"""REST test fixtures — real Starlette requests and a recording resource.

Design Decisions:
    - Requests are built from a raw ASGI scope so actions see the same object
      FastAPI would hand them, without routing
"""

import json

import pytest
from starlette.requests import Request

from crudkit.models.user import User
from crudkit.rest.resource import RestResource
from crudkit.schemas.user import UserDto


def build_request(method: str, path: str = "/users", query: str = "", body=None) -> Request:
    if body is None:
        raw = b""
    elif isinstance(body, (bytes, str)):
        raw = body.encode() if isinstance(body, str) else body
    else:
        raw = json.dumps(body).encode()
    sent = False

    async def receive():
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": raw, "more_body": False}

    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "root_path": "",
        "scheme": "http",
        "query_string": query.encode(),
        "headers": [(b"content-type", b"application/json")],
        "server": ("test", 80),
        "client": ("127.0.0.1", 1234),
    }
    return Request(scope, receive)


class RecordingResource(RestResource):
    """User resource whose operations record calls and return canned values."""

    def __init__(self, raises: Exception | None = None, stored: dict | None = None):
        super().__init__(User, UserDto, search_columns=("username",))
        self.calls: list[tuple] = []
        self.raises = raises
        self.stored = stored

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.raises is not None:
            raise self.raises

    async def find(self, db, **kwargs):
        self._record("find", kwargs)
        return [{"username": "john"}]

    async def find_one(self, db, id, throw_if_not_found=False, populate=()):
        self._record("find_one", id)
        return {"id": id}

    async def count(self, db, criteria=None, search=None):
        self._record("count", criteria, search)
        return 3

    async def ids(self, db, criteria=None, search=None):
        self._record("ids", criteria, search)
        return ["a", "b"]

    async def create(self, db, dto):
        self._record("create", dto)
        return dto.model_dump()

    async def update(self, db, id, dto, fields=None):
        self._record("update", id, dto, tuple(fields or ()))
        return dto.model_dump()

    async def patch(self, db, id, dto, fields):
        self._record("patch", id, dto, tuple(fields))
        return dto.model_dump()

    async def delete(self, db, id):
        self._record("delete", id)
        return {"id": id}

    async def get_dto_for_entity(self, db, id, dto_class):
        self._record("get_dto_for_entity", id, dto_class)
        return dto_class.model_validate(self.stored)


@pytest.fixture
def john():
    return {
        "username": "john",
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@example.com",
    }


@pytest.fixture
def make_request():
    return build_request


@pytest.fixture
def make_resource():
    return RecordingResource
