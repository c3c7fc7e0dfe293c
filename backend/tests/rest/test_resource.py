"""RestResource — verifies query building and persistence against SQLite.

Tests:
    - where / order / search / limit / offset translate to SQL
    - find_one(throw) and find_one_by surface NoResultFound / MultipleResultsFound
    - Unknown properties are 400s, unknown search columns a ConfigurationError
    - populate eager-loads associations into the serialized output
"""

import uuid

import pytest
from sqlalchemy.exc import MultipleResultsFound, NoResultFound

from crudkit.core.errors import ConfigurationError, InvalidQueryParameterError
from crudkit.models.user import User
from crudkit.models.user_group import UserGroup
from crudkit.resources.user import create_user_resource
from crudkit.rest.resource import RestResource
from crudkit.schemas.user import UserDto


def make_user(username, first_name, last_name, groups=()):
    return User(
        username=username,
        first_name=first_name,
        last_name=last_name,
        email=f"{username}@example.com",
        groups=list(groups),
    )


@pytest.fixture
async def users(test_db):
    admins = UserGroup(name="Admins", role="ROLE_ADMIN")
    rows = [
        make_user("john", "John", "Doe", [admins]),
        make_user("jane", "Jane", "Doe"),
        make_user("bob", "Bob", "Builder"),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows


@pytest.fixture
def resource():
    return create_user_resource()


async def test_find_with_criteria(test_db, users, resource):
    found = await resource.find(test_db, criteria={"last_name": "Doe"}, order_by={"username": "ASC"})
    assert [u.username for u in found] == ["jane", "john"]


async def test_find_with_in_criteria(test_db, users, resource):
    ids = [str(users[0].id), str(users[2].id)]
    found = await resource.find(test_db, criteria={"id": ids})
    assert {u.username for u in found} == {"john", "bob"}


async def test_find_order_limit_offset(test_db, users, resource):
    found = await resource.find(test_db, order_by={"username": "DESC"}, limit=2, offset=1)
    assert [u.username for u in found] == ["jane", "bob"]


async def test_search_or_terms(test_db, users, resource):
    found = await resource.find(test_db, search={"or": ["builder", "jane"]})
    assert {u.username for u in found} == {"bob", "jane"}


async def test_search_and_terms(test_db, users, resource):
    found = await resource.find(test_db, search={"and": ["doe", "jo"]})
    assert [u.username for u in found] == ["john"]


async def test_count_and_ids(test_db, users, resource):
    assert await resource.count(test_db) == 3
    assert await resource.count(test_db, criteria={"last_name": "Doe"}) == 2
    ids = await resource.ids(test_db, criteria={"username": "bob"})
    assert ids == [str(users[2].id)]


async def test_unknown_property_is_rejected(test_db, resource):
    with pytest.raises(InvalidQueryParameterError):
        await resource.find(test_db, criteria={"password": "x"})
    with pytest.raises(InvalidQueryParameterError):
        await resource.find(test_db, order_by={"password": "ASC"})


async def test_malformed_identifier_value_is_rejected(test_db, resource):
    with pytest.raises(InvalidQueryParameterError):
        await resource.find(test_db, criteria={"id": "not-a-uuid"})


async def test_find_one_missing(test_db, resource):
    missing = uuid.uuid4()
    assert await resource.find_one(test_db, missing) is None
    with pytest.raises(NoResultFound):
        await resource.find_one(test_db, missing, throw_if_not_found=True)


async def test_find_one_by_multiple(test_db, users, resource):
    with pytest.raises(MultipleResultsFound):
        await resource.find_one_by(test_db, {"last_name": "Doe"})


async def test_get_dto_for_entity(test_db, users, resource):
    dto = await resource.get_dto_for_entity(test_db, users[0].id, UserDto)
    assert dto.username == "john"
    assert dto.email == "john@example.com"


async def test_patch_only_writes_given_fields(test_db, users, resource):
    dto = UserDto(username="ignored", first_name="Johnny", last_name="Ignored", email="x@example.com")
    entity = await resource.patch(test_db, users[0].id, dto, ["first_name"])
    assert entity.first_name == "Johnny"
    assert entity.username == "john"


async def test_delete(test_db, users, resource):
    await resource.delete(test_db, users[1].id)
    assert await resource.count(test_db) == 2


async def test_populate_serializes_associations(test_db, users, resource):
    entity = await resource.find_one(test_db, users[0].id, populate=["User.groups"])
    data = resource.serialize(entity, ["User.groups"])
    assert [g["role"] for g in data["groups"]] == ["ROLE_ADMIN"]


async def test_serialize_without_populate_has_columns_only(test_db, users, resource):
    data = resource.serialize(users[1])
    assert "groups" not in data
    assert data["username"] == "jane"


def test_unknown_search_column_is_configuration_error():
    with pytest.raises(ConfigurationError):
        RestResource(User, UserDto, search_columns=("password",))


def test_associations(resource):
    assert resource.get_associations() == ["groups"]
    assert resource.entity_name == "User"
