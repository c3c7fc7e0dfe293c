"""User resource — searchable by name and email."""

from crudkit.models.user import User
from crudkit.rest.resource import RestResource
from crudkit.schemas.user import UserDto


def create_user_resource() -> RestResource[User]:
    return RestResource(
        User,
        UserDto,
        search_columns=("username", "first_name", "last_name", "email"),
    )
