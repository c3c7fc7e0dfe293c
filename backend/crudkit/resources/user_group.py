"""UserGroup resource."""

from crudkit.models.user_group import UserGroup
from crudkit.rest.resource import RestResource
from crudkit.schemas.user_group import UserGroupDto


def create_user_group_resource() -> RestResource[UserGroup]:
    return RestResource(UserGroup, UserGroupDto, search_columns=("name", "role"))
