"""UserGroup DTO."""

from pydantic import Field

from crudkit.schemas.base import RestDto


class UserGroupDto(RestDto):
    name: str = Field(min_length=2, max_length=255)
    role: str = Field(pattern=r"^ROLE_[A-Z_]+$", max_length=255)
