"""User DTOs — body shapes for creating, replacing and patching users."""

from pydantic import Field, field_validator

from crudkit.schemas.base import RestDto

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserDto(RestDto):
    """Full user shape; PATCH merges onto the stored values before validating."""
    username: str = Field(min_length=2, max_length=255)
    first_name: str = Field(min_length=2, max_length=255)
    last_name: str = Field(min_length=2, max_length=255)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)

    @field_validator("username", "first_name", "last_name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class UserCreateDto(UserDto):
    """Create form — usernames are normalized to lower case on creation."""

    @field_validator("username")
    @classmethod
    def lower_username(cls, v: str) -> str:
        return v.lower()
