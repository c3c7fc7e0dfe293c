"""RestDto — base class for every DTO and form type bound by REST actions.

Invariants:
    - from_entity() reads only declared fields, never relationships
    - apply_to() writes only the fields it is given (partial updates stay partial)
    - Unknown payload keys are rejected (extra="forbid")
"""

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict


class RestDto(BaseModel):
    """Validated shape exchanged between a request body and an entity."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    @classmethod
    def from_entity(cls, entity: Any) -> "RestDto":
        return cls.model_validate(
            {name: getattr(entity, name) for name in cls.model_fields},
        )

    def apply_to(self, entity: Any, fields: Iterable[str] | None = None) -> Any:
        """Copy `fields` (default: all declared fields) onto `entity`."""
        names = type(self).model_fields if fields is None else fields
        for name in names:
            setattr(entity, name, getattr(self, name))
        return entity
