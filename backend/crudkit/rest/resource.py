"""RestResource — generic async query/persistence service for one ORM entity.

Invariants:
    - Every operation takes the request's AsyncSession explicitly (no stored session)
    - find_one(throw_if_not_found=True) raises NoResultFound; find_one_by raises
      MultipleResultsFound on more than one match — both left for the REST classifier
    - Criteria, ordering and search only reference mapped columns; anything
      else is an InvalidQueryParameterError
    - Relationships are loaded only when requested through `populate`
    - Configuration (DTO class, form type, search columns) is per instance

Design Decisions:
    - Generic over the mapped class instead of one repository per entity
    - Partial writes go through RestDto.apply_to(entity, fields)
"""

import datetime as dt
import logging
import uuid
from typing import Any, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import Date, DateTime, Uuid, and_, func, inspect, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crudkit.core.errors import ConfigurationError, InvalidQueryParameterError
from crudkit.db.base import Base
from crudkit.schemas.base import RestDto

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class RestResource(Generic[ModelType]):
    """Query and persistence operations behind the REST actions of one entity."""

    def __init__(
        self,
        model: type[ModelType],
        dto_class: type[RestDto],
        form_type: type[RestDto] | None = None,
        search_columns: Sequence[str] = (),
    ):
        self.model = model
        self.dto_class = dto_class
        self.form_type = form_type or dto_class
        self._mapper = inspect(model)
        self._columns = {c.key: c for c in self._mapper.column_attrs}
        unknown = [c for c in search_columns if c not in self._columns]
        if unknown:
            raise ConfigurationError(
                f"Search columns {unknown} are not mapped on {model.__name__}"
            )
        self.search_columns = tuple(search_columns)

    # ─── Introspection ──────────────────────────────────────────

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def get_dto_class(self) -> type[RestDto]:
        return self.dto_class

    def get_form_type(self) -> type[RestDto]:
        return self.form_type

    def get_associations(self) -> list[str]:
        return [r.key for r in self._mapper.relationships]

    # ─── Reads ──────────────────────────────────────────────────

    async def find(
        self,
        db: AsyncSession,
        criteria: dict[str, Any] | None = None,
        order_by: dict[str, str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
        search: dict[str, list[str]] | None = None,
        populate: Iterable[str] = (),
    ) -> list[ModelType]:
        query = self._filtered(select(self.model), criteria, search)
        query = query.options(*self._populate_options(populate))
        for column, direction in (order_by or {}).items():
            attribute = self._column("order", column)
            query = query.order_by(
                attribute.desc() if direction == "DESC" else attribute.asc(),
            )
        if limit is not None:
            query = query.limit(limit)
        if offset is not None:
            query = query.offset(offset)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_one(
        self,
        db: AsyncSession,
        id: str | uuid.UUID,
        throw_if_not_found: bool = False,
        populate: Iterable[str] = (),
    ) -> ModelType | None:
        query = select(self.model).where(
            self.model.id == self._coerce("id", self.model.id, id),
        ).options(*self._populate_options(populate))
        result = await db.execute(query)
        scalars = result.scalars()
        return scalars.one() if throw_if_not_found else scalars.one_or_none()

    async def find_one_by(
        self,
        db: AsyncSession,
        criteria: dict[str, Any],
        throw_if_not_found: bool = False,
        populate: Iterable[str] = (),
    ) -> ModelType | None:
        query = self._filtered(select(self.model), criteria, None)
        query = query.options(*self._populate_options(populate))
        result = await db.execute(query)
        scalars = result.scalars()
        return scalars.one() if throw_if_not_found else scalars.one_or_none()

    async def count(
        self,
        db: AsyncSession,
        criteria: dict[str, Any] | None = None,
        search: dict[str, list[str]] | None = None,
    ) -> int:
        query = self._filtered(
            select(func.count()).select_from(self.model), criteria, search,
        )
        result = await db.execute(query)
        return int(result.scalar_one())

    async def ids(
        self,
        db: AsyncSession,
        criteria: dict[str, Any] | None = None,
        search: dict[str, list[str]] | None = None,
    ) -> list[str]:
        query = self._filtered(select(self.model.id), criteria, search)
        result = await db.execute(query)
        return [str(value) for value in result.scalars().all()]

    async def get_dto_for_entity(
        self, db: AsyncSession, id: str | uuid.UUID, dto_class: type[RestDto],
    ) -> RestDto:
        """Existing entity as `dto_class`; NoResultFound when it does not exist."""
        entity = await self.find_one(db, id, throw_if_not_found=True)
        return dto_class.from_entity(entity)

    # ─── Writes ─────────────────────────────────────────────────

    async def create(self, db: AsyncSession, dto: RestDto) -> ModelType:
        entity = dto.apply_to(self.model())
        db.add(entity)
        await db.commit()
        await db.refresh(entity)
        logger.info(
            f"Created {self.entity_name} {entity.id}",
            extra={"resource": self.entity_name, "identifier": str(entity.id)},
        )
        return entity

    async def update(
        self,
        db: AsyncSession,
        id: str | uuid.UUID,
        dto: RestDto,
        fields: Iterable[str] | None = None,
    ) -> ModelType:
        """Write `fields` of `dto` (all declared fields when None) onto the entity."""
        entity = await self.find_one(db, id, throw_if_not_found=True)
        dto.apply_to(entity, fields)
        await db.commit()
        await db.refresh(entity)
        return entity

    async def patch(
        self,
        db: AsyncSession,
        id: str | uuid.UUID,
        dto: RestDto,
        fields: Iterable[str],
    ) -> ModelType:
        return await self.update(db, id, dto, fields)

    async def delete(self, db: AsyncSession, id: str | uuid.UUID) -> ModelType:
        entity = await self.find_one(db, id, throw_if_not_found=True)
        await db.delete(entity)
        await db.commit()
        logger.info(
            f"Deleted {self.entity_name} {id}",
            extra={"resource": self.entity_name, "identifier": str(id)},
        )
        return entity

    # ─── Serialization ──────────────────────────────────────────

    def serialize(self, entity: ModelType, populate: Iterable[str] = ()) -> dict[str, Any]:
        data = {key: getattr(entity, key) for key in self._columns}
        for association in self._requested_associations(populate):
            related = getattr(entity, association)
            if isinstance(related, (list, tuple, set)):
                data[association] = [_columns_of(item) for item in related]
            else:
                data[association] = _columns_of(related) if related is not None else None
        return data

    # ─── Query helpers ──────────────────────────────────────────

    def _filtered(self, query, criteria, search):
        conditions = [
            self._condition(column, value)
            for column, value in (criteria or {}).items()
        ]
        search_condition = self._search_condition(search or {})
        if search_condition is not None:
            conditions.append(search_condition)
        return query.where(*conditions) if conditions else query

    def _condition(self, column: str, value: Any):
        attribute = self._column("where", column)
        if isinstance(value, list):
            return attribute.in_([self._coerce("where", attribute, v) for v in value])
        if value is None:
            return attribute.is_(None)
        return attribute == self._coerce("where", attribute, value)

    def _search_condition(self, search: dict[str, list[str]]):
        if not self.search_columns:
            return None

        def matches(term: str):
            return or_(*[
                self._columns[c].class_attribute.ilike(f"%{term}%")
                for c in self.search_columns
            ])

        parts = []
        if search.get("and"):
            parts.append(and_(*[matches(t) for t in search["and"]]))
        if search.get("or"):
            parts.append(or_(*[matches(t) for t in search["or"]]))
        if not parts:
            return None
        return and_(*parts) if len(parts) > 1 else parts[0]

    def _column(self, parameter: str, name: str):
        prop = self._columns.get(name)
        if prop is None:
            raise InvalidQueryParameterError(
                parameter, f"Unknown property '{name}' for {self.entity_name}",
            )
        return prop.class_attribute

    def _coerce(self, parameter: str, attribute, value: Any) -> Any:
        column_type = attribute.expression.type
        if not isinstance(value, str):
            return value
        try:
            if isinstance(column_type, Uuid):
                return uuid.UUID(value)
            if isinstance(column_type, DateTime):
                return dt.datetime.fromisoformat(value)
            if isinstance(column_type, Date):
                return dt.date.fromisoformat(value)
        except ValueError:
            raise InvalidQueryParameterError(
                parameter, f"Value '{value}' is not valid for this property",
            )
        return value

    def _requested_associations(self, populate: Iterable[str]) -> list[str]:
        associations = self.get_associations()
        prefix = f"{self.entity_name}."
        requested = []
        for item in populate:
            name = item[len(prefix):] if item.startswith(prefix) else item
            if name in associations and name not in requested:
                requested.append(name)
        return requested

    def _populate_options(self, populate: Iterable[str]) -> list:
        return [
            selectinload(getattr(self.model, name))
            for name in self._requested_associations(populate)
        ]


def _columns_of(entity: Any) -> dict[str, Any]:
    return {c.key: getattr(entity, c.key) for c in inspect(entity).mapper.column_attrs}
