"""DateDimension resource — read-only over HTTP, bulk reset for the seeding command.

Invariants:
    - delete_all() does not commit; the caller owns the transaction
"""

import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from crudkit.models.date_dimension import DateDimension
from crudkit.rest.resource import RestResource
from crudkit.schemas.date_dimension import DateDimensionDto

logger = logging.getLogger(__name__)


class DateDimensionResource(RestResource[DateDimension]):
    def __init__(self):
        super().__init__(DateDimension, DateDimensionDto)

    async def delete_all(self, db: AsyncSession) -> int:
        result = await db.execute(delete(DateDimension))
        removed = result.rowcount or 0
        logger.info(
            f"Removed {removed} existing DateDimension rows",
            extra={"resource": self.entity_name, "rows": removed},
        )
        return removed
