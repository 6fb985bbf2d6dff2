"""Schema Store — persistence of schemas, including the cascading delete.

Invariants:
    - delete removes the schema's fields and then the schema in ONE transaction;
      if the schema row is missing the whole transaction is rolled back
    - update/delete/get_name on a missing id raise SchemaNotFoundError
    - Blank names are rejected here even though requests are validated upstream
    - No caching: every call reads or writes the database

Design Decisions:
    - Explicit child delete before parent delete, on top of ON DELETE CASCADE:
      correct even on a connection where FK enforcement is off
    - Not-found decided from rowcount, not from a driver "no rows" error
"""

import logging
from typing import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forms_api.core.domain_types import SchemaId
from forms_api.core.errors import SchemaNotFoundError, ValidationFailedError
from forms_api.infrastructure.database import store_operation
from forms_api.models.field import Field as FieldModel
from forms_api.models.schema import Schema as SchemaModel

logger = logging.getLogger(__name__)


def require_name(name: str) -> str:
    """Reject blank names at the store boundary."""
    if not name or not name.strip():
        raise ValidationFailedError(["field name is a required field"])
    return name


class SchemaStore:
    """SchemaRepository over a SQLAlchemy AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str) -> SchemaId:
        require_name(name)
        schema = SchemaModel(name=name)
        async with store_operation(self.db, "create_schema"):
            self.db.add(schema)
            await self.db.flush()
        return SchemaId(schema.id)

    async def update(self, schema_id: SchemaId, name: str) -> None:
        require_name(name)
        async with store_operation(self.db, "update_schema"):
            result = await self.db.execute(
                update(SchemaModel)
                .where(SchemaModel.id == schema_id)
                .values(name=name)
            )
            if result.rowcount == 0:
                raise SchemaNotFoundError(schema_id)

    async def delete(self, schema_id: SchemaId) -> None:
        """Delete the schema and every field that belongs to it."""
        async with store_operation(self.db, "delete_schema"):
            fields_result = await self.db.execute(
                delete(FieldModel).where(FieldModel.schema_id == schema_id),
            )
            result = await self.db.execute(
                delete(SchemaModel).where(SchemaModel.id == schema_id),
            )
            if result.rowcount == 0:
                raise SchemaNotFoundError(schema_id)
        logger.debug(
            f"Schema {schema_id} deleted with {fields_result.rowcount} field(s)",
            extra={"schema_id": schema_id, "count": fields_result.rowcount},
        )

    async def get_name(self, schema_id: SchemaId) -> str:
        async with store_operation(self.db, "get_schema", commit=False):
            name = await self.db.scalar(
                select(SchemaModel.name).where(SchemaModel.id == schema_id),
            )
        if name is None:
            raise SchemaNotFoundError(schema_id)
        return name

    async def list_all(
        self, limit: int | None = None, offset: int = 0,
    ) -> Sequence[SchemaModel]:
        """All schemas ordered by id; limit/offset only when limit is given."""
        query = select(SchemaModel).order_by(SchemaModel.id)
        if limit is not None:
            query = query.limit(limit).offset(offset)
        async with store_operation(self.db, "list_schemas", commit=False):
            result = await self.db.execute(query)
            return result.scalars().all()
