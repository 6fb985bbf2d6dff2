"""Field Store — persistence of fields, scoped to an existing schema.

Invariants:
    - create checks the parent schema in the same transaction as the insert;
      a missing parent raises SchemaNotFoundError and nothing is written
    - update/delete with zero rows affected raise FieldNotFoundError
    - A second delete of the same id is deterministic: FieldNotFoundError

Design Decisions:
    - IntegrityError on insert means the parent vanished concurrently (FK
      enforced): reported as SchemaNotFoundError, not a generic store failure
"""

from typing import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forms_api.core.domain_types import FieldId, SchemaId
from forms_api.core.errors import FieldNotFoundError, SchemaNotFoundError
from forms_api.infrastructure.database import store_operation
from forms_api.models.field import Field as FieldModel
from forms_api.models.schema import Schema as SchemaModel
from forms_api.services.schema_store import require_name


class FieldStore:
    """FieldRepository over a SQLAlchemy AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, schema_id: SchemaId) -> FieldId:
        require_name(name)
        field = FieldModel(name=name, schema_id=schema_id)
        async with store_operation(self.db, "create_field"):
            parent = await self.db.scalar(
                select(SchemaModel.id).where(SchemaModel.id == schema_id),
            )
            if parent is None:
                raise SchemaNotFoundError(schema_id)
            self.db.add(field)
            try:
                await self.db.flush()
            except IntegrityError:
                raise SchemaNotFoundError(schema_id) from None
        return FieldId(field.id)

    async def update(self, field_id: FieldId, name: str) -> None:
        require_name(name)
        async with store_operation(self.db, "update_field"):
            result = await self.db.execute(
                update(FieldModel)
                .where(FieldModel.id == field_id)
                .values(name=name)
            )
            if result.rowcount == 0:
                raise FieldNotFoundError(field_id)

    async def delete(self, field_id: FieldId) -> None:
        async with store_operation(self.db, "delete_field"):
            result = await self.db.execute(
                delete(FieldModel).where(FieldModel.id == field_id),
            )
            if result.rowcount == 0:
                raise FieldNotFoundError(field_id)

    async def list_all(
        self,
        schema_id: SchemaId | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[FieldModel]:
        """Fields ordered by id, optionally only those of one schema."""
        query = select(FieldModel).order_by(FieldModel.id)
        if schema_id is not None:
            query = query.where(FieldModel.schema_id == schema_id)
        if limit is not None:
            query = query.limit(limit).offset(offset)
        async with store_operation(self.db, "list_fields", commit=False):
            result = await self.db.execute(query)
            return result.scalars().all()
