"""Field Routes — create/update/delete/list fields.

Invariants:
    - A field is only created under an existing schema (FieldStore.create)
    - Deleting a missing field answers FIELD_NOT_FOUND, every time
    - GET may narrow the listing to one schema with schemaId
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from forms_api.core.domain_types import FieldId, SchemaId
from forms_api.core.repository_protocols import FieldRepository
from forms_api.infrastructure.database import get_db
from forms_api.schemas.common import EntityRef
from forms_api.schemas.field import FieldCreate, FieldOut, FieldPageRequest, FieldUpdate
from forms_api.services.field_store import FieldStore
from forms_api.services.request_pipeline import OperationContext, run_operation

router = APIRouter(prefix="/fields", tags=["fields"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_field(request: Request, db: AsyncSession = Depends(get_db)):
    """Create a field under an existing schema and return its id."""
    store: FieldRepository = FieldStore(db)

    async def action(body: FieldCreate, ctx: OperationContext) -> dict:
        field_id = await store.create(body.name, SchemaId(body.schema_id))
        ctx.log.info(
            "field added",
            extra={"field_id": field_id, "schema_id": body.schema_id},
        )
        return {"id": field_id}

    return await run_operation(
        request, "handlers.fields.create", "failed to add field", action,
        FieldCreate, status.HTTP_201_CREATED,
    )


@router.put("")
async def update_field(request: Request, db: AsyncSession = Depends(get_db)):
    """Rename a field."""
    store: FieldRepository = FieldStore(db)

    async def action(body: FieldUpdate, ctx: OperationContext) -> dict:
        await store.update(FieldId(body.id), body.name)
        ctx.log.info("field updated", extra={"field_id": body.id})
        return {}

    return await run_operation(
        request, "handlers.fields.update", "failed to update field", action,
        FieldUpdate,
    )


@router.delete("")
async def delete_field(request: Request, db: AsyncSession = Depends(get_db)):
    store: FieldRepository = FieldStore(db)

    async def action(body: EntityRef, ctx: OperationContext) -> dict:
        await store.delete(FieldId(body.id))
        ctx.log.info("field deleted", extra={"field_id": body.id})
        return {}

    return await run_operation(
        request, "handlers.fields.delete", "failed to delete field", action,
        EntityRef,
    )


@router.get("")
async def list_fields(request: Request, db: AsyncSession = Depends(get_db)):
    """List one page of fields, optionally of a single schema."""
    store: FieldRepository = FieldStore(db)

    async def action(body: FieldPageRequest, ctx: OperationContext) -> dict:
        schema_id = SchemaId(body.schema_id) if body.schema_id is not None else None
        fields = await store.list_all(
            schema_id=schema_id, limit=body.page_size, offset=body.offset,
        )
        ctx.log.info("fields listed", extra={"count": len(fields)})
        return {
            "fields": [
                FieldOut.model_validate(f).model_dump(by_alias=True) for f in fields
            ],
            "pagination": body.pagination(),
        }

    return await run_operation(
        request, "handlers.fields.list", "failed to list fields", action,
        FieldPageRequest,
    )
