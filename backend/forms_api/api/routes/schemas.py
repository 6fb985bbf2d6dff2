"""Schema Routes — create/update/delete/list schemas, plus single-schema lookup.

Invariants:
    - Bodies are decoded by the request pipeline, never by FastAPI parameter parsing,
      so empty and malformed bodies get their own envelopes
    - DELETE removes the schema and all of its fields (SchemaStore.delete)
    - Every route answers with exactly one envelope

Design Decisions:
    - Store built per request from the injected session: no state between requests
"""

from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from forms_api.core.domain_types import SchemaId
from forms_api.core.repository_protocols import SchemaRepository
from forms_api.infrastructure.database import get_db
from forms_api.schemas.common import MAX_ENTITY_ID, EntityRef, PageRequest
from forms_api.schemas.schema import SchemaCreate, SchemaOut, SchemaUpdate
from forms_api.services.request_pipeline import OperationContext, run_operation
from forms_api.services.schema_store import SchemaStore

router = APIRouter(prefix="/schemas", tags=["schemas"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_schema(request: Request, db: AsyncSession = Depends(get_db)):
    """Create a schema and return its id."""
    store: SchemaRepository = SchemaStore(db)

    async def action(body: SchemaCreate, ctx: OperationContext) -> dict:
        schema_id = await store.create(body.name)
        ctx.log.info("schema added", extra={"schema_id": schema_id})
        return {"id": schema_id}

    return await run_operation(
        request, "handlers.schemas.create", "failed to add schema", action,
        SchemaCreate, status.HTTP_201_CREATED,
    )


@router.put("")
async def update_schema(request: Request, db: AsyncSession = Depends(get_db)):
    """Rename a schema."""
    store: SchemaRepository = SchemaStore(db)

    async def action(body: SchemaUpdate, ctx: OperationContext) -> dict:
        await store.update(SchemaId(body.id), body.name)
        ctx.log.info("schema updated", extra={"schema_id": body.id})
        return {}

    return await run_operation(
        request, "handlers.schemas.update", "failed to update schema", action,
        SchemaUpdate,
    )


@router.delete("")
async def delete_schema(request: Request, db: AsyncSession = Depends(get_db)):
    """Delete a schema together with its fields."""
    store: SchemaRepository = SchemaStore(db)

    async def action(body: EntityRef, ctx: OperationContext) -> dict:
        await store.delete(SchemaId(body.id))
        ctx.log.info("schema deleted", extra={"schema_id": body.id})
        return {}

    return await run_operation(
        request, "handlers.schemas.delete", "failed to delete schema", action,
        EntityRef,
    )


@router.get("")
async def list_schemas(request: Request, db: AsyncSession = Depends(get_db)):
    """List one page of schemas ordered by id."""
    store: SchemaRepository = SchemaStore(db)

    async def action(body: PageRequest, ctx: OperationContext) -> dict:
        schemas = await store.list_all(limit=body.page_size, offset=body.offset)
        ctx.log.info("schemas listed", extra={"count": len(schemas)})
        return {
            "schemas": [SchemaOut.model_validate(s).model_dump() for s in schemas],
            "pagination": body.pagination(),
        }

    return await run_operation(
        request, "handlers.schemas.list", "failed to list schemas", action,
        PageRequest,
    )


@router.get("/{schema_id}")
async def get_schema(
    request: Request,
    schema_id: int = Path(gt=0, le=MAX_ENTITY_ID),
    db: AsyncSession = Depends(get_db),
):
    """Get one schema by id."""
    store: SchemaRepository = SchemaStore(db)

    async def action(_body: None, ctx: OperationContext) -> dict:
        name = await store.get_name(SchemaId(schema_id))
        ctx.log.info("schema found", extra={"schema_id": schema_id})
        return {"id": schema_id, "name": name}

    return await run_operation(
        request, "handlers.schemas.get", "failed to get schema", action,
    )
