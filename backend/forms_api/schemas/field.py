"""Field Schemas — request bodies and the public field representation.

Invariants:
    - schemaId is required on create and must be > 0
    - FieldOut serializes schema_id as schemaId (dump with by_alias=True)
"""

from pydantic import BaseModel, ConfigDict, Field

from forms_api.schemas.common import MAX_ENTITY_ID, PageRequest, RequestModel


class FieldCreate(RequestModel):
    name: str = Field(min_length=1)
    schema_id: int = Field(
        gt=0, le=MAX_ENTITY_ID, strict=True, alias="schemaId",
    )


class FieldUpdate(RequestModel):
    id: int = Field(gt=0, le=MAX_ENTITY_ID, strict=True)
    name: str = Field(min_length=1)


class FieldPageRequest(PageRequest):
    """List request with an optional parent filter."""
    schema_id: int | None = Field(
        None, gt=0, le=MAX_ENTITY_ID, strict=True, alias="schemaId",
    )


class FieldOut(BaseModel):
    """Field as listed on the wire."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    schema_id: int = Field(serialization_alias="schemaId")
    name: str
