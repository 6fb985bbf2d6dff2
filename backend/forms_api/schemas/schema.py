"""Schema Schemas — request bodies and the public schema representation."""

from pydantic import BaseModel, ConfigDict, Field

from forms_api.schemas.common import MAX_ENTITY_ID, RequestModel


class SchemaCreate(RequestModel):
    name: str = Field(min_length=1)


class SchemaUpdate(RequestModel):
    id: int = Field(gt=0, le=MAX_ENTITY_ID, strict=True)
    name: str = Field(min_length=1)


class SchemaOut(BaseModel):
    """Schema as listed on the wire."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
