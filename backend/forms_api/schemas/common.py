"""Shared request shapes — entity reference and pagination.

Invariants:
    - "required" means present and non-zero: ids and page numbers are > 0
    - pageSize is bounded by MAX_PAGE_SIZE; ids and page by MAX_ENTITY_ID
    - Integers are strict: JSON true/false or "1" are not ids
    - Unknown keys are ignored; strings are stripped before length checks

Design Decisions:
    - Wire names via alias (pageSize, schemaId); populate_by_name lets tests and
      internal callers use the Python names
"""

from pydantic import BaseModel, ConfigDict, Field

MAX_PAGE_SIZE = 100
# Largest value an Integer id column holds (int4 on PostgreSQL).
MAX_ENTITY_ID = 2**31 - 1


class RequestModel(BaseModel):
    """Base for every decoded request body."""
    model_config = ConfigDict(
        populate_by_name=True, str_strip_whitespace=True, extra="ignore",
    )


class EntityRef(RequestModel):
    """Body of delete requests."""
    id: int = Field(gt=0, le=MAX_ENTITY_ID, strict=True)


class PageRequest(RequestModel):
    """Body of list requests — offset pagination, pages start at 1."""
    page: int = Field(gt=0, le=MAX_ENTITY_ID, strict=True)
    page_size: int = Field(
        gt=0, le=MAX_PAGE_SIZE, strict=True, alias="pageSize",
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def pagination(self) -> dict:
        return {"page": self.page, "pageSize": self.page_size}
