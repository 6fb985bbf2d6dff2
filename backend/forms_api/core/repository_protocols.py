"""Boundary Protocols — contracts between request handlers and the entity store.

Invariants:
    - Handlers depend on these Protocols, never on a concrete store class
    - Schema and field persistence are separate contracts over the same database
    - Not-found conditions raise SchemaNotFoundError / FieldNotFoundError;
      every other persistence failure raises StoreFailureError

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass fakes
    - Async in Protocol: implementations do IO
"""

from typing import Protocol, Sequence

from forms_api.core.domain_types import SchemaId, FieldId


class SchemaRow(Protocol):
    id: int
    name: str


class FieldRow(Protocol):
    id: int
    schema_id: int
    name: str


class SchemaRepository(Protocol):
    """Contract for schema persistence — implemented by services/schema_store.py."""
    async def create(self, name: str) -> SchemaId: ...
    async def update(self, schema_id: SchemaId, name: str) -> None: ...
    async def delete(self, schema_id: SchemaId) -> None: ...
    async def get_name(self, schema_id: SchemaId) -> str: ...
    async def list_all(
        self, limit: int | None = None, offset: int = 0,
    ) -> Sequence[SchemaRow]: ...


class FieldRepository(Protocol):
    """Contract for field persistence — implemented by services/field_store.py."""
    async def create(self, name: str, schema_id: SchemaId) -> FieldId: ...
    async def update(self, field_id: FieldId, name: str) -> None: ...
    async def delete(self, field_id: FieldId) -> None: ...
    async def list_all(
        self,
        schema_id: SchemaId | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[FieldRow]: ...
