"""Schema Store — verifies persistence, lookups and the cascading delete.

Invariants:
    - create returns a fresh id every time, duplicates names allowed
    - update then get_name round-trips
    - delete leaves no field of the deleted schema behind
    - a delete that fails partway leaves the schema and its fields in place
    - missing ids raise SchemaNotFoundError; driver errors raise StoreFailureError
"""

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import OperationalError

from forms_api.core.domain_types import SchemaId
from forms_api.core.errors import (
    SchemaNotFoundError, StoreFailureError, ValidationFailedError,
)
from forms_api.infrastructure.database import store_operation
from forms_api.models.field import Field as FieldModel


async def test_create_returns_fresh_ids(schema_store):
    ids = [await schema_store.create(f"schema {i}") for i in range(5)]
    assert len(set(ids)) == 5


async def test_duplicate_names_are_allowed(schema_store):
    first = await schema_store.create("contact form")
    second = await schema_store.create("contact form")
    assert first != second


async def test_create_rejects_blank_name(schema_store):
    with pytest.raises(ValidationFailedError) as exc_info:
        await schema_store.create("   ")
    assert exc_info.value.problems == ["field name is a required field"]


async def test_update_then_get_name_round_trips(schema_store):
    schema_id = await schema_store.create("A")
    await schema_store.update(schema_id, "B")
    assert await schema_store.get_name(schema_id) == "B"


async def test_update_missing_schema_raises_not_found(schema_store):
    with pytest.raises(SchemaNotFoundError):
        await schema_store.update(SchemaId(999), "B")


async def test_get_name_missing_schema_raises_not_found(schema_store):
    with pytest.raises(SchemaNotFoundError) as exc_info:
        await schema_store.get_name(SchemaId(42))
    assert exc_info.value.code == "SCHEMA_NOT_FOUND"
    assert exc_info.value.resource_id == 42


async def test_delete_removes_schema_and_its_fields(schema_store, field_store, test_db):
    schema_id = await schema_store.create("contact form")
    await field_store.create("email", schema_id)
    await field_store.create("phone", schema_id)

    await schema_store.delete(schema_id)

    remaining = await field_store.list_all(schema_id=schema_id)
    assert remaining == []
    orphans = await test_db.scalars(
        select(FieldModel).where(FieldModel.schema_id == schema_id),
    )
    assert orphans.all() == []
    with pytest.raises(SchemaNotFoundError):
        await schema_store.get_name(schema_id)


async def test_delete_leaves_other_schemas_fields(schema_store, field_store):
    doomed = await schema_store.create("doomed")
    kept = await schema_store.create("kept")
    await field_store.create("email", doomed)
    kept_field = await field_store.create("email", kept)

    await schema_store.delete(doomed)

    fields = await field_store.list_all()
    assert [f.id for f in fields] == [kept_field]


async def test_delete_failing_midway_keeps_schema_and_fields(
    schema_store, field_store, test_db, monkeypatch,
):
    schema_id = await schema_store.create("contact form")
    await field_store.create("email", schema_id)

    execute = test_db.execute
    calls = []

    async def execute_then_fail(statement, *args, **kwargs):
        calls.append(statement)
        if len(calls) == 2:
            raise OperationalError("DELETE FROM schemas", {}, Exception("disk I/O error"))
        return await execute(statement, *args, **kwargs)

    monkeypatch.setattr(test_db, "execute", execute_then_fail)
    with pytest.raises(StoreFailureError) as exc_info:
        await schema_store.delete(schema_id)
    monkeypatch.undo()

    assert exc_info.value.operation == "delete_schema"
    assert len(calls) == 2
    assert await schema_store.get_name(schema_id) == "contact form"
    fields = await field_store.list_all(schema_id=schema_id)
    assert [f.name for f in fields] == ["email"]


async def test_delete_missing_schema_raises_not_found(schema_store):
    with pytest.raises(SchemaNotFoundError):
        await schema_store.delete(SchemaId(7))


async def test_list_all_orders_by_id_and_paginates(schema_store):
    ids = [await schema_store.create(name) for name in ("a", "b", "c", "d")]

    everything = await schema_store.list_all()
    assert [s.id for s in everything] == ids

    page = await schema_store.list_all(limit=2, offset=2)
    assert [s.name for s in page] == ["c", "d"]


async def test_list_all_empty_store(schema_store):
    assert await schema_store.list_all() == []


async def test_store_operation_maps_driver_errors(test_db):
    with pytest.raises(StoreFailureError) as exc_info:
        async with store_operation(test_db, "broken_query"):
            await test_db.execute(text("SELECT * FROM no_such_table"))
    assert exc_info.value.operation == "broken_query"
    assert exc_info.value.code == "STORE_FAILURE"
    assert exc_info.value.http_status == 503
