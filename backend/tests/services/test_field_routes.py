"""Field Routes — verifies /fields and the schema → field lifecycle over HTTP.

Invariants:
    - Deleting a schema removes its fields from GET /fields
    - Creating a field under a missing schema answers SCHEMA_NOT_FOUND
    - A second DELETE of the same field answers FIELD_NOT_FOUND, not a crash
"""

from forms_api.core.errors import StoreFailureError
from forms_api.services.field_store import FieldStore

PAGE = {"page": 1, "pageSize": 50}


async def test_contact_form_lifecycle(client):
    res = await client.post("/schemas", json={"name": "contact form"})
    assert res.json() == {"status": "OK", "id": 1}

    res = await client.post("/fields", json={"name": "email", "schemaId": 1})
    assert res.json() == {"status": "OK", "id": 1}

    res = await client.request("GET", "/fields", json=PAGE)
    assert res.json()["fields"] == [{"id": 1, "schemaId": 1, "name": "email"}]

    res = await client.request("DELETE", "/schemas", json={"id": 1})
    assert res.json() == {"status": "OK"}

    res = await client.request("GET", "/fields", json=PAGE)
    assert res.json()["status"] == "OK"
    assert all(f["name"] != "email" for f in res.json()["fields"])


async def test_create_field_under_missing_schema(client):
    res = await client.post("/fields", json={"name": "email", "schemaId": 1})
    assert res.status_code == 404
    assert res.json() == {
        "status": "Error", "code": "SCHEMA_NOT_FOUND", "errors": ["schema not found"],
    }


async def test_create_field_reports_every_violation(client):
    res = await client.post("/fields", json={"schemaId": 0})
    assert res.status_code == 400
    assert sorted(res.json()["errors"]) == [
        "field name is a required field",
        "field schemaId is a required field",
    ]


async def test_create_field_with_wrong_types(client):
    res = await client.post("/fields", json={"name": 5, "schemaId": "one"})
    assert sorted(res.json()["errors"]) == [
        "field name is not valid",
        "field schemaId is not valid",
    ]


async def test_create_field_with_out_of_range_schema_id(client):
    res = await client.post("/fields", json={"name": "x", "schemaId": 2**70})
    assert res.status_code == 400
    assert res.json()["errors"] == ["field schemaId must be at most 2147483647"]


async def test_create_field_with_boolean_schema_id(client):
    await client.post("/schemas", json={"name": "contact form"})

    res = await client.post("/fields", json={"name": "email", "schemaId": True})
    assert res.status_code == 400
    assert res.json()["errors"] == ["field schemaId is not valid"]


async def test_create_field_without_body(client):
    res = await client.post("/fields")
    assert res.json()["code"] == "EMPTY_BODY"


async def test_create_field_store_failure(client, monkeypatch):
    async def broken_create(self, name, schema_id):
        raise StoreFailureError("database is locked", "create_field")

    monkeypatch.setattr(FieldStore, "create", broken_create)

    res = await client.post("/fields", json={"name": "email", "schemaId": 1})
    assert res.status_code == 503
    assert res.json()["errors"] == ["failed to add field"]


async def test_update_field(client):
    await client.post("/schemas", json={"name": "contact form"})
    await client.post("/fields", json={"name": "email", "schemaId": 1})

    res = await client.put("/fields", json={"id": 1, "name": "e-mail"})
    assert res.json() == {"status": "OK"}

    res = await client.request("GET", "/fields", json=PAGE)
    assert res.json()["fields"][0]["name"] == "e-mail"


async def test_update_missing_field_is_not_found(client):
    res = await client.put("/fields", json={"id": 8, "name": "x"})
    assert res.status_code == 404
    assert res.json()["code"] == "FIELD_NOT_FOUND"


async def test_delete_field_twice(client):
    await client.post("/schemas", json={"name": "contact form"})
    await client.post("/fields", json={"name": "email", "schemaId": 1})

    first = await client.request("DELETE", "/fields", json={"id": 1})
    second = await client.request("DELETE", "/fields", json={"id": 1})

    assert first.json() == {"status": "OK"}
    assert second.status_code == 404
    assert second.json() == {
        "status": "Error", "code": "FIELD_NOT_FOUND", "errors": ["field not found"],
    }


async def test_list_fields_filtered_by_schema(client):
    await client.post("/schemas", json={"name": "first"})
    await client.post("/schemas", json={"name": "second"})
    await client.post("/fields", json={"name": "a", "schemaId": 1})
    await client.post("/fields", json={"name": "b", "schemaId": 2})

    res = await client.request("GET", "/fields", json={**PAGE, "schemaId": 2})
    assert res.json() == {
        "status": "OK",
        "fields": [{"id": 2, "schemaId": 2, "name": "b"}],
        "pagination": {"page": 1, "pageSize": 50},
    }


async def test_list_fields_without_body(client):
    res = await client.get("/fields")
    assert res.status_code == 400
    assert res.json()["errors"] == ["empty request"]
