"""Validation Pipeline — verifies decode/validate error classes and messages.

Tests:
    - Empty and whitespace-only bodies are EmptyBodyError
    - Invalid JSON and non-object JSON are MalformedBodyError
    - Every violated field is reported, named by its wire name
"""

import pytest

from forms_api.core.errors import (
    EmptyBodyError, MalformedBodyError, ValidationFailedError,
)
from forms_api.core.validation import decode_request
from forms_api.schemas.common import PageRequest
from forms_api.schemas.field import FieldCreate
from forms_api.schemas.schema import SchemaCreate


@pytest.mark.parametrize("body", [b"", b"   ", b"\n\t"])
def test_empty_body(body):
    with pytest.raises(EmptyBodyError) as exc_info:
        decode_request(body, SchemaCreate)
    assert exc_info.value.problems == ["empty request"]


@pytest.mark.parametrize("body", [b"{", b"name=x", b"\xff\xfe"])
def test_malformed_body(body):
    with pytest.raises(MalformedBodyError) as exc_info:
        decode_request(body, SchemaCreate)
    assert exc_info.value.problems == ["failed to decode request"]
    assert exc_info.value.detail


@pytest.mark.parametrize("body", [b"[]", b"null", b"\"name\"", b"3"])
def test_non_object_json_is_malformed(body):
    with pytest.raises(MalformedBodyError):
        decode_request(body, SchemaCreate)


def test_missing_required_field():
    with pytest.raises(ValidationFailedError) as exc_info:
        decode_request(b"{}", SchemaCreate)
    assert exc_info.value.problems == ["field name is a required field"]
    assert exc_info.value.code == "VALIDATION_ERROR"


def test_collects_all_violations():
    with pytest.raises(ValidationFailedError) as exc_info:
        decode_request(b'{"name": "", "schemaId": 0}', FieldCreate)
    assert sorted(exc_info.value.problems) == [
        "field name is a required field",
        "field schemaId is a required field",
    ]


def test_wrong_type_is_not_valid():
    with pytest.raises(ValidationFailedError) as exc_info:
        decode_request(b'{"name": "email", "schemaId": "x"}', FieldCreate)
    assert exc_info.value.problems == ["field schemaId is not valid"]


def test_upper_bound_message():
    with pytest.raises(ValidationFailedError) as exc_info:
        decode_request(b'{"page": 1, "pageSize": 101}', PageRequest)
    assert exc_info.value.problems == ["field pageSize must be at most 100"]


def test_valid_body_is_typed_and_stripped():
    req = decode_request(b'{"name": "  email ", "schemaId": 3, "extra": 1}', FieldCreate)
    assert req.name == "email"
    assert req.schema_id == 3


def test_page_request_offset():
    req = decode_request(b'{"page": 3, "pageSize": 20}', PageRequest)
    assert req.offset == 40
    assert req.pagination() == {"page": 3, "pageSize": 20}
