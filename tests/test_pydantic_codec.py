"""Tests for the pydantic adapter and its JSON Schema output."""

import json
from typing import Optional

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from tests.conftest import REFERENCE_ULID_TEXT
from resourceid.adapters.pydantic_codec import (
    PydanticResourceID,
    TextCodecAnnotation,
    describe,
)
from resourceid.core.resource_id import ResourceID

TEXT = "USER" + REFERENCE_ULID_TEXT


class UserModel(BaseModel):
    id: PydanticResourceID
    name: str
    parent: Optional[PydanticResourceID] = None


@pytest.fixture
def adapter():
    return TypeAdapter(PydanticResourceID)


class TestValidation:
    def test_from_string(self, adapter):
        rid = adapter.validate_python(TEXT)
        assert isinstance(rid, ResourceID)
        assert rid.to_text() == TEXT

    def test_instance_passes_through(self, adapter):
        rid = ResourceID.new("user")
        assert adapter.validate_python(rid) is rid

    def test_from_json(self, adapter):
        assert adapter.validate_json(json.dumps(TEXT)) == ResourceID.parse(TEXT)

    def test_bad_suffix(self, adapter):
        with pytest.raises(ValidationError) as exc:
            adapter.validate_python("USER" + "!" * 26)
        assert "Unable to decode internal Ulid" in str(exc.value)

    def test_bad_tag(self, adapter):
        with pytest.raises(ValidationError) as exc:
            UserModel(id="maße" + REFERENCE_ULID_TEXT, name="x")
        assert "Invalid resource type on identifier: maße" in str(exc.value)

    def test_wrong_type(self, adapter):
        with pytest.raises(ValidationError):
            adapter.validate_python(12345)

    def test_model_field(self):
        user = UserModel(id=TEXT, name="alice")
        assert user.id == ResourceID.parse(TEXT)
        assert user.parent is None


class TestSerialization:
    def test_dump_python(self):
        user = UserModel(id=TEXT, name="alice")
        assert user.model_dump() == {"id": TEXT, "name": "alice", "parent": None}

    def test_dump_json(self):
        user = UserModel(id=TEXT, name="alice", parent=TEXT)
        data = json.loads(user.model_dump_json())
        assert data["id"] == TEXT
        assert data["parent"] == TEXT

    def test_json_round_trip(self):
        user = UserModel(id=ResourceID.new("user"), name="bob")
        assert UserModel.model_validate_json(user.model_dump_json()) == user


class TestJsonSchema:
    def test_opaque_string_with_format(self, adapter):
        schema = adapter.json_schema()
        assert schema["type"] == "string"
        assert schema["format"] == "ResourceID"
        assert schema["title"] == "ResourceID"
        assert schema["description"] == "A unique resource identifier"
        assert "properties" not in schema

    def test_model_schema(self):
        schema = UserModel.model_json_schema()
        assert schema["properties"]["id"]["format"] == "ResourceID"

    def test_describe(self):
        assert describe(ResourceID) == {
            "type": "string",
            "format": "ResourceID",
            "title": "ResourceID",
            "description": "A unique resource identifier",
        }


class TestAnnotation:
    def test_rejects_non_codec(self):
        with pytest.raises(TypeError):
            TextCodecAnnotation(int)
