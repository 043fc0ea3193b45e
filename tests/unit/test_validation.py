"""Unit tests for the pydantic validation adapter."""

from datetime import datetime, timezone

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from http_base_client.validation import (
    get_adapter,
    prettify_validation_error,
    to_query,
    to_wire,
    validate,
)


class Item(BaseModel):
    id: int
    name: str
    created_at: datetime | None = None


class Filters(BaseModel):
    status: str | None = None
    ids: list[int] = []


class TestValidate:
    def test_model_schema_returns_instance(self):
        item = validate({"id": "5", "name": "x"}, Item)
        assert isinstance(item, Item)
        assert item.id == 5

    def test_plain_type_schema(self):
        assert validate(["1", 2], list[int]) == [1, 2]

    def test_adapter_reused(self):
        adapter = TypeAdapter(list[int])
        assert get_adapter(adapter) is adapter

    def test_invalid_value_raises(self):
        with pytest.raises(ValidationError):
            validate({"id": "abc"}, Item)


class TestToWire:
    def test_returns_json_compatible_value(self):
        wire = to_wire(
            {"id": 1, "name": "x", "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc)},
            Item,
        )
        assert wire == {"id": 1, "name": "x", "created_at": "2024-01-01T00:00:00Z"}

    def test_applies_defaults_and_coercion(self):
        assert to_wire({"id": "7", "name": "x"}, Item) == {"id": 7, "name": "x", "created_at": None}


class TestToQuery:
    def test_drops_none_fields(self):
        assert to_query({"ids": ["1"]}, Filters) == {"ids": [1]}


class TestPrettifyValidationError:
    def test_lists_each_violation_with_location(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"id": "abc"}, Item)
        text = prettify_validation_error(exc_info.value)
        lines = text.splitlines()
        assert lines[0].startswith("✖ ")
        assert "  → at id" in lines
        assert "  → at name" in lines
        assert text.count("✖") == 2

    def test_root_error_without_location(self):
        with pytest.raises(ValidationError) as exc_info:
            validate("nope", int)
        text = prettify_validation_error(exc_info.value)
        assert text.startswith("✖ ")
        assert "→ at" not in text
