# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Schema validation adapter.

The pipeline validates payloads through pydantic. A schema may be a
``BaseModel`` subclass, any type ``pydantic.TypeAdapter`` understands
(``TypedDict``, dataclasses, ``list[int]``, ``Annotated`` types) or a
ready-made ``TypeAdapter``.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from .types.request import Schema


def get_adapter(schema: Schema) -> TypeAdapter[Any]:
    if isinstance(schema, TypeAdapter):
        return schema
    return TypeAdapter(schema)


def validate(value: Any, schema: Schema) -> Any:
    """Validate ``value`` against ``schema`` and return the validated value.

    Raises:
        pydantic.ValidationError: If the value does not match the schema.
    """
    return get_adapter(schema).validate_python(value)


def to_wire(value: Any, schema: Schema) -> Any:
    """Validate an outbound body and return its JSON-compatible form."""
    adapter = get_adapter(schema)
    return adapter.dump_python(adapter.validate_python(value), mode="json")


def to_query(value: Any, schema: Schema) -> Any:
    """Validate a query object and return it as plain python values, dropping None fields."""
    adapter = get_adapter(schema)
    return adapter.dump_python(adapter.validate_python(value), exclude_none=True)


def prettify_validation_error(error: ValidationError) -> str:
    """
    Render every violation of ``error`` as a readable block.

    Example output::

        ✖ Input should be a valid integer, unable to parse string as an integer
          → at id
        ✖ Field required
          → at tags.0.name
    """
    lines = []
    for detail in error.errors():
        lines.append(f"✖ {detail['msg']}")
        location = ".".join(str(part) for part in detail.get("loc", ()))
        if location:
            lines.append(f"  → at {location}")
    return "\n".join(lines)


__all__ = [
    "get_adapter",
    "prettify_validation_error",
    "to_query",
    "to_wire",
    "validate",
]
