# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request description types for the request pipeline.

A RequestSpec is the per-call input of :meth:`BaseClient.request`. It is owned
by a single pipeline invocation and is never shared between calls.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar

from pydantic import TypeAdapter

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

OutT = TypeVar("OutT")

# Anything pydantic can build a TypeAdapter for: a BaseModel subclass, a
# TypedDict, a dataclass, ``list[int]``, an ``Annotated`` type, or an adapter.
Schema = Any


@dataclass
class RequestSpec(Generic[OutT]):
    """
    Description of a single logical request.

    Attributes:
        method: HTTP method; normalised to upper case by the pipeline.
        path: Endpoint path relative to the client's base URL. May already
            contain a query string.
        query: Structured query object, encoded qs-style and appended to path.
        data: Request body. Validated against input_schema when one is given.
        headers: Extra headers for this request only.
        signal: Cancellation signal. Setting the event abandons the request
            while it waits for authorization or for the transport.
        input_schema: Schema the outbound body must satisfy.
        query_schema: Schema the query object must satisfy.
        output_schema: Schema the response body must satisfy. When given, the
            validated value is returned instead of the raw body.
    """

    method: str
    path: str
    query: Any = None
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    signal: asyncio.Event | None = None
    input_schema: Schema = None
    query_schema: Schema = None
    output_schema: "type[OutT] | TypeAdapter[OutT] | None" = None

    def __post_init__(self) -> None:
        self.method = self.method.upper()


__all__ = ["HTTPMethod", "OutT", "RequestSpec", "Schema"]
