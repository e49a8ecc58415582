"""OpenAPI 3.0 document models produced by the builder.

Field aliases carry the standard OpenAPI names (``operationId``, ``in``,
``$ref``...) so that ``model_dump(by_alias=True)`` yields the wire shape.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

OPENAPI_VERSION = "3.0.1"
SCHEMA_REF_PREFIX = "#/components/schemas/"
JSON_CONTENT_TYPE = "application/json"

# Operation keys a PathItem can hold, in OpenAPI order.
PATH_ITEM_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class _OpenApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Schema(_OpenApiModel):
    """A schema object, or a reference to a registered one."""

    type: str | None = None
    format: str | None = None
    properties: dict[str, Schema] | None = None
    required: list[str] | None = None
    items: Schema | None = None
    ref: str | None = Field(default=None, alias="$ref")

    @classmethod
    def reference(cls, schema_id: str) -> Schema:
        return cls(ref=SCHEMA_REF_PREFIX + schema_id)

    @property
    def ref_id(self) -> str | None:
        """The registered schema id this schema points at, if it is a reference."""
        if self.ref is None or not self.ref.startswith(SCHEMA_REF_PREFIX):
            return None
        return self.ref[len(SCHEMA_REF_PREFIX):]


class Info(_OpenApiModel):
    title: str = "API"
    version: str = "1.0"


class MediaType(_OpenApiModel):
    schema_: Schema | None = Field(default=None, alias="schema")


class Parameter(_OpenApiModel):
    name: str
    in_: str = Field(alias="in")  # path / query / header
    required: bool
    schema_: Schema | None = Field(default=None, alias="schema")


class RequestBody(_OpenApiModel):
    content: dict[str, MediaType]


class Response(_OpenApiModel):
    description: str
    content: dict[str, MediaType] | None = None


class Operation(_OpenApiModel):
    operation_id: str = Field(alias="operationId")
    parameters: list[Parameter] | None = None
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response]


class PathItem(_OpenApiModel):
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None

    def operations(self) -> dict[str, Operation]:
        """Operations present on this path, keyed by lower-case method."""
        result = {}
        for method in PATH_ITEM_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                result[method] = operation
        return result


class Components(_OpenApiModel):
    schemas: dict[str, Schema] = Field(default_factory=dict)


class OpenApiDocument(_OpenApiModel):
    openapi: str = OPENAPI_VERSION
    info: Info = Field(default_factory=Info)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)
