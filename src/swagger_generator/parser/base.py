"""Action model consumed by the document builder.

The loader (or any other upstream collaborator) converts its input into
these models. Type information is fully pre-extracted into TypeDescriptor
trees; nothing downstream inspects a live type system.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class PrimitiveKind(str, Enum):
    """Scalar kinds with a fixed OpenAPI type/format mapping."""

    STRING = "string"
    UUID = "uuid"
    DATE_TIME_OFFSET = "datetimeoffset"
    BOOLEAN = "boolean"
    BYTE = "byte"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    DATE_TIME = "datetime"
    DATE = "date"
    TIME = "time"


class BindingSource(str, Enum):
    """Where an explicitly annotated parameter takes its value from."""

    BODY = "body"
    ROUTE = "route"
    QUERY = "query"
    HEADER = "header"


class PrimitiveType(BaseModel):
    kind: PrimitiveKind


class ArrayType(BaseModel):
    element: TypeDescriptor


class EnumType(BaseModel):
    name: str


class PropertyDescriptor(BaseModel):
    """A property of a composite type."""

    type: TypeDescriptor
    nullable: bool = False
    readable: bool = True  # False for properties without a public getter


class CompositeType(BaseModel):
    """A structured type, registered as a reusable schema.

    ``properties`` may be filled after construction so that composites can
    reference each other (or themselves) in cycles. Cyclic descriptors must
    not be compared with ``==`` or passed to ``model_dump``: both recurse
    through the properties without a cycle check. Compare them by identity
    or by ``qualified_name``.
    """

    qualified_name: str
    properties: dict[str, PropertyDescriptor] = Field(default_factory=dict)


class OptionalType(BaseModel):
    inner: TypeDescriptor


class AsyncType(BaseModel):
    """An awaitable wrapper. ``inner`` is None for a wrapper with no value."""

    inner: TypeDescriptor | None = None


class ResultType(BaseModel):
    """An action-result wrapper. ``inner`` is None when untyped."""

    inner: TypeDescriptor | None = None


class UnknownType(BaseModel):
    """A kind the generator has no mapping for."""

    name: str = "object"


TypeDescriptor = Union[
    PrimitiveType,
    ArrayType,
    EnumType,
    CompositeType,
    OptionalType,
    AsyncType,
    ResultType,
    UnknownType,
]

ArrayType.model_rebuild()
PropertyDescriptor.model_rebuild()
CompositeType.model_rebuild()
OptionalType.model_rebuild()
AsyncType.model_rebuild()
ResultType.model_rebuild()


class ParameterDescriptor(BaseModel):
    """A single action parameter."""

    name: str | None
    type: TypeDescriptor
    bindings: frozenset[BindingSource] = frozenset()  # empty: no annotation
    nullable: bool = False

    def has_binding(self, source: BindingSource) -> bool:
        return source in self.bindings


class ActionDescriptor(BaseModel):
    """A single controller action with all its routing metadata."""

    controller: str
    action: str
    route_template: str | None = None
    parameters: list[ParameterDescriptor] = Field(default_factory=list)
    return_type: TypeDescriptor | None = None
    method_constraint: list[str] | None = None  # explicit HTTP-method constraint
    endpoint_methods: list[str] | None = None  # endpoint-level HTTP-method metadata


class ActionModel(BaseModel):
    """A loaded action model file: actions plus optional document info."""

    actions: list[ActionDescriptor]
    title: str | None = None
    version: str | None = None
