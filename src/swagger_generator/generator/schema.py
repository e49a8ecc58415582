"""Type descriptor to OpenAPI schema translation.

Composite types are registered once per document under a stable id and
referenced everywhere else. A "currently building" guard set breaks cycles
between composites, so recursion depth is bounded by the number of distinct
composite types rather than by the shape of the type graph.
"""

import re

import structlog

from swagger_generator.openapi import Schema
from swagger_generator.parser.base import (
    ArrayType,
    AsyncType,
    CompositeType,
    EnumType,
    OptionalType,
    PrimitiveKind,
    PrimitiveType,
    PropertyDescriptor,
    ResultType,
    TypeDescriptor,
)

logger = structlog.get_logger(__name__)

# kind -> (type, format)
PRIMITIVE_SCHEMAS: dict[PrimitiveKind, tuple[str, str | None]] = {
    PrimitiveKind.STRING: ("string", None),
    PrimitiveKind.UUID: ("string", "uuid"),
    PrimitiveKind.DATE_TIME_OFFSET: ("string", "date-time"),
    PrimitiveKind.BOOLEAN: ("boolean", None),
    PrimitiveKind.BYTE: ("integer", "int32"),
    PrimitiveKind.INT16: ("integer", "int32"),
    PrimitiveKind.INT32: ("integer", "int32"),
    PrimitiveKind.INT64: ("integer", "int64"),
    PrimitiveKind.FLOAT: ("number", "float"),
    PrimitiveKind.DOUBLE: ("number", "double"),
    PrimitiveKind.DECIMAL: ("number", "decimal"),
    PrimitiveKind.DATE_TIME: ("string", "date-time"),
    PrimitiveKind.DATE: ("string", "date"),
    PrimitiveKind.TIME: ("string", "time"),
}

_UNSAFE_ID_CHARS = re.compile(r"[^0-9A-Za-z_]")


def get_schema_id(qualified_name: str) -> str:
    """Stable registry id for a composite type, e.g. ``Shop.Pet+Tag`` -> ``Shop_Pet_Tag``."""
    return _UNSAFE_ID_CHARS.sub("_", qualified_name)


def normalize(type_: TypeDescriptor | None) -> TypeDescriptor | None:
    """Strip optional, async and result wrappers.

    Returns None when the wrappers carry no value (a bare async wrapper or
    an untyped result).
    """
    while isinstance(type_, (OptionalType, AsyncType, ResultType)):
        type_ = type_.inner
    return type_


def is_nullable_property(prop: PropertyDescriptor) -> bool:
    return prop.nullable or isinstance(prop.type, OptionalType)


class OpenApiSchemaGenerator:
    """Maps type descriptors to schemas and registers composites.

    One instance serves exactly one document build: ``schemas`` is that
    document's ``components.schemas`` mapping.
    """

    def __init__(self, schemas: dict[str, Schema] | None = None):
        self.schemas = schemas if schemas is not None else {}
        self._building: set[str] = set()

    def resolve(self, type_: TypeDescriptor | None) -> Schema | None:
        """Get or create the schema for a parameter, body or property type."""
        type_ = normalize(type_)
        if type_ is None:
            return None

        if isinstance(type_, PrimitiveType):
            schema_type, schema_format = PRIMITIVE_SCHEMAS[type_.kind]
            return Schema(type=schema_type, format=schema_format)

        if isinstance(type_, ArrayType):
            return Schema(type="array", items=self.resolve(type_.element))

        # Enum values are not listed.
        if isinstance(type_, EnumType):
            return Schema(type="string")

        if isinstance(type_, CompositeType):
            return self._resolve_composite(type_)

        return Schema(type="object")

    def resolve_response(self, type_: TypeDescriptor | None) -> Schema | None:
        """Get the response body schema for an action return type.

        None when the action returns no value or an untyped result.
        """
        return self.resolve(normalize(type_))

    def _resolve_composite(self, type_: CompositeType) -> Schema:
        schema_id = get_schema_id(type_.qualified_name)
        if schema_id in self.schemas or schema_id in self._building:
            return Schema.reference(schema_id)

        self._building.add(schema_id)
        try:
            schema = Schema(type="object", properties={})
            required = []
            for name, prop in type_.properties.items():
                if not prop.readable:
                    continue
                schema.properties[name] = self.resolve(prop.type) or Schema(type="object")
                if not is_nullable_property(prop):
                    required.append(name)
            if required:
                schema.required = required

            self.schemas[schema_id] = schema
            logger.debug("schema_registered", schema_id=schema_id, properties=len(schema.properties))
        finally:
            self._building.discard(schema_id)
        return Schema.reference(schema_id)
