"""Parameter binding classification.

Decides where each action parameter is bound from (path, query, header, or
the request body) and whether it is required.
"""

from enum import Enum

from swagger_generator.generator.routes import RouteParameterNames
from swagger_generator.parser.base import (
    ArrayType,
    BindingSource,
    CompositeType,
    OptionalType,
    ParameterDescriptor,
    PrimitiveKind,
    PrimitiveType,
    TypeDescriptor,
    UnknownType,
)

PLACEHOLDER_NAME = "param"

_LOCATION_BINDINGS = (BindingSource.ROUTE, BindingSource.QUERY, BindingSource.HEADER)


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"


def _unwrap_optional(type_: TypeDescriptor) -> TypeDescriptor:
    while isinstance(type_, OptionalType):
        type_ = type_.inner
    return type_


def is_string_type(type_: TypeDescriptor) -> bool:
    type_ = _unwrap_optional(type_)
    return isinstance(type_, PrimitiveType) and type_.kind == PrimitiveKind.STRING


def is_reference_type(type_: TypeDescriptor) -> bool:
    """True for class-like types: composites, sequences, unknown kinds and string.

    An optional wrapper keeps the nature of what it wraps.
    """
    type_ = _unwrap_optional(type_)
    if isinstance(type_, (CompositeType, ArrayType, UnknownType)):
        return True
    return is_string_type(type_)


def parameter_name(param: ParameterDescriptor) -> str:
    return param.name or PLACEHOLDER_NAME


def classify_location(
    param: ParameterDescriptor, route_names: RouteParameterNames, method: str
) -> ParameterLocation | None:
    """Return the location of a non-body parameter, or None.

    None means the parameter is bound from the body, either explicitly or
    as an implicit body candidate.
    """
    if param.has_binding(BindingSource.BODY):
        return None

    has_location_binding = any(param.has_binding(b) for b in _LOCATION_BINDINGS)
    if param.has_binding(BindingSource.ROUTE) or (
        not has_location_binding and param.name is not None and param.name in route_names
    ):
        return ParameterLocation.PATH
    if param.has_binding(BindingSource.QUERY):
        return ParameterLocation.QUERY
    if param.has_binding(BindingSource.HEADER):
        return ParameterLocation.HEADER
    if not is_reference_type(param.type) or is_string_type(param.type) or method.upper() == "GET":
        return ParameterLocation.QUERY
    return None


def is_body_parameter(param: ParameterDescriptor) -> bool:
    """True if the parameter supplies the request body."""
    if param.has_binding(BindingSource.BODY):
        return True
    if any(param.has_binding(b) for b in _LOCATION_BINDINGS):
        return False
    return is_reference_type(param.type) and not is_string_type(param.type)


def is_required(param: ParameterDescriptor, location: ParameterLocation) -> bool:
    if location == ParameterLocation.PATH:
        return True
    return not param.nullable
