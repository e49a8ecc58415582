"""Action model file loader.

Reads a YAML (or JSON) description of controller actions and the types
they use into ActionDescriptor models. Composite types are created first
and their properties filled afterwards, so declarations may reference each
other in cycles.
"""

from pathlib import Path

import yaml

from .base import (
    ActionDescriptor,
    ActionModel,
    ArrayType,
    AsyncType,
    BindingSource,
    CompositeType,
    EnumType,
    OptionalType,
    ParameterDescriptor,
    PrimitiveKind,
    PrimitiveType,
    PropertyDescriptor,
    ResultType,
    TypeDescriptor,
    UnknownType,
)

_PRIMITIVE_ALIASES = {
    "str": PrimitiveKind.STRING,
    "guid": PrimitiveKind.UUID,
    "bool": PrimitiveKind.BOOLEAN,
    "short": PrimitiveKind.INT16,
    "int": PrimitiveKind.INT32,
    "long": PrimitiveKind.INT64,
    "single": PrimitiveKind.FLOAT,
    "date-time": PrimitiveKind.DATE_TIME,
    "date-time-offset": PrimitiveKind.DATE_TIME_OFFSET,
}

_WRAPPER_KEYS = ("array", "optional", "async", "result")


class ActionModelError(ValueError):
    """Raised when an action model file does not follow the expected layout."""


def load_actions(file_path: Path) -> ActionModel:
    """Load an action model file into an ActionModel."""
    text = file_path.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return parse_actions(data)


def parse_actions(data: dict) -> ActionModel:
    """Build an ActionModel from already-loaded action model data."""
    if not isinstance(data, dict):
        raise ActionModelError("action model must be a mapping")

    declarations = _mapping(data.get("types"), "types")
    types = _declare_types(declarations)
    _fill_composites(declarations, types)

    actions = []
    for index, entry in enumerate(_sequence(data.get("actions"), "actions")):
        actions.append(_parse_action(entry, types, f"actions[{index}]"))

    title = data.get("title")
    version = data.get("version")
    return ActionModel(
        actions=actions,
        title=str(title) if title is not None else None,
        version=str(version) if version is not None else None,
    )


def _mapping(value, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ActionModelError(f"{where}: expected a mapping, got {type(value).__name__}")
    return value


def _sequence(value, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ActionModelError(f"{where}: expected a list, got {type(value).__name__}")
    return value


def _optional_str(value, where: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ActionModelError(f"{where}: expected a string, got {type(value).__name__}")
    return value


def _declare_types(declarations: dict) -> dict[str, TypeDescriptor]:
    types: dict[str, TypeDescriptor] = {}
    for name, decl in declarations.items():
        decl = _mapping(decl, f"types.{name}")
        if decl.get("enum"):
            types[name] = EnumType(name=str(name))
        else:
            types[name] = CompositeType(qualified_name=str(name))
    return types


def _fill_composites(declarations: dict, types: dict[str, TypeDescriptor]) -> None:
    for name, decl in declarations.items():
        composite = types[name]
        if not isinstance(composite, CompositeType):
            continue
        properties = _mapping((decl or {}).get("properties"), f"types.{name}.properties")
        for prop_name, prop in properties.items():
            composite.properties[str(prop_name)] = _parse_property(prop, types, f"types.{name}.{prop_name}")


def _parse_property(prop, types: dict[str, TypeDescriptor], where: str) -> PropertyDescriptor:
    if isinstance(prop, dict) and "type" in prop:
        return PropertyDescriptor(
            type=parse_type(prop["type"], types, where),
            nullable=bool(prop.get("nullable", False)),
            readable=bool(prop.get("readable", True)),
        )
    return PropertyDescriptor(type=parse_type(prop, types, where))


def parse_type(ref, types: dict[str, TypeDescriptor], where: str = "type") -> TypeDescriptor:
    """Parse a type reference.

    Accepts primitive kind names, declared type names, ``T[]``, ``T?``,
    bare ``task``/``result`` wrappers, and the mapping forms
    ``{array: T}``, ``{optional: T}``, ``{async: T}``, ``{result: T}``.
    Unrecognized names become UnknownType.

    Inside a YAML flow mapping the shorthand suffixes must be quoted,
    e.g. ``{name: q, type: "string?"}``; unquoted ``[`` and ``?`` are
    flow syntax there.
    """
    if isinstance(ref, dict):
        if len(ref) != 1 or next(iter(ref)) not in _WRAPPER_KEYS:
            raise ActionModelError(f"{where}: expected one of {', '.join(_WRAPPER_KEYS)}, got {sorted(ref)}")
        key, inner = next(iter(ref.items()))
        if key == "array":
            return ArrayType(element=parse_type(inner, types, where))
        if key == "optional":
            return OptionalType(inner=parse_type(inner, types, where))
        inner_type = parse_type(inner, types, where) if inner is not None else None
        if key == "async":
            return AsyncType(inner=inner_type)
        return ResultType(inner=inner_type)

    if not isinstance(ref, str) or not ref.strip():
        raise ActionModelError(f"{where}: type reference must be a non-empty string or mapping")

    ref = ref.strip()
    if ref.endswith("[]"):
        return ArrayType(element=parse_type(ref[:-2], types, where))
    if ref.endswith("?"):
        return OptionalType(inner=parse_type(ref[:-1], types, where))
    if ref in types:
        return types[ref]

    lowered = ref.lower()
    if lowered == "task":
        return AsyncType()
    if lowered == "result":
        return ResultType()
    if lowered in _PRIMITIVE_ALIASES:
        return PrimitiveType(kind=_PRIMITIVE_ALIASES[lowered])
    try:
        return PrimitiveType(kind=PrimitiveKind(lowered))
    except ValueError:
        return UnknownType(name=ref)


def _parse_action(entry, types: dict[str, TypeDescriptor], where: str) -> ActionDescriptor:
    if not isinstance(entry, dict):
        raise ActionModelError(f"{where}: action must be a mapping")
    for key in ("controller", "action"):
        if not entry.get(key):
            raise ActionModelError(f"{where}: missing '{key}'")

    returns = entry.get("returns")
    return ActionDescriptor(
        controller=str(entry["controller"]),
        action=str(entry["action"]),
        route_template=_optional_str(entry.get("route"), f"{where}.route"),
        parameters=[
            _parse_parameter(p, types, f"{where}.parameters[{i}]")
            for i, p in enumerate(_sequence(entry.get("parameters"), f"{where}.parameters"))
        ],
        return_type=parse_type(returns, types, f"{where}.returns") if returns is not None else None,
        method_constraint=_parse_methods(entry.get("methods"), f"{where}.methods"),
        endpoint_methods=_parse_methods(entry.get("endpoint_methods"), f"{where}.endpoint_methods"),
    )


def _parse_methods(methods, where: str) -> list[str] | None:
    if methods is None:
        return None
    if isinstance(methods, str):
        methods = [methods]
    if not isinstance(methods, list):
        raise ActionModelError(f"{where}: expected a list of HTTP methods")
    return [str(m).upper() for m in methods]


def _parse_parameter(entry, types: dict[str, TypeDescriptor], where: str) -> ParameterDescriptor:
    if not isinstance(entry, dict) or "type" not in entry:
        raise ActionModelError(f"{where}: parameter must be a mapping with a 'type'")

    sources = entry.get("from") or []
    if isinstance(sources, str):
        sources = [sources]
    sources = _sequence(sources, f"{where}.from")
    bindings = set()
    for source in sources:
        try:
            bindings.add(BindingSource(str(source).lower()))
        except ValueError:
            raise ActionModelError(f"{where}: unknown binding source '{source}'") from None

    param_type = parse_type(entry["type"], types, f"{where}.type")
    # ``T?`` is nullable unless stated otherwise
    return ParameterDescriptor(
        name=_optional_str(entry.get("name"), f"{where}.name"),
        type=param_type,
        bindings=frozenset(bindings),
        nullable=bool(entry.get("nullable", isinstance(param_type, OptionalType))),
    )
