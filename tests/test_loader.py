from pathlib import Path

import pytest

from swagger_generator.parser.base import (
    ArrayType,
    AsyncType,
    BindingSource,
    CompositeType,
    EnumType,
    OptionalType,
    PrimitiveKind,
    PrimitiveType,
    ResultType,
    UnknownType,
)
from swagger_generator.parser.loader import ActionModelError, load_actions, parse_actions, parse_type

FIXTURES = Path(__file__).parent / "fixtures"


class TestParseType:
    def test_primitive_names_and_aliases(self):
        assert parse_type("int64", {}) == PrimitiveType(kind=PrimitiveKind.INT64)
        assert parse_type("Guid", {}) == PrimitiveType(kind=PrimitiveKind.UUID)
        assert parse_type("date-time", {}) == PrimitiveType(kind=PrimitiveKind.DATE_TIME)

    def test_shorthand_suffixes(self):
        parsed = parse_type("int32?[]", {})
        assert isinstance(parsed, ArrayType)
        assert isinstance(parsed.element, OptionalType)
        assert parsed.element.inner == PrimitiveType(kind=PrimitiveKind.INT32)

    def test_mapping_forms(self):
        parsed = parse_type({"async": {"result": {"array": "string"}}}, {})
        assert isinstance(parsed, AsyncType)
        assert isinstance(parsed.inner, ResultType)
        assert isinstance(parsed.inner.inner, ArrayType)

    def test_bare_wrappers(self):
        assert parse_type("task", {}) == AsyncType()
        assert parse_type("result", {}) == ResultType()
        assert parse_type({"async": None}, {}) == AsyncType()

    def test_declared_type_returned_as_is(self):
        pet = CompositeType(qualified_name="Shop.Pet")
        assert parse_type("Shop.Pet", {"Shop.Pet": pet}) is pet

    def test_unknown_name(self):
        assert parse_type("System.Object", {}) == UnknownType(name="System.Object")

    def test_bad_mapping(self):
        with pytest.raises(ActionModelError):
            parse_type({"list": "string"}, {})

    def test_empty_reference(self):
        with pytest.raises(ActionModelError):
            parse_type("  ", {})


class TestLoadActions:
    def test_load_fixture(self):
        model = load_actions(FIXTURES / "shop.yaml")
        assert model.title == "Shop API"
        assert model.version == "2.0"
        assert [a.action for a in model.actions] == ["List", "Get", "Create", "Replace", "Remove", "Orphan"]

    def test_types_form_cycle(self):
        model = load_actions(FIXTURES / "shop.yaml")
        create = model.actions[2]
        pet = create.parameters[0].type
        assert isinstance(pet, CompositeType)
        owner = pet.properties["owner"].type
        assert owner.properties["pets"].type.element is pet
        assert isinstance(pet.properties["status"].type, EnumType)
        assert pet.properties["tag"].nullable is True

    def test_parameter_bindings_and_nullability(self):
        model = load_actions(FIXTURES / "shop.yaml")
        header = model.actions[2].parameters[1]
        assert header.bindings == frozenset({BindingSource.HEADER})
        assert header.nullable is True
        replace = model.actions[3]
        assert replace.parameters[1].bindings == frozenset({BindingSource.BODY})
        assert replace.method_constraint is None
        assert replace.endpoint_methods == ["PUT"]

    def test_missing_methods(self):
        model = load_actions(FIXTURES / "shop.yaml")
        orphan = model.actions[-1]
        assert orphan.method_constraint is None
        assert orphan.endpoint_methods is None

    def test_json_input(self, tmp_path):
        f = tmp_path / "actions.json"
        f.write_text('{"actions": [{"controller": "A", "action": "B", "methods": "get"}]}')
        model = load_actions(f)
        assert model.actions[0].method_constraint == ["GET"]
        assert model.title is None


class TestLoaderErrors:
    def test_not_a_mapping(self):
        with pytest.raises(ActionModelError):
            parse_actions(["nope"])

    def test_missing_controller(self):
        with pytest.raises(ActionModelError, match="controller"):
            parse_actions({"actions": [{"action": "Get"}]})

    def test_unknown_binding_source(self):
        data = {"actions": [{"controller": "A", "action": "B", "parameters": [{"name": "x", "type": "string", "from": "cookie"}]}]}
        with pytest.raises(ActionModelError, match="cookie"):
            parse_actions(data)

    def test_parameter_without_type(self):
        with pytest.raises(ActionModelError):
            parse_actions({"actions": [{"controller": "A", "action": "B", "parameters": [{"name": "x"}]}]})

    def test_types_not_a_mapping(self):
        with pytest.raises(ActionModelError, match="types: expected a mapping"):
            parse_actions({"types": ["Shop.Pet"], "actions": []})

    def test_properties_not_a_mapping(self):
        with pytest.raises(ActionModelError, match=r"types.Shop.Pet.properties: expected a mapping"):
            parse_actions({"types": {"Shop.Pet": {"properties": ["name"]}}, "actions": []})

    def test_actions_not_a_list(self):
        with pytest.raises(ActionModelError, match="actions: expected a list"):
            parse_actions({"actions": {"controller": "A", "action": "B"}})

    def test_non_string_route(self):
        with pytest.raises(ActionModelError, match=r"actions\[0\].route: expected a string"):
            parse_actions({"actions": [{"controller": "A", "action": "B", "route": 5}]})

    def test_non_string_parameter_name(self):
        data = {"actions": [{"controller": "A", "action": "B", "parameters": [{"name": 5, "type": "int32"}]}]}
        with pytest.raises(ActionModelError, match=r"parameters\[0\].name: expected a string"):
            parse_actions(data)

    def test_binding_sources_not_a_list(self):
        data = {"actions": [{"controller": "A", "action": "B", "parameters": [{"name": "x", "type": "int32", "from": 3}]}]}
        with pytest.raises(ActionModelError, match="from: expected a list"):
            parse_actions(data)


class TestFlowMappingQuoting:
    def test_quoted_shorthand_in_flow_mapping(self, tmp_path):
        f = tmp_path / "actions.yaml"
        f.write_text(
            "actions:\n"
            "  - controller: A\n"
            "    action: B\n"
            "    methods: [GET]\n"
            "    returns: {async: \"int32[]\"}\n"
            "    parameters:\n"
            "      - {name: q, type: \"string?\"}\n"
        )
        action = load_actions(f).actions[0]
        assert isinstance(action.return_type.inner, ArrayType)
        assert isinstance(action.parameters[0].type, OptionalType)
        assert action.parameters[0].nullable is True
