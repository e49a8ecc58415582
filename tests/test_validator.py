from swagger_generator.generator.validator import validate_document, validate_refs, validate_required


def _make_doc(schemas=None, paths=None) -> dict:
    return {
        "openapi": "3.0.1",
        "info": {"title": "API", "version": "1.0"},
        "paths": paths or {},
        "components": {"schemas": schemas or {}},
    }


class TestValidateRefs:
    def test_valid_refs(self):
        doc = _make_doc(
            schemas={"Pet": {"type": "object", "properties": {"self": {"$ref": "#/components/schemas/Pet"}}}},
        )
        assert validate_refs(doc) == {}

    def test_dangling_ref(self):
        doc = _make_doc(
            paths={"/pets": {"get": {"responses": {"200": {"description": "Success", "content": {
                "application/json": {"schema": {"$ref": "#/components/schemas/Missing"}}}}}}}},
        )
        errors = validate_refs(doc)
        assert len(errors) == 1
        location, message = next(iter(errors.items()))
        assert location.startswith("#/paths//pets/get")
        assert "Missing" in message

    def test_foreign_ref(self):
        doc = _make_doc(schemas={"Pet": {"$ref": "other.yaml#/Pet"}})
        assert "Unsupported" in validate_refs(doc)["#/components/schemas/Pet"]


class TestValidateRequired:
    def test_required_subset(self):
        doc = _make_doc(schemas={"Pet": {"type": "object", "properties": {"name": {"type": "string"}}, "required": ["name"]}})
        assert validate_required(doc) == {}

    def test_required_not_defined(self):
        doc = _make_doc(schemas={"Pet": {"type": "object", "properties": {}, "required": ["name"]}})
        assert "name" in validate_required(doc)["#/components/schemas/Pet"]

    def test_parameter_required_flag_ignored(self):
        doc = _make_doc(paths={"/pets/{id}": {"get": {"parameters": [{"name": "id", "in": "path", "required": True}]}}})
        assert validate_required(doc) == {}


class TestValidateDocument:
    def test_not_a_document(self):
        assert "#" in validate_document({"hello": "world"})
        assert "#" in validate_document(None)

    def test_all_valid(self):
        assert validate_document(_make_doc()) == {}
