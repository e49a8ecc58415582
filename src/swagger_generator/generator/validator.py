"""Validates rendered OpenAPI documents for reference and structural integrity."""

from swagger_generator.openapi import SCHEMA_REF_PREFIX


def _walk(node, location: str):
    """Yield (location, mapping) for every mapping inside a document."""
    if isinstance(node, dict):
        yield location, node
        for key, value in node.items():
            yield from _walk(value, f"{location}/{key}")
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from _walk(value, f"{location}/{index}")


def validate_refs(doc: dict) -> dict[str, str]:
    """Check that every $ref points at a registered component schema.

    Returns dict of {location: error_message} for dangling references.
    """
    schemas = (doc.get("components") or {}).get("schemas") or {}
    errors = {}
    for location, node in _walk(doc, "#"):
        ref = node.get("$ref")
        if not isinstance(ref, str):
            continue
        if not ref.startswith(SCHEMA_REF_PREFIX):
            errors[location] = f"Unsupported reference: {ref}"
        elif ref[len(SCHEMA_REF_PREFIX):] not in schemas:
            errors[location] = f"Dangling reference: {ref}"
    return errors


def validate_required(doc: dict) -> dict[str, str]:
    """Check that every schema's required names are among its properties.

    Returns dict of {location: error_message} for offending schemas.
    """
    errors = {}
    for location, node in _walk(doc, "#"):
        required = node.get("required")
        if not isinstance(required, list):
            continue
        properties = node.get("properties") or {}
        missing = [name for name in required if name not in properties]
        if missing:
            errors[location] = f"Required but not defined: {', '.join(missing)}"
    return errors


def validate_document(doc: dict) -> dict[str, str]:
    """Run all validations on a rendered document.

    Returns dict of {location: error_message} for all problems found.
    """
    errors = {}
    if not isinstance(doc, dict) or "paths" not in doc:
        return {"#": "Not an OpenAPI document: missing 'paths'"}
    errors.update(validate_refs(doc))
    errors.update(validate_required(doc))
    return errors
