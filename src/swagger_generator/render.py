"""Text rendering of built OpenAPI documents (JSON or YAML)."""

import json
from pathlib import Path

import yaml

from swagger_generator.openapi import OpenApiDocument


def document_to_dict(document: OpenApiDocument) -> dict:
    """Convert a document to plain data with OpenAPI field names."""
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def render_json(document: OpenApiDocument, indent: int = 2) -> str:
    return json.dumps(document_to_dict(document), indent=indent, ensure_ascii=False)


def render_yaml(document: OpenApiDocument) -> str:
    return yaml.safe_dump(document_to_dict(document), sort_keys=False, allow_unicode=True)


def detect_output_format(file_path: Path) -> str:
    """Pick the output format from a file suffix.

    Returns: 'yaml' or 'json'.
    """
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"


def render(document: OpenApiDocument, fmt: str, indent: int = 2) -> str:
    if fmt == "yaml":
        return render_yaml(document)
    return render_json(document, indent=indent)
