"""CLI entry point for swagger-generator."""

from pathlib import Path

import click
import yaml

from swagger_generator.config import get_settings
from swagger_generator.generator.document import OpenApiDocumentBuilder
from swagger_generator.generator.validator import validate_document
from swagger_generator.log import configure_logging
from swagger_generator.openapi import Info
from swagger_generator.parser.loader import ActionModelError, load_actions
from swagger_generator.render import detect_output_format, document_to_dict, render


@click.group()
@click.option("--log-level", default=None, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), help="Log level (overrides SWAGGER_GENERATOR_LOG_LEVEL).")
@click.option("--json-logs", is_flag=True, help="Emit log lines as JSON.")
def main(log_level: str | None, json_logs: bool):
    """Swagger Generator — build OpenAPI documents from controller action models."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_logs=json_logs or settings.json_logs,
    )


@main.command()
@click.argument("actions_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the OpenAPI document.")
@click.option("--title", default=None, help="Document title.")
@click.option("--version", "doc_version", default=None, help="Document version.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format.")
@click.option("--strict", is_flag=True, help="Fail if the generated document has integrity problems.")
def generate(actions_path: Path, output: Path, title: str | None, doc_version: str | None, fmt: str, strict: bool):
    """Generate an OpenAPI document from an action model file."""
    settings = get_settings()

    click.echo(f"Loading actions from {actions_path}...")
    try:
        model = load_actions(actions_path)
    except (ActionModelError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid action model: {e}") from e
    click.echo(f"Found {len(model.actions)} actions.")

    info = Info(
        title=title or model.title or settings.default_title,
        version=doc_version or model.version or settings.default_version,
    )
    document = OpenApiDocumentBuilder().build(model.actions, info=info)
    operation_count = sum(len(item.operations()) for item in document.paths.values())
    click.echo(
        f"Built {len(document.paths)} paths, {operation_count} operations, "
        f"{len(document.components.schemas)} schemas."
    )

    errors = validate_document(document_to_dict(document))
    for location, message in errors.items():
        click.echo(f"  Warning: {location}: {message}", err=True)
    if errors and strict:
        raise click.ClickException(f"{len(errors)} integrity problems found")

    if fmt == "auto":
        fmt = detect_output_format(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render(document, fmt, indent=settings.indent), encoding="utf-8")
    click.echo(f"OpenAPI document saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def validate(doc_path: Path):
    """Check a generated OpenAPI document for dangling references."""
    try:
        doc = yaml.safe_load(doc_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise click.ClickException(f"Cannot parse {doc_path}: {e}") from e

    errors = validate_document(doc)
    if not errors:
        click.echo(f"{doc_path}: OK")
        return
    for location, message in errors.items():
        click.echo(f"{location}: {message}")
    raise click.ClickException(f"{len(errors)} problems found in {doc_path}")
