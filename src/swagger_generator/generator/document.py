"""Assembles an OpenAPI document from controller action descriptors."""

from collections.abc import Iterable

import structlog

from swagger_generator.generator.parameters import (
    classify_location,
    is_body_parameter,
    is_required,
    parameter_name,
)
from swagger_generator.generator.routes import (
    RouteParameterNames,
    get_http_methods,
    get_route_parameter_names,
    resolve_path,
)
from swagger_generator.generator.schema import OpenApiSchemaGenerator
from swagger_generator.openapi import (
    JSON_CONTENT_TYPE,
    PATH_ITEM_METHODS,
    Components,
    Info,
    MediaType,
    OpenApiDocument,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
)
from swagger_generator.parser.base import ActionDescriptor

logger = structlog.get_logger(__name__)

# A body is technically allowed on other verbs, but only these get one.
BODY_METHODS = ("POST", "PUT")


class OpenApiDocumentBuilder:
    """Builds one OpenAPI document per ``build`` call.

    Each call gets its own schema registry and cycle guard; nothing is
    carried over between builds.
    """

    def build(self, actions: Iterable[ActionDescriptor], info: Info | None = None) -> OpenApiDocument:
        document = OpenApiDocument(
            info=info or Info(),
            paths={},
            components=Components(schemas={}),
        )
        schema_generator = OpenApiSchemaGenerator(document.components.schemas)

        for action in actions:
            self._add_action(document, schema_generator, action)

        logger.info(
            "document_built",
            title=document.info.title,
            paths=len(document.paths),
            schemas=len(document.components.schemas),
        )
        return document

    def _add_action(
        self,
        document: OpenApiDocument,
        schema_generator: OpenApiSchemaGenerator,
        action: ActionDescriptor,
    ) -> None:
        methods = get_http_methods(action)
        if not methods:
            logger.debug("action_skipped_no_methods", controller=action.controller, action=action.action)
            return

        path = resolve_path(action)
        route_names = get_route_parameter_names(path)

        for method in methods:
            key = method.lower()
            if key not in PATH_ITEM_METHODS:
                logger.warning("unsupported_method_skipped", method=method, path=path)
                continue

            path_item = document.paths.get(path)
            if path_item is None:
                path_item = PathItem()
                document.paths[path] = path_item

            operation = self._build_operation(schema_generator, action, method, route_names)
            if getattr(path_item, key) is not None:
                logger.warning(
                    "operation_overwritten",
                    method=method,
                    path=path,
                    operation_id=operation.operation_id,
                )
            setattr(path_item, key, operation)

    def _build_operation(
        self,
        schema_generator: OpenApiSchemaGenerator,
        action: ActionDescriptor,
        method: str,
        route_names: RouteParameterNames,
    ) -> Operation:
        ok_response = Response(description="Success")
        response_schema = schema_generator.resolve_response(action.return_type)
        if response_schema is not None:
            ok_response.content = {JSON_CONTENT_TYPE: MediaType(schema=response_schema)}

        operation = Operation(
            operation_id=f"{action.controller}_{action.action}",
            responses={"200": ok_response},
        )

        parameters = []
        for param in action.parameters:
            location = classify_location(param, route_names, method)
            if location is None:
                continue
            parameters.append(
                Parameter(
                    name=parameter_name(param),
                    in_=location.value,
                    required=is_required(param, location),
                    schema=schema_generator.resolve(param.type),
                )
            )
        if parameters:
            operation.parameters = parameters

        if method in BODY_METHODS:
            body_param = next((p for p in action.parameters if is_body_parameter(p)), None)
            if body_param is not None:
                operation.request_body = RequestBody(
                    content={JSON_CONTENT_TYPE: MediaType(schema=schema_generator.resolve(body_param.type))}
                )

        return operation
