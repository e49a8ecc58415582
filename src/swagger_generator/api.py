"""Analysis result pairing the input actions with their OpenAPI document."""

from pydantic import BaseModel

from swagger_generator.generator.document import OpenApiDocumentBuilder
from swagger_generator.openapi import Info, OpenApiDocument
from swagger_generator.parser.base import ActionDescriptor
from swagger_generator.render import render_json


class WebApi(BaseModel):
    """The actions of a web API and the document built from them.

    ``actions`` may hold cyclic type descriptors, so only ``document`` is
    ever dumped; do not call ``model_dump`` on a WebApi itself.
    """

    actions: list[ActionDescriptor]
    document: OpenApiDocument

    @property
    def swagger(self) -> str:
        """The document rendered as OpenAPI 3.0 JSON."""
        return render_json(self.document)


def analyze(actions: list[ActionDescriptor], title: str | None = None, version: str | None = None) -> WebApi:
    """Build the OpenAPI document for a list of actions."""
    info = Info(title=title or "API", version=version or "1.0")
    document = OpenApiDocumentBuilder().build(actions, info=info)
    return WebApi(actions=actions, document=document)
