"""Typed models for the subset of OpenAPI the generator understands.

The raw YAML mapping is validated into these models once, right after
loading; nothing downstream looks at the untyped document again.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger("api_client_gen.parser")

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("enum_values", mode="before", check_fields=False)
    @classmethod
    def _enum_literals(cls, value):
        # YAML reads `enum: [1, 2]` as ints
        if not isinstance(value, list):
            return value
        return [str(v).lower() if isinstance(v, bool) else str(v) for v in value]


class ItemsNode(_Node):
    """Element descriptor of an array property."""

    type: str | None = None
    format: str | None = None
    ref: str | None = Field(default=None, alias="$ref")
    enum_values: list[str] | None = Field(default=None, alias="enum")
    items: "ItemsNode | None" = None


class PropertyNode(_Node):
    """Type descriptor of a property, parameter, body or response schema."""

    type: str | None = None
    format: str | None = None
    ref: str | None = Field(default=None, alias="$ref")
    description: str | None = None
    items: ItemsNode | None = None
    enum_values: list[str] | None = Field(default=None, alias="enum")


class SchemaNode(_Node):
    """One named entry of ``components.schemas``."""

    type: str | None = None  # object / string; anything else is not rendered
    ref: str | None = Field(default=None, alias="$ref")
    all_of: list[PropertyNode] | None = Field(default=None, alias="allOf")
    enum_values: list[str] | None = Field(default=None, alias="enum")
    description: str | None = None
    required: list[str] | None = None
    properties: dict[str, PropertyNode] | None = None


class ParameterNode(_Node):
    name: str
    location: str = Field(alias="in")
    schema_: PropertyNode = Field(alias="schema")
    required: bool = False
    description: str | None = None


class MediaTypeNode(_Node):
    schema_: PropertyNode = Field(alias="schema")


class RequestBodyNode(_Node):
    content: dict[str, MediaTypeNode] | None = None


class ResponseNode(_Node):
    description: str = ""
    content: dict[str, MediaTypeNode] | None = None


class OperationNode(_Node):
    summary: str = ""
    description: str | None = None
    parameters: list[ParameterNode] | None = None
    request_body: RequestBodyNode | None = Field(default=None, alias="requestBody")
    responses: dict[str, ResponseNode] = {}

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value):
        # YAML reads an unquoted `200:` as an int
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value


class Info(_Node):
    title: str
    description: str = ""
    version: str = ""


class Server(_Node):
    name: str | None = None
    url: str


class Components(_Node):
    schemas: dict[str, SchemaNode] = {}


class Document(_Node):
    """A whole API description: info, servers, named schemas and paths."""

    info: Info
    servers: list[Server] = []
    components: Components = Components()
    paths: dict[str, dict[str, OperationNode]] = {}

    @field_validator("paths", mode="before")
    @classmethod
    def _keep_operations(cls, value):
        if not isinstance(value, dict):
            return value
        paths = {}
        for path, item in value.items():
            if not isinstance(item, dict):
                paths[path] = item
                continue
            operations = {}
            for key, operation in item.items():
                if key.lower() in HTTP_METHODS:
                    operations[key.lower()] = operation
                else:
                    logger.debug("Ignoring non-operation key '%s' under %s", key, path)
            paths[path] = operations
        return paths
