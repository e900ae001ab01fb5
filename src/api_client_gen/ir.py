"""Renderer-ready intermediate representation.

Models and endpoint groups are built once per run from a `Document` and
handed to the template renderer unchanged.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

NO_DESCRIPTION = "Description not provided"

# Response type of a 200 response without content
VOID_TYPE = "Empty"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class EnumCase(_Record):
    name: str
    description: str = NO_DESCRIPTION


class NestedEnum(_Record):
    """A string enum generated for one object property."""

    name: str
    description: str | None = None
    cases: list[EnumCase]


class Property(_Record):
    name: str
    type: str
    optional: bool
    description: str = NO_DESCRIPTION
    enum: str | None = None  # name of the nested enum backing this property


class ObjectModel(_Record):
    kind: Literal["object"] = "object"
    name: str
    description: str = NO_DESCRIPTION
    properties: list[Property] = []
    nested_enums: list[NestedEnum] = []


class EnumModel(_Record):
    kind: Literal["enum"] = "enum"
    name: str
    description: str = NO_DESCRIPTION
    cases: list[EnumCase]


Model = ObjectModel | EnumModel


class Parameter(_Record):
    name: str
    type: str
    optional: bool = False


class Endpoint(_Record):
    """One operation (path + method)."""

    group_name: str
    method: str
    description: str
    path_template: str
    path_parameters: list[Parameter] = []
    query_parameters: list[Parameter] = []
    parameters: list[Parameter] = []
    body_parameter_type: str | None = None
    response_type: str | None = None
    content_type: str = "application/json"


class EndpointGroup(_Record):
    """All operations declared on one raw path."""

    name: str
    path: str
    endpoints: list[Endpoint]
