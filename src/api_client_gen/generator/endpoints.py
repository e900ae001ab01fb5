"""Endpoint expander: paths and operations to grouped endpoint records."""

from api_client_gen.errors import (
    DuplicateGroupNameError,
    MultipleContentTypesError,
    UnsupportedBodyTypeError,
    UnsupportedParameterLocationError,
    UnsupportedParameterTypeError,
    UnsupportedResponseContentTypeError,
    UnsupportedResponseTypeError,
    UnsupportedTypeError,
)
from api_client_gen.ir import VOID_TYPE, Endpoint, EndpointGroup, Parameter
from api_client_gen.naming import escaped_group_name
from api_client_gen.parser.base import Document, OperationNode, PropertyNode, RequestBodyNode
from api_client_gen.schema.expand import expand_property, qualify

DEFAULT_CONTENT_TYPE = "application/json"
SUCCESS_CODE = "200"
PATH_PLACEHOLDER = "\\({name})"


def sort_descending(parameters: list[Parameter]) -> list[Parameter]:
    """Parameters in descending name order, the order templates emit them in."""
    return sorted(parameters, key=lambda p: p.name, reverse=True)


def sort_by_method(endpoints: list[Endpoint]) -> list[Endpoint]:
    return sorted(endpoints, key=lambda e: e.method)


class EndpointExpander:
    """Builds one `EndpointGroup` per path of a document.

    Args:
        model_package: namespace model types are qualified with in
            body and response types.
    """

    def __init__(self, model_package: str = "API"):
        self.model_package = model_package

    def expand(self, document: Document) -> list[EndpointGroup]:
        groups: list[EndpointGroup] = []
        seen: dict[str, str] = {}

        for path, operations in document.paths.items():
            name = escaped_group_name(path)
            if name in seen:
                raise DuplicateGroupNameError(
                    f"Group name '{name}' is also produced by {seen[name]}", path=path
                )
            seen[name] = path

            endpoints = [
                self.expand_operation(name, path, method, operation)
                for method, operation in operations.items()
            ]
            groups.append(EndpointGroup(name=name, path=path, endpoints=sort_by_method(endpoints)))

        return groups

    def expand_operation(
        self, group_name: str, path: str, method: str, operation: OperationNode
    ) -> Endpoint:
        template = path
        parameters: list[Parameter] = []
        path_parameters: list[Parameter] = []
        query_parameters: list[Parameter] = []

        for param in operation.parameters or []:
            type_name = self._parameter_type(param.name, param.schema_, path, method)
            parameter = Parameter(name=param.name, type=type_name, optional=not param.required)

            if param.location == "path":
                template = template.replace(
                    "{" + param.name + "}", PATH_PLACEHOLDER.format(name=param.name)
                )
                path_parameters.append(parameter)
            elif param.location == "query":
                query_parameters.append(parameter)
            else:
                raise UnsupportedParameterLocationError(
                    f"Unsupported location '{param.location}' of parameter '{param.name}'",
                    path=path,
                    method=method,
                )
            parameters.append(parameter)

        body_type, content_type = self._body(operation.request_body, path, method)
        if body_type is not None:
            parameters.append(Parameter(name="body", type=body_type))

        return Endpoint(
            group_name=group_name,
            method=method,
            description=operation.summary,
            path_template=template.removeprefix("/"),
            path_parameters=path_parameters,
            query_parameters=sort_descending(query_parameters),
            parameters=sort_descending(parameters),
            body_parameter_type=body_type,
            response_type=self._response_type(operation, path, method),
            content_type=content_type,
        )

    def _parameter_type(self, name: str, schema: PropertyNode, path: str, method: str) -> str:
        message = f"Unsupported type of parameter '{name}'"
        try:
            type_name = expand_property(schema).type
        except UnsupportedTypeError as e:
            raise UnsupportedParameterTypeError(f"{message}: {e}", path=path, method=method) from e
        if type_name is None:
            raise UnsupportedParameterTypeError(message, path=path, method=method)
        return type_name

    def _body(
        self, body: RequestBodyNode | None, path: str, method: str
    ) -> tuple[str | None, str]:
        if body is None or not body.content:
            return None, DEFAULT_CONTENT_TYPE

        if len(body.content) > 1:
            raise MultipleContentTypesError(
                f"Multiple content types in request body are not supported: {', '.join(body.content)}",
                path=path,
                method=method,
            )

        content_type, media = next(iter(body.content.items()))
        message = "Unsupported type of body parameter"
        try:
            type_name = expand_property(media.schema_).type
        except UnsupportedTypeError as e:
            raise UnsupportedBodyTypeError(f"{message}: {e}", path=path, method=method) from e
        if type_name is None:
            raise UnsupportedBodyTypeError(message, path=path, method=method)

        if type_name != media.schema_.type:
            type_name = qualify(type_name, self.model_package)
        return type_name, content_type

    def _response_type(self, operation: OperationNode, path: str, method: str) -> str | None:
        response = operation.responses.get(SUCCESS_CODE)
        if response is None:
            return None
        if response.content is None:
            return VOID_TYPE

        response_type = VOID_TYPE
        for content_type, media in response.content.items():
            if content_type != "application/json":
                raise UnsupportedResponseContentTypeError(
                    f"Unsupported response content type '{content_type}'", path=path, method=method
                )
            message = "Unsupported type of response"
            try:
                type_name = expand_property(media.schema_).type
            except UnsupportedTypeError as e:
                raise UnsupportedResponseTypeError(f"{message}: {e}", path=path, method=method) from e
            if type_name is None:
                raise UnsupportedResponseTypeError(message, path=path, method=method)
            response_type = qualify(type_name, self.model_package, primitives=True)
        return response_type


def expand_endpoints(document: Document, *, model_package: str = "API") -> list[EndpointGroup]:
    """Convenience wrapper around `EndpointExpander`."""
    return EndpointExpander(model_package=model_package).expand(document)
