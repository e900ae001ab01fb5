"""Exceptions raised while turning an API description into client sources.

Every failure is fatal to the run, so all of them share one base class the
CLI can catch and report.
"""


class GenerationError(Exception):
    """Base exception for generation failures.

    Optional context (schema, field, path, method) is rendered in front
    of the message so the offending spot in the document is easy to find.
    """

    def __init__(
        self,
        message: str,
        *,
        schema: str | None = None,
        field: str | None = None,
        path: str | None = None,
        method: str | None = None,
    ):
        self.schema = schema
        self.field = field
        self.path = path
        self.method = method

        context = []
        if method and path:
            context.append(f"{method.upper()} {path}")
        elif path:
            context.append(path)
        if schema and field:
            context.append(f"{schema}.{field}")
        elif schema:
            context.append(schema)

        full_message = f"[{', '.join(context)}] {message}" if context else message
        super().__init__(full_message)


class DocumentError(GenerationError):
    """The API description cannot be read or does not have the expected shape."""


class ConfigError(GenerationError):
    """The project configuration file is missing or invalid."""


class TemplateError(GenerationError):
    """The template bundle cannot be fetched or a template is missing."""


class UnsupportedTypeError(GenerationError):
    """A scalar kind/format pair has no mapping, or an enum is used on a non-string kind."""


class UnsupportedAllOfError(GenerationError):
    """An `allOf` element is not a plain `$ref`."""


class MissingEnumValuesError(GenerationError):
    """A top-level string schema has no `enum`."""


class DanglingReferenceError(GenerationError):
    """A `$ref` points at a schema name that does not exist."""


class DuplicateEnumNameError(GenerationError):
    """Two generated enums (or an enum and a model) end up with the same name."""


class DuplicateGroupNameError(GenerationError):
    """Two distinct paths escape to the same endpoint group name."""


class UnsupportedParameterTypeError(GenerationError):
    """A parameter schema cannot be typed."""


class UnsupportedParameterLocationError(GenerationError):
    """A parameter is located somewhere other than `path` or `query`."""


class MultipleContentTypesError(GenerationError):
    """A request body declares more than one content type."""


class UnsupportedBodyTypeError(GenerationError):
    """A request body schema cannot be typed."""


class UnsupportedResponseContentTypeError(GenerationError):
    """A `200` response uses a media type other than `application/json`."""


class UnsupportedResponseTypeError(GenerationError):
    """A `200` response schema cannot be typed."""
