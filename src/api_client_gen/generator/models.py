"""Model expander: named schemas to object and enum models."""

import logging

from api_client_gen.errors import (
    DuplicateEnumNameError,
    MissingEnumValuesError,
    UnsupportedTypeError,
)
from api_client_gen.ir import NO_DESCRIPTION, EnumCase, EnumModel, Model, NestedEnum, ObjectModel, Property
from api_client_gen.parser.base import Document, SchemaNode
from api_client_gen.schema.combine import effective_schema
from api_client_gen.schema.expand import expand_property

logger = logging.getLogger("api_client_gen.models")


def sort_properties(properties: list[Property]) -> list[Property]:
    """Properties in ascending name order."""
    return sorted(properties, key=lambda p: p.name)


class ModelExpander:
    """Builds the model IR for every named schema of a document.

    Args:
        allow_dangling_refs: combine references to unknown schemas into an
            empty object instead of failing.
        strict_properties: fail on an object property whose type can't be
            resolved instead of dropping it.
    """

    def __init__(self, allow_dangling_refs: bool = False, strict_properties: bool = False):
        self.allow_dangling_refs = allow_dangling_refs
        self.strict_properties = strict_properties

    def expand(self, document: Document) -> list[Model]:
        schemas = document.components.schemas
        models: list[Model] = []

        for name, schema in schemas.items():
            effective = effective_schema(
                name, schema, schemas, allow_dangling=self.allow_dangling_refs
            )
            model = self.expand_schema(name, effective)
            if model is None:
                logger.debug("Schema %s has no renderable type, skipped", name)
                continue
            models.append(model)

        _check_enum_names(models)
        return models

    def expand_schema(self, name: str, schema: SchemaNode) -> Model | None:
        """Model for one already-flattened schema, or None if it isn't rendered."""
        if schema.type == "object":
            return self._object_model(name, schema)
        if schema.type == "string":
            return self._enum_model(name, schema)
        return None

    def _object_model(self, name: str, schema: SchemaNode) -> ObjectModel:
        required = set(schema.required or [])
        properties: list[Property] = []
        enums: list[NestedEnum] = []

        for prop_name, prop in (schema.properties or {}).items():
            try:
                expanded = expand_property(prop, name, prop_name)
            except UnsupportedTypeError as e:
                if self.strict_properties:
                    raise UnsupportedTypeError(str(e), schema=name, field=prop_name) from e
                logger.warning("Dropping %s.%s: %s", name, prop_name, e)
                continue

            if expanded.type is None:
                if self.strict_properties:
                    raise UnsupportedTypeError(
                        "Property has neither 'type' nor '$ref'", schema=name, field=prop_name
                    )
                logger.warning("Dropping %s.%s: property has neither 'type' nor '$ref'", name, prop_name)
                continue

            if expanded.enum is not None:
                enums.append(expanded.enum)

            properties.append(
                Property(
                    name=prop_name,
                    type=expanded.type,
                    optional=prop_name not in required,
                    description=prop.description or NO_DESCRIPTION,
                    enum=expanded.enum.name if expanded.enum else None,
                )
            )

        return ObjectModel(
            name=name,
            description=schema.description or NO_DESCRIPTION,
            properties=sort_properties(properties),
            nested_enums=enums,
        )

    def _enum_model(self, name: str, schema: SchemaNode) -> EnumModel:
        if not schema.enum_values:
            raise MissingEnumValuesError(
                "Schema with type 'string' doesn't contain enum", schema=name
            )
        return EnumModel(
            name=name,
            description=schema.description or NO_DESCRIPTION,
            cases=[EnumCase(name=case) for case in schema.enum_values],
        )


def _check_enum_names(models: list[Model]) -> None:
    """Nested enums share one namespace with each other and with models."""
    owners = {model.name: f"model {model.name}" for model in models}
    for model in models:
        if not isinstance(model, ObjectModel):
            continue
        for nested in model.nested_enums:
            owner = f"enum of {model.name}"
            if nested.name in owners:
                raise DuplicateEnumNameError(
                    f"Enum name '{nested.name}' is already used by {owners[nested.name]}",
                    schema=model.name,
                )
            owners[nested.name] = owner


def expand_models(
    document: Document,
    *,
    allow_dangling_refs: bool = False,
    strict_properties: bool = False,
) -> list[Model]:
    """Convenience wrapper around `ModelExpander`."""
    expander = ModelExpander(
        allow_dangling_refs=allow_dangling_refs, strict_properties=strict_properties
    )
    return expander.expand(document)
