"""Flattening of `$ref` and `allOf` schemas into one object schema."""

import logging
from collections.abc import Iterable

from api_client_gen.errors import DanglingReferenceError, UnsupportedAllOfError
from api_client_gen.parser.base import PropertyNode, SchemaNode

from .refs import ref_name, schemas_named

logger = logging.getLogger("api_client_gen.schema")


def combine(schemas: Iterable[SchemaNode]) -> SchemaNode:
    """Merge schemas left to right into a synthetic object schema.

    `required` lists are concatenated in order (duplicates kept);
    properties with the same name are overridden by later schemas.
    """
    required: list[str] = []
    properties: dict[str, PropertyNode] = {}
    for schema in schemas:
        required.extend(schema.required or [])
        properties.update(schema.properties or {})
    return SchemaNode(type="object", required=required, properties=properties)


def effective_schema(
    name: str,
    schema: SchemaNode,
    schemas: dict[str, SchemaNode],
    *,
    allow_dangling: bool = False,
) -> SchemaNode:
    """The schema a named entry actually describes.

    A pure `$ref` combines every schema registered under the referenced name,
    an `allOf` combines the schemas its references point at, anything else
    is returned as is.

    Raises:
        UnsupportedAllOfError: an `allOf` element is not a plain `$ref`.
        DanglingReferenceError: a referenced name does not exist and
            `allow_dangling` is not set.
    """
    if schema.ref:
        target = ref_name(schema.ref)
        return combine(_lookup(name, target, schemas, allow_dangling))

    if schema.all_of is not None:
        targets = []
        for index, part in enumerate(schema.all_of):
            if not part.ref:
                raise UnsupportedAllOfError(
                    f"allOf element #{index} must be a $ref, inline schemas are not supported",
                    schema=name,
                )
            targets.append(ref_name(part.ref))

        merged: list[SchemaNode] = []
        for target in targets:
            merged.extend(_lookup(name, target, schemas, allow_dangling))
        return combine(merged)

    return schema


def _lookup(
    name: str,
    target: str,
    schemas: dict[str, SchemaNode],
    allow_dangling: bool,
) -> list[SchemaNode]:
    found = schemas_named(target, schemas)
    if not found:
        if not allow_dangling:
            raise DanglingReferenceError(f"Reference to unknown schema '{target}'", schema=name)
        logger.warning("%s references unknown schema '%s', treating it as empty", name, target)
    return found
