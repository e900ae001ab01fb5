"""`$ref` resolution.

Only local, single-hop references are supported: the last path segment of
the reference is the key into ``components.schemas``.
"""

from api_client_gen.parser.base import SchemaNode


def ref_name(ref: str) -> str:
    """``#/components/schemas/Pet`` -> ``Pet``."""
    return ref.split("/")[-1]


def resolve_ref(ref: str, schemas: dict[str, SchemaNode]) -> SchemaNode | None:
    return schemas.get(ref_name(ref))


def schemas_named(name: str, schemas: dict[str, SchemaNode]) -> list[SchemaNode]:
    """All schemas registered under `name` (zero or one)."""
    return [schema for key, schema in schemas.items() if key == name]
