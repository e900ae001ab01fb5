"""Property type expansion shared by models and endpoints."""

from typing import NamedTuple

from api_client_gen.ir import NO_DESCRIPTION, VOID_TYPE, EnumCase, NestedEnum
from api_client_gen.naming import enum_name
from api_client_gen.parser.base import PropertyNode

from .enums import parse_enum_description
from .refs import ref_name
from .types import BINARY, PRIMITIVE_TYPES, element_of, map_primitive, sequence_of


class ExpandedType(NamedTuple):
    type: str | None
    enum: NestedEnum | None = None
    is_model: bool = False


def expand_property(
    prop: PropertyNode,
    schema_name: str | None = None,
    property_name: str | None = None,
) -> ExpandedType:
    """Resolve the type of a property-like schema.

    A `type` goes through the primitive mapper, except a string enum with
    both names known, which becomes a nested enum named
    ``<SchemaName><PropertyName>``. A bare `$ref` resolves to the referenced
    model name. With neither, the type is unresolved (``None``) and the
    caller decides whether that is fatal.

    Raises:
        UnsupportedTypeError: from the primitive mapper.
    """
    if prop.type:
        has_enum = prop.enum_values is not None
        type_name = map_primitive(prop.type, prop.format, items=prop.items, has_enum=has_enum)
        if (
            prop.type == "string"
            and type_name != BINARY
            and has_enum
            and schema_name
            and property_name
        ):
            nested = _nested_enum(prop, enum_name(schema_name, property_name))
            return ExpandedType(nested.name, nested)
        return ExpandedType(type_name)

    if prop.ref:
        return ExpandedType(ref_name(prop.ref), is_model=True)

    return ExpandedType(None)


def _nested_enum(prop: PropertyNode, name: str) -> NestedEnum:
    parsed = parse_enum_description(prop.description)
    return NestedEnum(
        name=name,
        description=parsed.shared,
        cases=[
            EnumCase(name=case, description=parsed.cases.get(case, NO_DESCRIPTION))
            for case in prop.enum_values or []
        ],
    )


def qualify(type_name: str, package: str, *, primitives: bool = False) -> str:
    """Namespace a type under `package`.

    Sequences qualify their element: ``Pet`` -> ``API.Pet``,
    ``[Pet]`` -> ``[API.Pet]``. Primitives are only namespaced when
    `primitives` is set; the void type never is.
    """
    element = element_of(type_name)
    if element is not None:
        return sequence_of(qualify(element, package, primitives=primitives))
    if type_name == VOID_TYPE or not package:
        return type_name
    if type_name in PRIMITIVE_TYPES and not primitives:
        return type_name
    return f"{package}.{type_name}"
