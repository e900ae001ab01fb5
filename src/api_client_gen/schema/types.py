"""Scalar schema -> target type name mapping."""

from api_client_gen.errors import UnsupportedTypeError
from api_client_gen.parser.base import ItemsNode

from .refs import ref_name

BINARY = "Data"
TEXT = "String"
INT64 = "Int64"
INT32 = "Int32"
INT = "Int"
BOOL = "Bool"
DOUBLE = "Double"
FLOAT = "Float"

PRIMITIVE_TYPES = frozenset({BINARY, TEXT, INT64, INT32, INT, BOOL, DOUBLE, FLOAT})

INTEGER_FORMATS = {"int64": INT64, "int32": INT32}
FLOAT_FORMATS = {"float", "Float"}


def sequence_of(type_name: str) -> str:
    return f"[{type_name}]"


def element_of(type_name: str) -> str | None:
    """Element type of a sequence type, or None if `type_name` isn't one."""
    if type_name.startswith("[") and type_name.endswith("]"):
        return type_name[1:-1]
    return None


def map_primitive(
    scalar_type: str,
    format: str | None = None,
    *,
    items: ItemsNode | None = None,
    has_enum: bool = False,
) -> str:
    """Map a scalar `(type, format)` pair to a concrete type name.

    Arrays delegate to their `items`. Enums are only allowed on strings;
    the enum itself is handled by the caller, here it still maps to text.

    Raises:
        UnsupportedTypeError: the pair has no mapping.
    """
    if scalar_type == "string":
        return BINARY if format == "binary" else TEXT

    if scalar_type == "integer":
        return INTEGER_FORMATS.get(format or "", INT)

    if scalar_type == "boolean":
        return BOOL

    if scalar_type == "number":
        if has_enum:
            raise UnsupportedTypeError("Enums on type 'number' are not supported")
        return FLOAT if format in FLOAT_FORMATS else DOUBLE

    if scalar_type == "array":
        if has_enum:
            raise UnsupportedTypeError("Enums on type 'array' are not supported")
        if items is None:
            raise UnsupportedTypeError("Array without 'items' is not supported")
        return sequence_of(_map_items(items))

    raise UnsupportedTypeError(f"Unsupported type '{scalar_type}' (format: {format})")


def _map_items(items: ItemsNode) -> str:
    if items.type:
        if items.type == "array":
            raise UnsupportedTypeError("Nested arrays are not supported")
        return map_primitive(items.type, items.format)
    if items.ref:
        return ref_name(items.ref)
    raise UnsupportedTypeError("Array 'items' needs a 'type' or a '$ref'")
