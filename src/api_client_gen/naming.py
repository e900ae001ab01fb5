"""Naming helpers shared by the model and endpoint expanders."""

import re


def upper_first(value: str) -> str:
    """Uppercase only the first character, leaving the rest untouched.

    Unlike ``str.capitalize`` this keeps camelCase humps: ``userId`` -> ``UserId``.
    """
    return value[:1].upper() + value[1:]


def enum_name(schema_name: str, property_name: str) -> str:
    """Name of the enum generated for a string property with an `enum`."""
    return upper_first(schema_name) + upper_first(property_name)


def escaped_group_name(path: str) -> str:
    """Turn a raw path into the endpoint group / output file name.

    >>> escaped_group_name("/users/{user_id}/posts")
    'UsersByUserIDPosts'
    """
    tokens = []
    for segment in path.split("/"):
        match = re.fullmatch(r"\{(.*)\}", segment)
        if match:
            words = [upper_first(word) for word in match.group(1).split("_")]
            words = ["ID" if word == "Id" else word for word in words]
            tokens.append("By" + "".join(words))
        else:
            tokens.append(upper_first(segment))
    return "".join(tokens)
