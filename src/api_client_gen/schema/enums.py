"""Per-case documentation embedded in an enum's description.

The description may start with a shared line terminated by ``|``, followed
by one line per case::

    Status of the order|
    - xxplaced - Order was placed
    - xxshipped - Order left the warehouse

Each case line is a ``-`` bullet, a two-character case marker, the case
literal, then `` - `` and the text.
"""

from typing import NamedTuple

CASE_SEPARATOR = " - "
MARKER_LENGTH = 2


class EnumDescription(NamedTuple):
    shared: str | None
    cases: dict[str, str]


def parse_enum_description(text: str | None) -> EnumDescription:
    if text is None:
        return EnumDescription(None, {})

    lines = text.split("\n")
    shared = None
    if lines and lines[0].endswith("|"):
        shared = lines[0].replace("|", "")
        lines = lines[1:]

    cases = {}
    for line in lines:
        parts = line.split(CASE_SEPARATOR)
        if len(parts) != 2:
            continue
        head, description = parts
        head = head.strip()
        if head.startswith("-"):
            head = head[1:].lstrip()
        cases[head[MARKER_LENGTH:]] = description

    return EnumDescription(shared, cases)
