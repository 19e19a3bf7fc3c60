"""
Parser for the ``Type::Member`` static member accessor syntax.

A setting value such as ``"myapp.themes.Themes::Dark"`` refers to a class
property or class attribute instead of describing a value literally. The type
name may carry trailing qualifiers after the member name, which belong to the
type name::

    "myapp.themes.Themes::Dark, myapp.themes"
        -> type_name="myapp.themes.Themes, myapp.themes", member_name="Dark"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

# Matches "The.Module.TypeName::MemberName" optionally followed by
# qualifiers like ", the.module, Version=1.0". Only one "::" is allowed.
STATIC_MEMBER_ACCESSOR_RE = re.compile(
    r"^(?P<type_name>[^:]+)::(?P<member_name>[A-Za-z][A-Za-z0-9]*)(?P<extra>[^:]*)$"
)


@dataclass(frozen=True)
class StaticMemberAccessor:
    """A parsed ``Type::Member`` reference."""

    type_name: str
    member_name: str


def parse_static_member_accessor(text: Optional[str]) -> Optional[StaticMemberAccessor]:
    """
    Parse a static member accessor expression.

    Args:
        text: Raw setting value, may be None.

    Returns:
        StaticMemberAccessor when the text matches the accessor grammar,
        otherwise None.
    """
    if text is None:
        return None

    match = STATIC_MEMBER_ACCESSOR_RE.match(text)
    if match is None:
        return None

    return StaticMemberAccessor(
        type_name=match.group("type_name").strip() + match.group("extra").rstrip(),
        member_name=match.group("member_name").strip(),
    )
