"""Conversion of JSON keys into proto3 field and message identifiers.

All functions here are total (symbol-only or empty input gives ``""``) and
idempotent on their own output.
"""

from __future__ import annotations

import re

import inflect

_inflect = inflect.engine()


def to_snake_case(name: str) -> str:
    """Convert a JSON key to a snake_case proto field name.

    userId -> user_id, HTTPServer -> http_server, 2fa -> _2fa
    """
    name = re.sub(r"[^A-Za-z0-9]", "_", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"([A-Z])([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"_+", "_", name).strip("_").lower()
    if name and name[0].isdigit():
        name = f"_{name}"
    return name


def to_pascal_case(name: str) -> str:
    """Convert a name to PascalCase: user_id -> UserId, order item -> OrderItem."""
    name = re.sub(r"[^A-Za-z0-9_ ]", "", name)
    parts = re.split(r"[_\s]+", name)
    return "".join(p[0].upper() + p[1:] for p in parts if p)


def to_lower_camel(name: str) -> str:
    """Default proto3 JSON name of a field: user_id -> userId."""
    chars = []
    upper_next = False
    for ch in name:
        if ch == "_":
            upper_next = True
        elif upper_next:
            chars.append(ch.upper())
            upper_next = False
        else:
            chars.append(ch)
    return "".join(chars)


def singularize(name: str) -> str:
    """Singularize the last segment of a snake_case name: line_items -> line_item."""
    head, _, last = name.rpartition("_")
    if not last.isalpha():
        return name
    singular = _inflect.singular_noun(last)
    if not singular:
        return name
    return f"{head}_{singular}" if head else singular


def message_name_for(field_name: str, plural: bool = False) -> str:
    """Candidate nested message name for a field.

    Repeated fields name their element message after the singular form of the
    field name (users -> User).
    """
    base = singularize(field_name) if plural else field_name
    name = to_pascal_case(base)
    if not name:
        return "Message"
    if name[0].isdigit():
        return f"Message{name}"
    return name
