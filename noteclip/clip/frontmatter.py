"""Frontmatter generation for clipped notes.

Properties are written as ``name:: value`` lines, one per property, in
the order given.  How the value is written depends on the type declared
for that property name in the settings (``text`` when undeclared).
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from noteclip.config.settings import Settings

FRONTMATTER_START = "\u200b\n"
FRONTMATTER_END = "Highlights:\n"
# What a property-less block looks like; callers get "" instead.
EMPTY_FRONTMATTER = FRONTMATTER_START + FRONTMATTER_END

# A comma followed by "]]" before any "[" sits inside a [[link, text]].
_LIST_SEPARATOR = re.compile(r",(?![^\[]*\]\])")
_NON_NUMERIC = re.compile(r"[^\d.\-]")
_LEADING_FLOAT = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_EXPONENT_PADDING = re.compile(r"e([+-])0+(?=\d)")


@dataclass
class Property:
    name: str
    value: str
    type: str = "text"


def escape_double_quotes(value: str) -> str:
    return value.replace('"', '""')


# ── Value parsers ───────────────────────────────────────────────────


def parse_tags(value: str) -> list[str]:
    """Whitespace-separated tags with commas stripped out."""
    tags = (token.replace(",", "").strip() for token in value.split())
    return [tag for tag in tags if tag]


def _decode_json_list(value: str) -> Optional[list[str]]:
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError:
        return None
    if not isinstance(decoded, list):
        return None
    return [item if isinstance(item, str) else json.dumps(item) for item in decoded]


def parse_list(value: str) -> list[str]:
    """Items of a multi-value property.

    A JSON array of strings is decoded as such; anything else, including
    malformed JSON, is split on commas outside of ``[[links]]``.
    """
    trimmed = value.strip()
    items = None
    if trimmed.startswith('["') and trimmed.endswith('"]'):
        items = _decode_json_list(trimmed)
    if items is None:
        items = _LIST_SEPARATOR.split(value)
    return [item.strip() for item in items if item.strip()]


def parse_number(value: str) -> Optional[float]:
    """Leading number of *value* after dropping non-numeric characters.

    Returns None when nothing numeric is left and NaN when what is left
    does not start with a number (e.g. a lone ``-``).
    """
    cleaned = _NON_NUMERIC.sub("", value)
    if not cleaned:
        return None
    match = _LEADING_FLOAT.match(cleaned)
    if match is None:
        return math.nan
    return float(match.group())


def format_number(number: float) -> str:
    """Shortest decimal form, as JavaScript's ``String(number)`` writes it.

    Integers get no trailing ``.0``; exponent notation is only used below
    1e-6 or from 1e21 up, with an unpadded exponent (``1e-7``).
    """
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    text = repr(number)
    if "e" in text and abs(number) >= 1e-6:
        return format(Decimal(text), "f")
    return _EXPONENT_PADDING.sub(r"e\1", text)


def parse_checkbox(value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    return value.lower() == "true" or value == "1"


# ── Encoding ────────────────────────────────────────────────────────


def encode_value(name: str, value: str, property_type: str) -> str:
    """The part of a property line after ``name::``, newline included."""
    if property_type == "multitext":
        if name == "tags":
            tags = parse_tags(value)
            return f" {','.join(tags)}\n" if tags else "\n"
        items = parse_list(value)
        return "".join(f" {escape_double_quotes(item)}" for item in items) + "\n"

    if property_type == "number":
        number = parse_number(value)
        return f" {format_number(number)}\n" if number is not None else "\n"

    if property_type == "checkbox":
        return f" {'true' if parse_checkbox(value) else 'false'}\n"

    if property_type in ("date", "datetime"):
        return f" {value}\n" if value.strip() else "\n"

    if value.strip():
        return f' "{escape_double_quotes(value)}"\n'
    return "\n"


def serialize(
    properties: Iterable[Property],
    property_types: Optional[Mapping[str, str]] = None,
) -> str:
    """Render *properties* as a frontmatter block.

    Returns an empty string when there is nothing to write.
    """
    property_types = property_types or {}
    frontmatter = FRONTMATTER_START
    for prop in properties:
        property_type = property_types.get(prop.name, "text")
        frontmatter += f"{prop.name}::" + encode_value(prop.name, prop.value, property_type)
    frontmatter += FRONTMATTER_END

    if frontmatter == EMPTY_FRONTMATTER:
        return ""
    return frontmatter


def generate_frontmatter(properties: Iterable[Property], settings: Settings) -> str:
    """:func:`serialize` using the property types declared in *settings*."""
    return serialize(properties, settings.property_types)
