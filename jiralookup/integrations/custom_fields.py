"""Coercion of Jira custom field values into display strings.

Custom fields come back from the REST API as loosely typed JSON: plain
strings, numbers, option objects ({"value": ...}), user or team objects
({"name": ...}), or arrays of either. Each interpretation below is tried
in order and the first one that yields a non-empty string wins.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

LIST_SEPARATOR = ", "


def _format_number(value: int | float) -> str:
    """Format a number without a decimal point when it is integral."""
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    # repr() gives the shortest round-tripping digits; Decimal removes exponent notation
    return format(Decimal(repr(value)), "f")


def _as_string(raw: Any) -> str | None:
    if isinstance(raw, str):
        return raw
    return None


def _as_number(raw: Any) -> str | None:
    # bool is an int subclass but is not a JSON number
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        return None
    if isinstance(raw, float) and raw != raw:  # NaN
        return None
    return _format_number(raw)


def _option_label(raw: Any) -> str | None:
    """Return the "value" (preferred) or "name" string of an option object."""
    if not isinstance(raw, Mapping):
        return None
    for key in ("value", "name"):
        label = raw.get(key)
        if isinstance(label, str) and label:
            return label
    return None


def _as_option_list(raw: Any) -> str | None:
    if not isinstance(raw, list) or not raw:
        return None
    if not all(item is None or isinstance(item, Mapping) for item in raw):
        return None
    labels = [label for label in map(_option_label, raw) if label]
    return LIST_SEPARATOR.join(labels) if labels else None


def _as_string_list(raw: Any) -> str | None:
    if not isinstance(raw, list) or not raw:
        return None
    if not all(item is None or isinstance(item, str) for item in raw):
        return None
    return LIST_SEPARATOR.join(item or "" for item in raw)


# Interpretations in priority order
_DECODERS: tuple[Callable[[Any], str | None], ...] = (
    _as_string,
    _as_number,
    _option_label,
    _as_option_list,
    _as_string_list,
)


def extract_custom_field_value(raw: Any) -> str:
    """Convert a raw custom field value into a display string.

    Args:
        raw: Decoded JSON value of the field

    Returns:
        Display string, or "" when no interpretation applies
    """
    if raw is None:
        return ""
    for decode in _DECODERS:
        value = decode(raw)
        if value:
            return value
    return ""


def extract_custom_fields(
    fields: Mapping[str, Any],
    field_mapping: Mapping[str, str],
) -> dict[str, str]:
    """Extract configured custom fields from an issue's "fields" object.

    Fields that are missing, null, or coerce to an empty string are
    omitted from the result rather than set to "".

    Args:
        fields: The "fields" object of a Jira issue response
        field_mapping: Friendly name -> Jira field ID (e.g., "customfield_10016")

    Returns:
        Friendly name -> display value
    """
    result: dict[str, str] = {}
    for friendly_name, field_id in field_mapping.items():
        value = extract_custom_field_value(fields.get(field_id))
        if value:
            result[friendly_name] = value
    return result


__all__ = [
    "LIST_SEPARATOR",
    "extract_custom_field_value",
    "extract_custom_fields",
]
