"""HTML attribute to JSX attribute translation."""

from __future__ import annotations

import json
from typing import Dict

from .naming import kebab_to_camel_case

# HTML boolean attributes that render as bare presence when their value is "".
BOOLEAN_ATTRIBUTES = frozenset(
    {
        "autoplay",
        "checked",
        "controls",
        "disabled",
        "hidden",
        "loop",
        "muted",
        "open",
        "readonly",
        "required",
        "selected",
    }
)


def style_to_object(style: str) -> Dict[str, str]:
    """``"font-size: 12px; color:red"`` -> ``{"fontSize": "12px", "color": "red"}``."""
    result: Dict[str, str] = {}
    if not style:
        return result
    for declaration in style.split(";"):
        prop, _, value = declaration.partition(":")
        prop = prop.strip()
        value = value.strip()
        if prop and value:
            result[kebab_to_camel_case(prop)] = value
    return result


def jsx_prop_key(html_key: str) -> str:
    """Camel-cased key with the ``class``/``for`` renames applied."""
    key = kebab_to_camel_case(html_key)
    if key == "class":
        return "className"
    if key == "for":
        return "htmlFor"
    return key


def jsx_attribute_name(html_key: str) -> str:
    """Name to emit in markup; ``data-*`` and ``aria-*`` keep their HTML form."""
    if html_key.startswith(("data-", "aria-")):
        return html_key
    return jsx_prop_key(html_key)


def js_string(value: str) -> str:
    """Double-quoted JavaScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def js_single_quoted(value: str) -> str:
    """Single-quoted JavaScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def js_object(mapping: Dict[str, str]) -> str:
    return json.dumps(mapping, ensure_ascii=False, separators=(",", ":"))


def render_attribute(html_key: str, value: str | bool) -> str:
    """Render one literal attribute, including its leading space.

    Boolean values render as bare presence or are omitted, ``style`` becomes
    an object literal and everything else a string expression.
    """
    name = jsx_attribute_name(html_key)
    if jsx_prop_key(html_key) == "style" and isinstance(value, str):
        return f" style={{{js_object(style_to_object(value))}}}"
    if isinstance(value, bool):
        return f" {name}" if value else ""
    if value == "" and name in BOOLEAN_ATTRIBUTES:
        return f" {name}"
    return f" {name}={{{js_string(value)}}}"


def render_prop_attribute(html_key: str, value: str | bool, prop_name: str) -> str:
    """Render an attribute bound to a prop, with the literal value as default."""
    name = jsx_attribute_name(html_key)
    if jsx_prop_key(html_key) == "style":
        fallback = js_object(style_to_object(value if isinstance(value, str) else ""))
        return f" style={{{prop_name} ?? {fallback}}}"
    literal = "true" if value is True else "false" if value is False else value
    return f" {name}={{{prop_name} ?? {js_string(literal)}}}"


__all__ = [
    "BOOLEAN_ATTRIBUTES",
    "js_object",
    "js_single_quoted",
    "js_string",
    "jsx_attribute_name",
    "jsx_prop_key",
    "render_attribute",
    "render_prop_attribute",
    "style_to_object",
]
