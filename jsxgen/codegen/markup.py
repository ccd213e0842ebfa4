"""Canonical XML serialization of subtrees, used for inline SVG icons."""

from __future__ import annotations

from html import escape
from typing import List

from ..models import Comment, Directive, Element, Node, RawNode, Text


def normalize_svg_attribs(node: Element) -> None:
    """Restore the ``viewBox`` casing that HTML parsers lowercase, in place."""
    if "viewbox" in node.attribs:
        node.attribs["viewBox"] = node.attribs.pop("viewbox")


def serialize_markup(node: Node) -> str:
    """Serialize ``node`` as XML; equal subtrees produce equal strings."""
    parts: List[str] = []
    _serialize(node, parts)
    return "".join(parts)


def _serialize(node: Node, parts: List[str]) -> None:
    if isinstance(node, Element):
        parts.append(f"<{node.name}")
        for key, value in node.attribs.items():
            if value is False:
                continue
            rendered = "" if value is True else value
            parts.append(f' {key}="{escape(rendered, quote=True)}"')
        if not node.children:
            parts.append("/>")
            return
        parts.append(">")
        for child in node.children:
            _serialize(child, parts)
        parts.append(f"</{node.name}>")
    elif isinstance(node, Text):
        parts.append(escape(node.data, quote=False))
    elif isinstance(node, Comment):
        parts.append(f"<!--{node.data}-->")
    elif isinstance(node, Directive):
        parts.append(f"<{node.data}>")
    elif isinstance(node, RawNode) and node.type == "cdata":
        parts.append("<![CDATA[")
        for child in node.children:
            if isinstance(child, Text):
                parts.append(child.data)
        parts.append("]]>")
    else:
        for child in getattr(node, "children", []):
            _serialize(child, parts)


__all__ = ["normalize_svg_attribs", "serialize_markup"]
