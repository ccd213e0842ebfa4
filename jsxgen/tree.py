"""Conversion between htmlparser2-style JSON trees and node models."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from .errors import TreeError
from .models import (
    COMMENT,
    DIRECTIVE,
    ELEMENT_TYPES,
    ROOT,
    TAG,
    TEXT,
    AttributeValue,
    Comment,
    Directive,
    Document,
    Element,
    Node,
    RawNode,
    Text,
    children_of,
)


def element(
    name: str,
    attribs: Mapping[str, AttributeValue] | None = None,
    children: Sequence[Node] | None = None,
    *,
    type: str = TAG,
) -> Element:
    """Shorthand constructor for element nodes."""
    return Element(type=type, name=name, attribs=dict(attribs or {}), children=list(children or []))


def text(data: str) -> Text:
    return Text(type=TEXT, data=data)


def comment(data: str) -> Comment:
    return Comment(type=COMMENT, data=data)


def document(children: Sequence[Node]) -> Document:
    return Document(type=ROOT, children=list(children))


def load_tree(data: Any) -> Node:
    """Build a node tree from the JSON produced by ``jsxgen parse`` or htmlparser2."""
    if isinstance(data, list):
        return document([load_tree(item) for item in data])
    if not isinstance(data, dict):
        raise TreeError(f"Expected a mapping for a tree node, got {type(data).__name__}")

    node_type = data.get("type")
    if not isinstance(node_type, str):
        raise TreeError("Tree node is missing its 'type'")

    raw_children = data.get("children") or []
    if not isinstance(raw_children, list):
        raise TreeError(f"'children' of a {node_type} node must be a list")

    if node_type in ELEMENT_TYPES:
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise TreeError(f"{node_type} node is missing its 'name'")
        return Element(
            type=node_type,
            name=name,
            attribs=_load_attribs(data.get("attribs")),
            children=[load_tree(child) for child in raw_children],
        )
    if node_type == TEXT:
        return Text(type=TEXT, data=_as_text(data.get("data")))
    if node_type == COMMENT:
        return Comment(type=COMMENT, data=_as_text(data.get("data")))
    if node_type == DIRECTIVE:
        return Directive(
            type=DIRECTIVE,
            name=_as_text(data.get("name")),
            data=_as_text(data.get("data")),
        )
    if node_type == ROOT:
        return Document(type=ROOT, children=[load_tree(child) for child in raw_children])
    return RawNode(
        type=node_type,
        data=_as_text(data.get("data")),
        children=[load_tree(child) for child in raw_children],
    )


def dump_tree(node: Node) -> Dict[str, Any]:
    """Inverse of :func:`load_tree`."""
    if isinstance(node, Element):
        return {
            "type": node.type,
            "name": node.name,
            "attribs": dict(node.attribs),
            "children": [dump_tree(child) for child in node.children],
        }
    if isinstance(node, (Text, Comment)):
        return {"type": node.type, "data": node.data}
    if isinstance(node, Directive):
        return {"type": node.type, "name": node.name, "data": node.data}
    payload: Dict[str, Any] = {"type": node.type}
    if isinstance(node, RawNode) and node.data:
        payload["data"] = node.data
    payload["children"] = [dump_tree(child) for child in children_of(node)]
    return payload


def read_tree(path: Path) -> Node:
    """Load a tree from a JSON file, raising :class:`TreeError` on bad input."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise TreeError(f"Cannot read {path.name}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TreeError(f"{path.name} is not valid JSON: {exc}") from exc
    return load_tree(payload)


def find_body(root: Node) -> Optional[Element]:
    """Return the ``<body>`` under ``<html>`` at the top of the document."""
    html = _find_child_tag(root, "html")
    if html is None:
        return None
    return _find_child_tag(html, "body")


def iter_nodes(root: Node) -> Iterator[Node]:
    """Depth-first, pre-order traversal."""
    yield root
    for child in children_of(root):
        yield from iter_nodes(child)


def find_nodes(root: Node, predicate: Callable[[Node], bool]) -> List[Node]:
    return [node for node in iter_nodes(root) if predicate(node)]


def count_nodes(node: Node) -> int:
    return 1 + sum(count_nodes(child) for child in children_of(node))


def node_at(root: Node, path: Sequence[int]) -> Optional[Node]:
    """Follow child indices from ``root``; ``None`` when the path leaves the tree."""
    current: Optional[Node] = root
    for index in path:
        if current is None:
            return None
        children = children_of(current)
        if index < 0 or index >= len(children):
            return None
        current = children[index]
    return current


def _find_child_tag(node: Node, name: str) -> Optional[Element]:
    for child in children_of(node):
        if isinstance(child, Element) and child.type == TAG and child.name.lower() == name:
            return child
    return None


def _load_attribs(raw: Any) -> Dict[str, AttributeValue]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise TreeError("'attribs' must be a mapping")
    attribs: Dict[str, AttributeValue] = {}
    for key, value in raw.items():
        if isinstance(value, bool):
            attribs[str(key)] = value
        elif value is None:
            attribs[str(key)] = ""
        else:
            attribs[str(key)] = str(value)
    return attribs


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


__all__ = [
    "comment",
    "count_nodes",
    "document",
    "dump_tree",
    "element",
    "find_body",
    "find_nodes",
    "iter_nodes",
    "load_tree",
    "node_at",
    "read_tree",
    "text",
]
