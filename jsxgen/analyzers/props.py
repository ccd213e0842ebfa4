"""Prop inference by diffing the instances of a repeated pattern."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..codegen.markup import serialize_markup
from ..codegen.naming import kebab_to_camel_case, to_camel_case, unique_name
from ..models import (
    TEXT,
    AttributeProp,
    ChildrenProp,
    Element,
    IconProp,
    Node,
    Path,
    PropSpec,
    Text,
    TextProp,
    is_svg,
)
from ..tree import node_at
from .signature import children_signature

ATTRIBUTE = "attribute"
TEXT_CHILD = "textChild"
ICON = "svgIcon"

# HTML attribute names that differ in JSX.
JSX_ATTRIBUTE_RENAMES = {"class": "className", "for": "htmlFor"}

# Checked in order against the lowercased id and class tokens of a text's
# parent element; ``subtitle`` precedes ``title`` so it can match at all.
_ROLE_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("subtitle", "subtitle"),
    ("title", "title"),
    ("label", "label"),
    ("desc", "description"),
    ("header", "header"),
    ("footer", "footer"),
    ("button", "buttonText"),
    ("caption", "caption"),
    ("item", "itemText"),
)

_NOT_IDENTIFIER = re.compile(r"[^A-Za-z0-9_$]")

# (element path, attribute key or None)
_Location = Tuple[Path, Optional[str]]


@dataclass
class _Observed:
    kind: str
    value: str


@dataclass
class _Difference:
    kind: str
    values: List[str] = field(default_factory=list)

    def add(self, value: str) -> None:
        if value not in self.values:
            self.values.append(value)


def infer_props(template: Element, instances: Sequence[Element]) -> PropSpec:
    """Return the props needed so every instance can be rendered from ``template``.

    Every attribute, non-blank text child and inline SVG of each instance is
    compared against the template at the same path. Each location that
    differs, or exists on one side only, becomes one prop.
    """
    template_values = _collect(template)
    differing: Dict[_Location, _Difference] = {}

    for instance in instances:
        if instance is template:
            continue
        observed = _collect(instance)
        for location, value in observed.items():
            base = template_values.get(location)
            if base is not None and base.kind == value.kind and base.value == value.value:
                continue
            difference = differing.setdefault(location, _Difference(kind=value.kind))
            if base is not None:
                difference.add(base.value)
            difference.add(value.value)
        for location, base in template_values.items():
            if location not in observed:
                differing.setdefault(location, _Difference(kind=base.kind)).add(base.value)

    props: PropSpec = {}
    taken: set[str] = set()
    fallback_counter = 0
    for (path, key), difference in differing.items():
        base_name: Optional[str]
        if difference.kind == ICON:
            base_name = "iconSrc"
        elif difference.kind == ATTRIBUTE and key is not None:
            base_name = _identifier(kebab_to_camel_case(JSX_ATTRIBUTE_RENAMES.get(key, key)))
        else:
            parent = node_at(template, path[:-1])
            base_name = guess_text_role(parent)
            if base_name is None and isinstance(parent, Element):
                base_name = _identifier(to_camel_case(f"{parent.name}Text"))
        if not base_name:
            base_name = f"text{fallback_counter}" if difference.kind == TEXT_CHILD else f"prop{fallback_counter}"
            fallback_counter += 1

        name = unique_name(base_name, taken)
        taken.add(name)
        if difference.kind == ICON:
            props[name] = IconProp(path=path, values=difference.values)
        elif difference.kind == ATTRIBUTE and key is not None:
            props[name] = AttributeProp(path=path, key=key, values=difference.values)
        else:
            props[name] = TextProp(path=path, values=difference.values)

    template_children = children_signature(template)
    diverging = any(children_signature(instance) != template_children for instance in instances)
    if diverging and not any(isinstance(prop, ChildrenProp) for prop in props.values()):
        props[unique_name("children", taken)] = ChildrenProp()
    return props


def guess_text_role(node: Optional[Node]) -> Optional[str]:
    """Guess a prop name for text from its parent's id and class tokens."""
    if not isinstance(node, Element):
        return None
    candidates: List[str] = []
    element_id = node.attribs.get("id")
    if isinstance(element_id, str):
        candidates.append(element_id)
    candidates.extend(node.class_tokens())
    for candidate in candidates:
        if not candidate:
            continue
        lowered = candidate.lower()
        for keyword, role in _ROLE_KEYWORDS:
            if keyword in lowered:
                return role
    return None


def read_prop_value(instance: Element, prop: AttributeProp | TextProp | IconProp) -> Optional[str | bool | Node]:
    """Read the value ``prop`` addresses inside ``instance``.

    Attributes yield their raw value, text yields the trimmed string and icons
    yield the SVG node itself. ``None`` means the path does not exist.
    """
    target = node_at(instance, prop.path)
    if target is None:
        return None
    if isinstance(prop, AttributeProp):
        if not isinstance(target, Element):
            return None
        return target.attribs.get(prop.key)
    if isinstance(prop, TextProp):
        return target.data.strip() if isinstance(target, Text) else None
    return target if is_svg(target) else None


def attribute_text(value: str | bool) -> str:
    """String form of an attribute value, matching JavaScript's ``String()``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _collect(node: Element) -> Dict[_Location, _Observed]:
    found: Dict[_Location, _Observed] = {}
    _walk(node, (), found)
    return found


def _walk(node: Element, path: Path, found: Dict[_Location, _Observed]) -> None:
    if is_svg(node):
        found[(path, None)] = _Observed(ICON, serialize_markup(node))
        return
    for key, value in node.attribs.items():
        found[(path, key)] = _Observed(ATTRIBUTE, attribute_text(value))
    for index, child in enumerate(node.children):
        child_path = path + (index,)
        if child.type == TEXT and isinstance(child, Text):
            stripped = child.data.strip()
            if stripped:
                found[(child_path, None)] = _Observed(TEXT_CHILD, stripped)
        elif isinstance(child, Element) and child.type == "tag":
            _walk(child, child_path, found)


def _identifier(value: str) -> str:
    cleaned = _NOT_IDENTIFIER.sub("", value)
    if cleaned[:1].isdigit():
        return ""
    return cleaned


__all__ = [
    "ATTRIBUTE",
    "ICON",
    "JSX_ATTRIBUTE_RENAMES",
    "TEXT_CHILD",
    "attribute_text",
    "guess_text_role",
    "infer_props",
    "read_prop_value",
]
