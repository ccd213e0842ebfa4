"""Recursive tree-to-JSX emitter."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

from ..analyzers.props import attribute_text, read_prop_value
from ..logging import get_logger
from ..models import (
    COMMENT,
    DIRECTIVE,
    SCRIPT,
    STYLE,
    TAG,
    TEXT,
    AttributeProp,
    ChildrenProp,
    Comment,
    Element,
    IconProp,
    Node,
    Path,
    PropSpec,
    Text,
    TextProp,
    is_svg,
)
from ..stores.assets import AssetStore
from ..stores.registry import RegisteredComponent, TreeRegistry
from .attributes import (
    js_object,
    js_single_quoted,
    js_string,
    jsx_prop_key,
    render_attribute,
    render_prop_attribute,
    style_to_object,
)
from .markup import normalize_svg_attribs, serialize_markup
from .naming import kebab_to_camel_case

_JSX_TEXT_SPECIALS = re.compile(r"[{}<>]")


@dataclass(frozen=True)
class RenderContext:
    """State threaded through one recursive render.

    ``defining`` is true while emitting the body of a component definition,
    in which case ``props`` maps its prop names, ``path`` the child indices from
    the template root and ``template`` the root itself.
    """

    registry: TreeRegistry
    defining: bool = False
    props: PropSpec = field(default_factory=dict)
    path: Path = ()
    template: Optional[Element] = None

    def descend(self, index: int) -> "RenderContext":
        return replace(self, path=self.path + (index,))

    def children_prop(self) -> Optional[str]:
        if not self.defining:
            return None
        for name, prop in self.props.items():
            if isinstance(prop, ChildrenProp):
                return name
        return None


class CodeGenerator:
    """Renders nodes to JSX, substituting components, props and icons."""

    def __init__(self, assets: AssetStore, self_closing_tags: Iterable[str] = ()) -> None:
        self.assets = assets
        self.self_closing_tags = frozenset(tag.lower() for tag in self_closing_tags)
        self.logger = get_logger("codegen")

    def render_definition(
        self, template: Element, props: PropSpec, registry: TreeRegistry
    ) -> str:
        """Body of the component whose representative instance is ``template``."""
        context = RenderContext(registry=registry, defining=True, props=props, template=template)
        return self.render(template, context)

    def render_page(self, body: Element, registry: TreeRegistry) -> str:
        """Call-site body for the children of ``body``."""
        context = RenderContext(registry=registry)
        return "".join(self.render(child, context) for child in body.children)

    def render(self, node: Node, context: RenderContext) -> str:
        entry = context.registry.get(node)
        if entry is not None and node is not context.template:
            return self._render_reference(node, entry, context)

        if node.type == TEXT and isinstance(node, Text):
            return self._render_text(node, context)
        if node.type == COMMENT and isinstance(node, Comment):
            return "{/*" + node.data.replace("*/", "*\\/") + "*/}"
        if node.type in (DIRECTIVE, SCRIPT, STYLE):
            return ""
        if node.type == TAG and isinstance(node, Element):
            return self._render_element(node, context)

        self.logger.warning(
            "Unhandled node type %s at path %s",
            node.type,
            ".".join(str(index) for index in context.path) or "<root>",
        )
        return ""

    # ------------------------------------------------------------------
    # Call sites

    def _render_reference(
        self, node: Node, entry: RegisteredComponent, context: RenderContext
    ) -> str:
        attributes: List[str] = []
        forwards_children = False
        for prop_name, prop in entry.props.items():
            if isinstance(prop, ChildrenProp):
                forwards_children = True
                continue
            value = self._call_site_value(node, prop)
            binding = _enclosing_binding(prop, context)
            if binding is not None:
                attributes.append(_bound_call_site_attribute(prop_name, prop, binding, value))
                continue
            if value is None:
                continue
            attributes.append(_call_site_attribute(prop_name, prop, value))

        children = ""
        if forwards_children:
            kids = getattr(node, "children", [])
            if context.defining:
                # Forwarded markup still sits inside the enclosing template.
                children = "".join(
                    self.render(child, context.descend(index)) for index, child in enumerate(kids)
                )
            else:
                nested = RenderContext(registry=context.registry, template=context.template)
                children = "".join(self.render(child, nested) for child in kids)

        rendered_attributes = "".join(attributes)
        if children.strip():
            return f"<{entry.name}{rendered_attributes}>{children}</{entry.name}>"
        return f"<{entry.name}{rendered_attributes} />"

    def _call_site_value(
        self, node: Node, prop: AttributeProp | TextProp | IconProp
    ) -> Optional[str | bool]:
        if not isinstance(node, Element):
            return None
        value = read_prop_value(node, prop)
        if isinstance(prop, IconProp):
            if not isinstance(value, Element):
                return ""
            normalize_svg_attribs(value)
            return self.assets.add(serialize_markup(value))
        if isinstance(prop, TextProp):
            return value if isinstance(value, str) else ""
        if isinstance(value, (str, bool)):
            return value
        return None

    # ------------------------------------------------------------------
    # Plain nodes

    def _render_text(self, node: Text, context: RenderContext) -> str:
        if context.defining:
            for prop_name, prop in context.props.items():
                if isinstance(prop, TextProp) and prop.path == context.path:
                    return f"{{{prop_name} ?? {js_single_quoted(node.data.strip())}}}"
        if not node.data.strip():
            return "" if context.defining else node.data
        return escape_jsx_text(node.data)

    def _render_element(self, node: Element, context: RenderContext) -> str:
        if is_svg(node):
            normalize_svg_attribs(node)
            if context.defining:
                for prop_name, prop in context.props.items():
                    if isinstance(prop, IconProp) and prop.path == context.path:
                        return f'<img src={{{prop_name}}} alt="{_alt_text(node)}" />'
            source = self.assets.add(serialize_markup(node))
            return f'<img src="{source}" alt="{_alt_text(node)}" />'

        tag = node.name.lower()
        attributes: List[str] = []
        for key, value in node.attribs.items():
            prop_name = self._attribute_prop(key, context)
            if prop_name is not None:
                attributes.append(render_prop_attribute(key, value, prop_name))
            else:
                attributes.append(render_attribute(key, value))
        rendered_attributes = "".join(attributes)

        if tag in self.self_closing_tags:
            return f"<{tag}{rendered_attributes} />"

        children_prop = context.children_prop()
        if children_prop is not None:
            content = f"{{{children_prop}}}"
        else:
            content = "".join(
                self.render(child, context.descend(index))
                for index, child in enumerate(node.children)
            )
        return f"<{tag}{rendered_attributes}>{content}</{tag}>"

    @staticmethod
    def _attribute_prop(key: str, context: RenderContext) -> Optional[str]:
        if not context.defining:
            return None
        for prop_name, prop in context.props.items():
            if isinstance(prop, AttributeProp) and prop.key == key and prop.path == context.path:
                return prop_name
        return None


def escape_jsx_text(value: str) -> str:
    """Wrap characters JSX treats as syntax in string expressions."""
    return _JSX_TEXT_SPECIALS.sub(lambda match: "{" + js_string(match.group(0)) + "}", value)


def _alt_text(svg: Element) -> str:
    alt = "icon"
    for child in svg.children:
        if isinstance(child, Element) and child.name.lower() == "title":
            first = child.children[0] if child.children else None
            if isinstance(first, Text) and first.data.strip():
                alt = first.data.strip()
            break
    return alt.replace("&", "&amp;").replace('"', "&quot;")


def _enclosing_binding(
    prop: AttributeProp | TextProp | IconProp, context: RenderContext
) -> Optional[str]:
    """Name of the enclosing definition's prop addressing the same location, if any."""
    if not context.defining:
        return None
    location = context.path + prop.path
    for name, outer in context.props.items():
        if type(outer) is not type(prop) or outer.path != location:
            continue
        if isinstance(prop, AttributeProp) and isinstance(outer, AttributeProp) and outer.key != prop.key:
            continue
        return name
    return None


def _is_style(prop: AttributeProp | TextProp | IconProp) -> bool:
    return isinstance(prop, AttributeProp) and jsx_prop_key(prop.key) == "style"


def _literal(prop: AttributeProp | TextProp | IconProp, value: str | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_style(prop):
        return js_object(style_to_object(value))
    return js_string(attribute_text(value))


def _call_site_attribute(
    prop_name: str, prop: AttributeProp | TextProp | IconProp, value: str | bool
) -> str:
    key = kebab_to_camel_case(prop_name)
    if isinstance(value, bool):
        return f" {key}" if value else f" {key}={{false}}"
    return f" {key}={{{_literal(prop, value)}}}"


def _bound_call_site_attribute(
    prop_name: str,
    prop: AttributeProp | TextProp | IconProp,
    binding: str,
    value: Optional[str | bool],
) -> str:
    key = kebab_to_camel_case(prop_name)
    if value is None:
        return f" {key}={{{binding}}}"
    return f" {key}={{{binding} ?? {_literal(prop, value)}}}"


__all__ = ["CodeGenerator", "RenderContext", "escape_jsx_text"]
