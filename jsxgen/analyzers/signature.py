"""Content-insensitive structural signatures of subtrees."""

from __future__ import annotations

from ..models import COMMENT, DIRECTIVE, TEXT, Element, Node, children_of


def structural_signature(node: Node) -> str:
    """Return the shape key of ``node``.

    Text, comments and directives reduce to their kind, so their content never
    matters. Elements combine the tag name, the sorted attribute names, the
    sorted class tokens and the children's signatures in order. The class
    attribute is the only attribute whose value takes part in the key.
    """
    if node.type in (TEXT, COMMENT, DIRECTIVE):
        return node.type
    if isinstance(node, Element):
        attrs = ",".join(sorted(node.attribs))
        class_value = node.attribs.get("class")
        class_block = ""
        if isinstance(class_value, str) and class_value:
            class_block = "_CLASS_" + "_".join(sorted(class_value.split()))
        return f"{node.name}[{attrs}{class_block}]({children_signature(node)})"
    return f"UNKNOWN_TYPE_{node.type}"


def children_signature(node: Node) -> str:
    """Signatures of ``node``'s children joined in order."""
    return "|".join(structural_signature(child) for child in children_of(node))


__all__ = ["children_signature", "structural_signature"]
