"""Detection and extraction of layout and repeated-structure components."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Set

from ..codegen.naming import to_pascal_case
from ..config import ComponentizationConfig
from ..logging import get_logger
from ..models import (
    TAG,
    ComponentCandidate,
    ComponentDefinition,
    Element,
    Node,
    children_of,
    has_children_prop,
    is_svg,
)
from ..stores.registry import GlobalRegistry, RegisteredComponent, TreeRegistry, component_fingerprint
from ..tree import count_nodes, iter_nodes
from .base import Detector
from .props import infer_props
from .signature import structural_signature

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..codegen.generator import CodeGenerator

LAYOUT = "layout"
REPETITION = "repetition"


class PatternDetector(Detector):
    """Finds component candidates in a tree and extracts them smallest-first."""

    def __init__(self, config: ComponentizationConfig | None = None) -> None:
        self.config = config or ComponentizationConfig()
        self.logger = get_logger("patterns")

    def detect(self, body: Element, registry: TreeRegistry) -> List[ComponentCandidate]:
        """Return layout and repetition candidates sorted by subtree size."""
        candidates = self._layout_candidates(body, registry)
        claimed = {candidate.template for candidate in candidates}
        candidates.extend(self._repetition_candidates(body, registry, claimed))
        # Smallest first, so enclosing candidates render references to nested ones.
        candidates.sort(key=lambda candidate: count_nodes(candidate.template))
        return candidates

    def extract(
        self,
        body: Element,
        registry: TreeRegistry,
        global_registry: GlobalRegistry,
        generator: "CodeGenerator",
    ) -> List[ComponentDefinition]:
        """Register every candidate of ``body``; return the components new to this batch."""
        definitions: List[ComponentDefinition] = []
        for candidate in self.detect(body, registry):
            rendered = generator.render_definition(candidate.template, candidate.props, registry)
            fingerprint = component_fingerprint(rendered, candidate.props.keys())
            resolution = global_registry.resolve(fingerprint, candidate.name)
            if resolution.is_new:
                self.logger.debug(
                    "New %s component %s (%d instance(s))",
                    candidate.origin,
                    resolution.name,
                    len(candidate.instances),
                )
                definitions.append(
                    ComponentDefinition(
                        name=resolution.name,
                        props=list(candidate.props),
                        body=rendered,
                        path=resolution.path,
                        origin=candidate.origin,
                        fingerprint=fingerprint,
                        has_children=has_children_prop(candidate.props),
                    )
                )
            else:
                self.logger.info(
                    "Reusing component: %s (originally from %s)", resolution.name, candidate.name
                )
            entry = RegisteredComponent(
                name=resolution.name, template=candidate.template, props=candidate.props
            )
            for instance in candidate.instances:
                registry.register(instance, entry)
        return definitions

    # ------------------------------------------------------------------
    # Detection passes

    def _layout_candidates(
        self, body: Element, registry: TreeRegistry
    ) -> List[ComponentCandidate]:
        candidates: List[ComponentCandidate] = []
        claimed: Set[Node] = set()
        for identifier in self.config.layout_identifiers:
            for node in iter_nodes(body):
                if not isinstance(node, Element) or not _matches_identifier(node, identifier):
                    continue
                if node in registry or node in claimed:
                    continue
                claimed.add(node)
                candidates.append(
                    ComponentCandidate(
                        name=f"{to_pascal_case(identifier)}Layout",
                        template=node,
                        origin=LAYOUT,
                        props={},
                        instances=[node],
                    )
                )
        return candidates

    def _repetition_candidates(
        self, body: Element, registry: TreeRegistry, claimed: Set[Node]
    ) -> List[ComponentCandidate]:
        groups: Dict[str, List[Element]] = {}
        self._group_by_signature(body, registry, claimed, groups)
        qualifying = [
            instances
            for instances in groups.values()
            if len(instances) >= self.config.min_repetitions_for_component
        ]
        if self.config.collapse_nested_repetitions:
            qualifying = self._fold_nested_groups(body, qualifying)

        candidates: List[ComponentCandidate] = []
        for instances in qualifying:
            template = instances[0]
            candidates.append(
                ComponentCandidate(
                    name=f"{repetition_base_name(template)}Item",
                    template=template,
                    origin=REPETITION,
                    props=infer_props(template, instances),
                    instances=list(instances),
                )
            )
        return candidates

    def _group_by_signature(
        self,
        node: Node,
        registry: TreeRegistry,
        claimed: Set[Node],
        groups: Dict[str, List[Element]],
    ) -> None:
        if isinstance(node, Element) and self._is_eligible(node, registry):
            if node in claimed:
                self.logger.debug("Skipping layout element <%s> in repetition pass", node.name)
            else:
                groups.setdefault(structural_signature(node), []).append(node)
        for child in getattr(node, "children", []):
            # Icons are opaque leaves for pattern purposes.
            if is_svg(child):
                continue
            self._group_by_signature(child, registry, claimed, groups)

    def _fold_nested_groups(
        self, body: Element, groups: List[List[Element]]
    ) -> List[List[Element]]:
        """Drop groups that only repeat because an enclosing group repeats.

        A group is folded when each of its instances lies inside a different
        instance of some other group; the enclosing component then carries
        the nested values as its own props.
        """
        owner: Dict[Node, int] = {}
        for index, instances in enumerate(groups):
            for instance in instances:
                owner[instance] = index
        parents: Dict[Node, Node] = {
            child: parent for parent in iter_nodes(body) for child in children_of(parent)
        }

        kept: List[List[Element]] = []
        for index, instances in enumerate(groups):
            enclosing: List[Node] = []
            for instance in instances:
                ancestor = parents.get(instance)
                while ancestor is not None and owner.get(ancestor, index) == index:
                    ancestor = parents.get(ancestor)
                if ancestor is None:
                    break
                enclosing.append(ancestor)
            folded = len(enclosing) == len(instances) and len(set(enclosing)) == len(enclosing)
            if folded:
                self.logger.debug(
                    "Folding %d <%s> instance(s) into their enclosing components",
                    len(instances),
                    instances[0].name,
                )
            else:
                kept.append(instances)
        return kept

    def _is_eligible(self, node: Element, registry: TreeRegistry) -> bool:
        if node.type != TAG or is_svg(node):
            return False
        # Only effective when the registry already holds nodes of this tree.
        if node in registry:
            return False
        return len(node.children) >= self.config.min_children_for_repetition


def repetition_base_name(node: Element) -> str:
    """Name stem from the first class token, then the id, then the tag."""
    base = ""
    classes = node.class_tokens()
    element_id = node.attribs.get("id")
    if classes:
        base = to_pascal_case(classes[0])
    elif isinstance(element_id, str) and element_id:
        base = to_pascal_case(element_id)
    if len(base) <= 1:
        base = f"{to_pascal_case(node.name)}Element"
    return base


def _matches_identifier(node: Element, identifier: str) -> bool:
    if node.type != TAG:
        return False
    return identifier in node.class_tokens() or node.attribs.get("id") == identifier


__all__ = ["LAYOUT", "REPETITION", "PatternDetector", "repetition_base_name"]
