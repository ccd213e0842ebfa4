"""Core data models shared across jsxgen components."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

# Node kinds follow the htmlparser2 document model.
ROOT = "root"
TAG = "tag"
SCRIPT = "script"
STYLE = "style"
TEXT = "text"
COMMENT = "comment"
DIRECTIVE = "directive"

ELEMENT_TYPES = (TAG, SCRIPT, STYLE)

AttributeValue = Union[str, bool]


# Nodes use identity equality/hashing (eq=False) so registries can key on the
# node object itself: two identical subtrees at different positions are
# distinct entities.


@dataclass(eq=False)
class Node:
    """Base class for every node of a parsed markup tree."""

    type: str


@dataclass(eq=False)
class Element(Node):
    """Element node (``tag``, ``script`` or ``style``)."""

    name: str = ""
    attribs: Dict[str, AttributeValue] = field(default_factory=dict)
    children: List[Node] = field(default_factory=list)

    def class_tokens(self) -> List[str]:
        value = self.attribs.get("class")
        if not isinstance(value, str):
            return []
        return value.split()


@dataclass(eq=False)
class Text(Node):
    data: str = ""


@dataclass(eq=False)
class Comment(Node):
    data: str = ""


@dataclass(eq=False)
class Directive(Node):
    """Processing instruction or doctype declaration."""

    name: str = ""
    data: str = ""


@dataclass(eq=False)
class Document(Node):
    children: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class RawNode(Node):
    """Node of a kind the converter has no dedicated model for (e.g. ``cdata``)."""

    data: str = ""
    children: List[Node] = field(default_factory=list)


def children_of(node: Node) -> List[Node]:
    return getattr(node, "children", None) or []


def is_svg(node: Node) -> bool:
    return isinstance(node, Element) and node.type == TAG and node.name.lower() == "svg"


# ---------------------------------------------------------------------------
# Props


Path = Tuple[int, ...]


@dataclass
class AttributeProp:
    """An attribute whose value differs between instances."""

    path: Path
    key: str
    values: List[str] = field(default_factory=list)
    kind: str = "attribute"


@dataclass
class TextProp:
    """A non-blank text child; ``path`` ends with the text node's index."""

    path: Path
    values: List[str] = field(default_factory=list)
    kind: str = "textChild"


@dataclass
class IconProp:
    """An inline SVG subtree, compared as one serialized value."""

    path: Path
    values: List[str] = field(default_factory=list)
    kind: str = "svgIcon"


@dataclass
class ChildrenProp:
    """Children are forwarded verbatim from the call site."""

    kind: str = "childrenPassthrough"


Prop = Union[AttributeProp, TextProp, IconProp, ChildrenProp]
PropSpec = Dict[str, Prop]


def has_children_prop(props: PropSpec) -> bool:
    return any(isinstance(prop, ChildrenProp) for prop in props.values())


# ---------------------------------------------------------------------------
# Detection and output


@dataclass
class ComponentCandidate:
    """A layout match or a repetition group awaiting extraction."""

    name: str
    template: Element
    origin: str
    props: PropSpec
    instances: List[Element]


@dataclass
class ComponentDefinition:
    """A newly minted component ready to be written as a module."""

    name: str
    props: List[str]
    body: str
    path: str
    origin: str
    fingerprint: str
    has_children: bool = False


@dataclass
class PageDefinition:
    """The call-site module generated for one input tree."""

    name: str
    body: str
    imports: List[str]


@dataclass
class AssetWrite:
    """An externalised icon, unique by content hash within a batch."""

    digest: str
    filename: str
    content: str


@dataclass
class TreeResult:
    """Everything generated from one input tree."""

    source: str
    components: List[ComponentDefinition] = field(default_factory=list)
    page: Optional[PageDefinition] = None
    assets: List[AssetWrite] = field(default_factory=list)
    skipped: bool = False
    reason: Optional[str] = None
