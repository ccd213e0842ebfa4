"""Component registries: per-tree claims and batch-wide deduplication."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from ..models import Element, Node, PropSpec

_HASH_PREFIX_LENGTH = 8


def component_fingerprint(body: str, prop_names: Iterable[str]) -> str:
    """Content hash identifying a component by its body and prop names."""
    names = json.dumps(sorted(prop_names), separators=(",", ":"))
    payload = f"{body}::PROPS::{names}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class ComponentRecord:
    name: str
    path: str


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a fingerprint against the registry."""

    name: str
    path: str
    is_new: bool


class GlobalRegistry:
    """Deduplicates components across every tree of a batch.

    Names are a pure function of content: the first fingerprint to ask for a
    name gets it, and any other fingerprint asking for the same name receives
    the name suffixed with the first characters of its own hash.
    """

    def __init__(self, components_dir: str = "components", extension: str = ".jsx") -> None:
        self._components_dir = components_dir.rstrip("/")
        self._extension = extension
        self._by_fingerprint: Dict[str, ComponentRecord] = {}
        self._name_owner: Dict[str, str] = {}

    def resolve(self, fingerprint: str, tentative_name: str) -> Resolution:
        existing = self._by_fingerprint.get(fingerprint)
        if existing is not None:
            return Resolution(name=existing.name, path=existing.path, is_new=False)

        owner = self._name_owner.get(tentative_name)
        if owner is None or owner == fingerprint:
            name = tentative_name
        else:
            name = f"{tentative_name}_{fingerprint[:_HASH_PREFIX_LENGTH]}"
        self._name_owner.setdefault(name, fingerprint)

        filename = f"{name}{self._extension}"
        path = f"{self._components_dir}/{filename}" if self._components_dir else filename
        self._by_fingerprint[fingerprint] = ComponentRecord(name=name, path=path)
        return Resolution(name=name, path=path, is_new=True)

    def lookup(self, fingerprint: str) -> Optional[ComponentRecord]:
        return self._by_fingerprint.get(fingerprint)

    def names(self) -> List[str]:
        return [record.name for record in self._by_fingerprint.values()]

    def __len__(self) -> int:
        return len(self._by_fingerprint)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._by_fingerprint


@dataclass(frozen=True)
class RegisteredComponent:
    name: str
    template: Element
    props: PropSpec


class TreeRegistry:
    """Maps nodes of one tree to the component that replaces them.

    Keys are node identities; a registered node is always rendered as a
    component reference, never inlined.
    """

    def __init__(self) -> None:
        self._entries: Dict[Node, RegisteredComponent] = {}

    def register(self, node: Node, entry: RegisteredComponent) -> None:
        self._entries[node] = entry

    def get(self, node: Node) -> Optional[RegisteredComponent]:
        return self._entries.get(node)

    def __contains__(self, node: object) -> bool:
        return node in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._entries)


__all__ = [
    "ComponentRecord",
    "GlobalRegistry",
    "RegisteredComponent",
    "Resolution",
    "TreeRegistry",
    "component_fingerprint",
]
