"""Tests for jsxgen.stores.registry."""

from __future__ import annotations

import hashlib

from jsxgen.stores import GlobalRegistry, RegisteredComponent, TreeRegistry, component_fingerprint
from jsxgen.tree import element


def test_fingerprint_hashes_body_and_sorted_prop_names() -> None:
    expected = hashlib.md5(b'<div></div>::PROPS::["a","b"]').hexdigest()

    assert component_fingerprint("<div></div>", ["b", "a"]) == expected
    assert component_fingerprint("<div></div>", []) != expected


def test_first_resolution_takes_tentative_name() -> None:
    registry = GlobalRegistry()

    resolution = registry.resolve("f" * 32, "CardItem")

    assert resolution.is_new is True
    assert resolution.name == "CardItem"
    assert resolution.path == "components/CardItem.jsx"
    assert "f" * 32 in registry
    assert registry.lookup("f" * 32).name == "CardItem"


def test_known_fingerprint_is_reused() -> None:
    registry = GlobalRegistry()
    registry.resolve("abc123", "CardItem")

    again = registry.resolve("abc123", "SomethingElse")

    assert again.is_new is False
    assert again.name == "CardItem"
    assert len(registry) == 1


def test_name_collision_appends_hash_prefix() -> None:
    registry = GlobalRegistry()
    registry.resolve("1" * 32, "CardItem")

    other = registry.resolve("0123456789abcdef" * 2, "CardItem")

    assert other.is_new is True
    assert other.name == "CardItem_01234567"
    assert other.path == "components/CardItem_01234567.jsx"
    assert registry.names() == ["CardItem", "CardItem_01234567"]


def test_components_dir_is_configurable() -> None:
    registry = GlobalRegistry(components_dir="widgets/")

    assert registry.resolve("f00", "Button").path == "widgets/Button.jsx"


def test_tree_registry_keys_on_node_identity() -> None:
    registry = TreeRegistry()
    first = element("li")
    twin = element("li")
    entry = RegisteredComponent(name="Item", template=first, props={})

    registry.register(first, entry)

    assert first in registry
    assert twin not in registry
    assert registry.get(first) is entry
    assert registry.get(twin) is None
    assert list(registry) == [first]
    assert len(registry) == 1
