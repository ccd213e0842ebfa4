"""Tests for jsxgen.codegen.naming."""

from __future__ import annotations

import pytest

from jsxgen.codegen.naming import kebab_to_camel_case, to_camel_case, to_pascal_case, unique_name


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("nav-bar", "Navbar"),
        ("main_menu", "Mainmenu"),
        ("About Us", "Aboutus"),
        ("index", "Index"),
        ("", "Unnamed"),
        ("   ", "Unnamed"),
        (None, "Unnamed"),
        ("---", "UnnamedComponent"),
    ],
)
def test_to_pascal_case(value: object, expected: str) -> None:
    assert to_pascal_case(value) == expected


def test_to_camel_case() -> None:
    assert to_camel_case("nav-link text") == "navLinkText"
    assert to_camel_case("H3Text") == "h3Text"
    assert to_camel_case("aText") == "aText"


def test_kebab_to_camel_case_only_touches_lowercase_after_dash() -> None:
    assert kebab_to_camel_case("stroke-width") == "strokeWidth"
    assert kebab_to_camel_case("aria-label") == "ariaLabel"
    assert kebab_to_camel_case("x-1") == "x-1"


def test_unique_name_appends_counter() -> None:
    assert unique_name("title", set()) == "title"
    assert unique_name("title", {"title"}) == "title1"
    assert unique_name("title", {"title", "title1"}) == "title2"
