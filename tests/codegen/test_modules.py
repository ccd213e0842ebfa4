"""Tests for jsxgen.codegen.modules."""

from __future__ import annotations

from jsxgen.codegen.modules import (
    component_module,
    page_module,
    referenced_components,
    relative_import_path,
)
from jsxgen.models import ComponentDefinition, PageDefinition


def _definition(name: str, body: str, props: list[str]) -> ComponentDefinition:
    return ComponentDefinition(
        name=name,
        props=props,
        body=body,
        path=f"components/{name}.jsx",
        origin="repetition",
        fingerprint="0" * 32,
    )


def test_referenced_components_in_first_use_order() -> None:
    body = "<div><Footer /><NavItem a={1} /><Footer /><span>Text</span><NavItem_ab12cd34 /></div>"

    assert referenced_components(body) == ["Footer", "NavItem", "NavItem_ab12cd34"]
    assert referenced_components(body, exclude="Footer") == ["NavItem", "NavItem_ab12cd34"]


def test_component_module_layout() -> None:
    definition = _definition("CardItem", "<div>{title ?? 'A'}</div>", ["title", "children"])

    assert component_module(definition) == (
        "import React from 'react';\n"
        "\n"
        "const CardItem = ({ title, children }) => {\n"
        "  return (\n"
        "    <div>{title ?? 'A'}</div>\n"
        "  );\n"
        "};\n"
        "\n"
        "export default CardItem;\n"
    )


def test_component_module_imports_nested_components() -> None:
    definition = _definition("NavbarLayout", "<nav><LinkItem /><LinkItem /></nav>", [])

    source = component_module(definition)

    assert "import LinkItem from './LinkItem';\n" in source
    assert source.count("import LinkItem") == 1
    assert "const NavbarLayout = ({}) => {" in source


def test_page_module_wraps_body_in_fragment() -> None:
    page = PageDefinition(name="Index", body="<CardItem />", imports=["CardItem"])

    assert page_module(page, "../components") == (
        "import React from 'react';\n"
        "import CardItem from '../components/CardItem';\n"
        "\n"
        "const Index = () => {\n"
        "  return (\n"
        "    <>\n"
        "      <CardItem />\n"
        "    </>\n"
        "  );\n"
        "};\n"
        "\n"
        "export default Index;\n"
    )


def test_relative_import_path() -> None:
    assert relative_import_path("pages", "components") == "../components"
    assert relative_import_path("src/pages", "src/pages/parts") == "./parts"
    assert relative_import_path("/out/src/pages", "/out/lib/components") == "../../lib/components"
