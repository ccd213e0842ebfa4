"""Tests for jsxgen.orchestrator."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from jsxgen.analyzers import LAYOUT, REPETITION
from jsxgen.config import JsxGenConfig
from jsxgen.models import Element
from jsxgen.orchestrator import Converter
from jsxgen.postproc import FormatRequest, SourceFormatter
from jsxgen.tree import element, text

from tests._fixtures.jsx import expand, references_prop, rendered_values, tree_values
from tests._fixtures.trees import card, html_document, icon, nav_list, write_ast


def _menu_page():
    return html_document(nav_list([("/", "Home"), ("/about", "About")]))


def test_repeated_list_items_become_one_component(config: JsxGenConfig) -> None:
    result = Converter(config).convert_tree(_menu_page(), "index")

    assert [c.name for c in result.components] == ["LiElementItem"]
    component = result.components[0]
    assert component.origin == REPETITION
    assert component.props == ["href", "aText"]
    assert component.body == "<li><a href={href ?? \"/\"}>{aText ?? 'Home'}</a></li>"
    assert result.page is not None
    assert result.page.name == "Index"
    assert result.page.imports == ["LiElementItem"]
    assert '<LiElementItem href={"/"} aText={"Home"} />' in result.page.body
    assert '<LiElementItem href={"/about"} aText={"About"} />' in result.page.body
    assert result.page.body.startswith('<ul className={"menu"}>')


def test_layout_region_becomes_layout_component(config: JsxGenConfig) -> None:
    navbar = element("div", {"class": "navbar"}, [element("a", {"href": "/"}, [text("Brand")])])
    tree = html_document(navbar, element("main", children=[text("Welcome")]))

    result = Converter(config).convert_tree(tree, "index")

    assert [(c.name, c.origin) for c in result.components] == [("NavbarLayout", LAYOUT)]
    assert result.components[0].props == []
    assert result.components[0].body == '<div className={"navbar"}><a href={"/"}>Brand</a></div>'
    assert result.page.body == "<NavbarLayout /><main>Welcome</main>"


def test_identical_trees_share_components(
    config: JsxGenConfig, caplog: pytest.LogCaptureFixture
) -> None:
    converter = Converter(config)

    with caplog.at_level(logging.INFO, logger="jsxgen"):
        results = converter.convert_trees([("index", _menu_page()), ("about", _menu_page())])

    assert [r.source for r in results] == ["about", "index"]
    assert [c.name for c in results[0].components] == ["LiElementItem"]
    assert results[1].components == []
    assert results[1].page.imports == ["LiElementItem"]
    assert len(converter.global_registry) == 1
    assert "Reusing component: LiElementItem" in caplog.text


def test_name_collisions_are_disambiguated_by_hash(config: JsxGenConfig) -> None:
    wide = [card(title, "more", element("span", children=[text(title)])) for title in ("C", "D")]
    tree = html_document(card("A", "x"), card("B", "y"), *wide)

    result = Converter(config).convert_tree(tree, "index")

    plain, extended = result.components
    assert plain.name == "CardItem"
    assert extended.name == f"CardItem_{extended.fingerprint[:8]}"
    assert extended.path == f"components/{extended.name}.jsx"
    assert result.page.imports == ["CardItem", extended.name]


def test_shared_icon_is_written_once(config: JsxGenConfig) -> None:
    def button(label: str):
        return element("button", {"class": "btn"}, [icon(), element("span", children=[text(label)])])

    tree = html_document(button("Save"), button("Load"), icon())
    converter = Converter(config)

    result = converter.convert_tree(tree, "index")

    assert [c.name for c in result.components] == ["BtnItem"]
    assert len(result.assets) == 1
    source = converter.assets.public_path(result.assets[0].filename)
    assert f'<img src="{source}" alt="icon" />' in result.components[0].body
    assert f'<img src="{source}" alt="icon" />' in result.page.body


def test_tree_without_body_is_skipped(config: JsxGenConfig, caplog: pytest.LogCaptureFixture) -> None:
    tree = html_document()
    tree.children[0].children.clear()

    with caplog.at_level(logging.ERROR, logger="jsxgen"):
        result = Converter(config).convert_tree(tree, "empty")

    assert result.skipped is True
    assert result.page is None
    assert "[empty] <body> tag not found" in caplog.text


def test_run_writes_modules_and_icons(config: JsxGenConfig) -> None:
    write_ast(config.asts_dir, "index", _menu_page())
    write_ast(config.asts_dir, "contact", html_document(element("p", children=[text("Hi")]), icon()))
    config.components_dir.mkdir(parents=True)
    (config.components_dir / "Stale.jsx").write_text("old", encoding="utf-8")
    (config.components_dir / "theme.css").write_text("keep", encoding="utf-8")

    report = Converter(config).run()

    assert report.components == 1
    assert report.pages == 2
    assert report.skipped == []
    assert report.unique_components == 1
    assert not (config.components_dir / "Stale.jsx").exists()
    assert (config.components_dir / "theme.css").exists()
    component = (config.components_dir / "LiElementItem.jsx").read_text(encoding="utf-8")
    assert "const LiElementItem = ({ href, aText }) => {" in component
    page = (config.pages_dir / "Index.jsx").read_text(encoding="utf-8")
    assert "import LiElementItem from '../components/LiElementItem';" in page
    contact = (config.pages_dir / "Contact.jsx").read_text(encoding="utf-8")
    assert "<p>Hi</p>" in contact
    icons = list(config.svgs_dir.glob("icon-*.svg"))
    assert len(icons) == 1
    assert 'viewBox="0 0 24 24"' in icons[0].read_text(encoding="utf-8")


def test_run_skips_unreadable_and_bodyless_trees(config: JsxGenConfig) -> None:
    config.asts_dir.mkdir(parents=True)
    (config.asts_dir / "broken_ast.json").write_text("{oops", encoding="utf-8")
    (config.asts_dir / "notes.json").write_text("{}", encoding="utf-8")
    write_ast(config.asts_dir, "headless", element("div"))
    write_ast(config.asts_dir, "index", _menu_page())

    report = Converter(config).run()

    assert report.skipped == ["broken", "headless"]
    assert report.pages == 1
    assert [path.name for path in report.written] == ["LiElementItem.jsx", "Index.jsx"]


def test_run_requires_ast_directory(config: JsxGenConfig) -> None:
    with pytest.raises(FileNotFoundError):
        Converter(config).run(config.root / "missing")


def test_run_formats_each_module(config: JsxGenConfig) -> None:
    seen: list[str] = []

    def runner(request: FormatRequest) -> str:
        seen.append(request.filename)
        return f"// formatted\n{request.source}"

    write_ast(config.asts_dir, "index", _menu_page())
    converter = Converter(config, formatter=SourceFormatter(runner=runner))

    converter.run()

    assert seen == ["LiElementItem.jsx", "Index.jsx"]
    assert (config.pages_dir / "Index.jsx").read_text(encoding="utf-8").startswith("// formatted\n")


def test_run_accepts_explicit_ast_dir(tmp_path: Path, config: JsxGenConfig) -> None:
    elsewhere = tmp_path / "elsewhere"
    write_ast(elsewhere, "home", _menu_page())

    report = Converter(config).run(elsewhere)

    assert (config.pages_dir / "Home.jsx").exists()
    assert report.pages == 1


def _compact_menu() -> Element:
    items = [("/", "Home"), ("/about", "About"), ("/blog", "Blog")]
    return element(
        "ul",
        children=[element("li", children=[element("a", {"href": href}, [text(label)])]) for href, label in items],
    )


def _cards_with_buttons() -> list[Element]:
    def buy_card(title: str, label: str) -> Element:
        button = element("a", {"class": "btn", "href": "/x"}, [element("span", children=[text(label)])])
        return element("div", {"class": "card"}, [element("h3", children=[text(title)]), button])

    more = element("a", {"class": "btn", "href": "/x"}, [element("span", children=[text("More")])])
    return [buy_card("A", "Buy"), buy_card("B", "Sell"), more]


def _screenshots() -> list[Element]:
    return [
        element("figure", {"class": "shot"}, [element("img", {"src": "a.png", "alt": "Logo"})]),
        element("figure", {"class": "shot"}, [element("img", {"src": "b.png", "alt": ""})]),
    ]


def test_compact_list_items_become_one_component(config: JsxGenConfig) -> None:
    result = Converter(config).convert_tree(html_document(_compact_menu()), "index")

    assert [c.name for c in result.components] == ["LiElementItem"]
    component = result.components[0]
    assert component.props == ["href", "aText"]
    assert component.body == "<li><a href={href ?? \"/\"}>{aText ?? 'Home'}</a></li>"
    assert result.page.body == (
        "<ul>"
        '<LiElementItem href={"/"} aText={"Home"} />'
        '<LiElementItem href={"/about"} aText={"About"} />'
        '<LiElementItem href={"/blog"} aText={"Blog"} />'
        "</ul>"
    )


def test_nested_call_sites_bind_enclosing_props(config: JsxGenConfig) -> None:
    result = Converter(config).convert_tree(html_document(*_cards_with_buttons()), "index")

    components = {c.name: c for c in result.components}
    assert list(components) == ["BtnItem", "CardItem"]
    assert components["BtnItem"].body == (
        '<a className={"btn"} href={"/x"}><span>{spanText ?? \'Buy\'}</span></a>'
    )
    assert components["CardItem"].props == ["h3Text", "spanText"]
    assert components["CardItem"].body == (
        '<div className={"card"}><h3>{h3Text ?? \'A\'}</h3><BtnItem spanText={spanText ?? "Buy"} /></div>'
    )
    assert result.page.body == (
        '<CardItem h3Text={"A"} spanText={"Buy"} />'
        '<CardItem h3Text={"B"} spanText={"Sell"} />'
        '<BtnItem spanText={"More"} />'
    )
    bodies = {name: c.body for name, c in components.items()}
    labels = [v for v in rendered_values(expand(result.page.body, bodies)) if v in "A Buy B Sell More".split()]
    assert labels == ["A", "Buy", "B", "Sell", "More"]


def test_empty_attribute_values_survive_defaults(config: JsxGenConfig) -> None:
    result = Converter(config).convert_tree(html_document(*_screenshots()), "index")

    component = result.components[0]
    assert component.name == "ShotItem"
    assert component.body == '<figure className={"shot"}><img src={src ?? "a.png"} alt={alt ?? "Logo"} /></figure>'
    assert '<ShotItem src={"b.png"} alt={""} />' in result.page.body


@pytest.mark.parametrize(
    "children",
    [
        [nav_list([("/", "Home"), ("/about", "About")])],
        [_compact_menu()],
        _cards_with_buttons(),
        _screenshots(),
        [
            card("A", "x"),
            card("B", "y"),
            card("C", "z", element("span", children=[text("C")])),
            card("D", "w", element("span", children=[text("D")])),
        ],
        [
            element("div", {"class": "navbar"}, [nav_list([("/", "Home"), ("/a", "A")])]),
            element("p", children=[text("Hi")]),
        ],
    ],
    ids=["menu", "compact-menu", "nested-buttons", "screenshots", "collisions", "layout"],
)
def test_expanded_pages_reproduce_the_tree(config: JsxGenConfig, children: list[Element]) -> None:
    tree = html_document(*children)
    expected = tree_values(tree)

    result = Converter(config).convert_tree(tree, "index")

    for component in result.components:
        unused = [prop for prop in component.props if not references_prop(component.body, prop)]
        assert unused == [], component.name
    bodies = {component.name: component.body for component in result.components}
    assert rendered_values(expand(result.page.body, bodies)) == expected
