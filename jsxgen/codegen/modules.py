"""Wraps rendered bodies into component and page module source."""

from __future__ import annotations

import posixpath
import re
from functools import lru_cache
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from ..models import ComponentDefinition, PageDefinition

_COMPONENT_TAG = re.compile(r"<([A-Z][A-Za-z0-9_]*)\b")
TEMPLATES_DIR = Path(__file__).with_name("templates")


@lru_cache(maxsize=None)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def referenced_components(body: str, *, exclude: str | None = None) -> List[str]:
    """Component names used as tags in ``body``, in first-use order."""
    names: List[str] = []
    for match in _COMPONENT_TAG.finditer(body):
        name = match.group(1)
        if name != exclude and name not in names:
            names.append(name)
    return names


def component_module(definition: ComponentDefinition) -> str:
    """Module text for a component; sibling components import from ``./``."""
    names = list(definition.props)
    return _environment().get_template("component.jsx.j2").render(
        name=definition.name,
        signature="{ " + ", ".join(names) + " }" if names else "{}",
        imports=referenced_components(definition.body, exclude=definition.name),
        body=definition.body,
    )


def page_module(page: PageDefinition, components_import_path: str) -> str:
    """Module text for a page; components import from ``components_import_path``."""
    return _environment().get_template("page.jsx.j2").render(
        name=page.name,
        prefix=components_import_path.rstrip("/"),
        imports=page.imports,
        body=page.body,
    )


def relative_import_path(pages_dir: str, components_dir: str) -> str:
    """Import prefix leading from the pages directory to the components directory."""
    relative = posixpath.relpath(
        components_dir.replace("\\", "/") or ".", pages_dir.replace("\\", "/") or "."
    )
    if not relative.startswith("."):
        relative = f"./{relative}"
    return relative


__all__ = ["component_module", "page_module", "referenced_components", "relative_import_path"]
