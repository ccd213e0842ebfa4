"""HTML to tree JSON conversion (the ``jsxgen parse`` step)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction, Tag

from .logging import get_logger

logger = get_logger("parser")

AST_SUFFIX = "_ast.json"


@dataclass
class ParsedFile:
    source: Path
    target: Path


def parse_html(markup: str) -> Dict[str, Any]:
    """Parse ``markup`` into the htmlparser2 document JSON shape."""
    soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    return {"type": "root", "children": [_convert(child) for child in soup.contents]}


def parse_directory(html_dir: Path, ast_dir: Path) -> List[ParsedFile]:
    """Write ``<stem>_ast.json`` for every ``.html`` file in ``html_dir``."""
    if not html_dir.is_dir():
        raise FileNotFoundError(f"HTML input directory not found: {html_dir}")
    ast_dir.mkdir(parents=True, exist_ok=True)
    parsed: List[ParsedFile] = []
    for html_file in sorted(html_dir.iterdir()):
        if html_file.suffix.lower() != ".html" or not html_file.is_file():
            continue
        logger.info("Processing %s...", html_file.name)
        tree = parse_html(html_file.read_text(encoding="utf-8"))
        target = ast_dir / f"{html_file.stem}{AST_SUFFIX}"
        target.write_text(json.dumps(tree, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("AST written to %s", target)
        parsed.append(ParsedFile(source=html_file, target=target))
    return parsed


def _convert(node: Any) -> Dict[str, Any]:
    if isinstance(node, Tag):
        name = node.name.lower()
        node_type = name if name in ("script", "style") else "tag"
        return {
            "type": node_type,
            "name": name,
            "attribs": {key: _attribute_value(value) for key, value in node.attrs.items()},
            "children": [_convert(child) for child in node.contents],
        }
    if isinstance(node, Comment):
        return {"type": "comment", "data": str(node)}
    if isinstance(node, Doctype):
        return {"type": "directive", "name": "!doctype", "data": f"!DOCTYPE {node}"}
    if isinstance(node, (ProcessingInstruction, Declaration)):
        text = str(node).rstrip("?")
        return {"type": "directive", "name": text.split(" ", 1)[0].lower(), "data": text}
    if isinstance(node, CData):
        return {"type": "cdata", "children": [{"type": "text", "data": str(node)}]}
    return {"type": "text", "data": str(node)}


def _attribute_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    if value is None:
        return ""
    return str(value)


__all__ = ["AST_SUFFIX", "ParsedFile", "parse_directory", "parse_html"]
