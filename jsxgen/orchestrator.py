"""Batch orchestration: trees in, component and page modules out."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .analyzers import PatternDetector
from .codegen.generator import CodeGenerator
from .codegen.modules import component_module, page_module, referenced_components, relative_import_path
from .codegen.naming import to_pascal_case
from .config import JsxGenConfig
from .errors import TreeError
from .logging import get_logger, tree_logger
from .models import Node, PageDefinition, TreeResult
from .parser import AST_SUFFIX
from .postproc.formatter import SourceFormatter
from .stores import AssetFailure, AssetStore, GlobalRegistry, TreeRegistry
from .tree import find_body, read_tree


@dataclass
class BatchReport:
    """Summary of a conversion run."""

    results: List[TreeResult] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    write_failures: List[str] = field(default_factory=list)
    asset_failures: List[AssetFailure] = field(default_factory=list)
    unique_components: int = 0

    @property
    def skipped(self) -> List[str]:
        return [result.source for result in self.results if result.skipped]

    @property
    def components(self) -> int:
        return sum(len(result.components) for result in self.results)

    @property
    def pages(self) -> int:
        return sum(1 for result in self.results if result.page is not None)


class Converter:
    """Coordinates detection, extraction and generation for a batch of trees.

    One converter is one batch: its global registry and asset store persist
    across every tree it converts, so identical components and icons are
    emitted once no matter how many trees contain them.
    """

    def __init__(
        self,
        config: JsxGenConfig | None = None,
        *,
        detector: PatternDetector | None = None,
        formatter: SourceFormatter | None = None,
        assets: AssetStore | None = None,
        global_registry: GlobalRegistry | None = None,
    ) -> None:
        self.config = config or JsxGenConfig(root=Path.cwd())
        paths = self.config.paths
        self.detector = detector or PatternDetector(self.config.componentization)
        self.formatter = formatter or SourceFormatter(
            self.config.formatting.prettier,
            executable=self.config.formatting.executable,
            timeout=self.config.formatting.timeout,
            enabled=self.config.formatting.enabled,
        )
        self.assets = assets if assets is not None else AssetStore(public_prefix=paths.svgs)
        self.global_registry = global_registry or GlobalRegistry(components_dir=paths.components)
        self.generator = CodeGenerator(self.assets, self.config.componentization.self_closing_tags)
        self.logger = get_logger("orchestrator")

    def convert_tree(self, tree: Node, source: str) -> TreeResult:
        """Convert one tree; nothing but icon assets touches the disk."""
        log = tree_logger("orchestrator", source)
        body = find_body(tree)
        if body is None:
            log.error("<body> tag not found; skipping tree")
            self.assets.flush()
            return TreeResult(source=source, skipped=True, reason="missing <body> element")

        registry = TreeRegistry()
        components = self.detector.extract(body, registry, self.global_registry, self.generator)
        page_body = self.generator.render_page(body, registry)
        page = PageDefinition(
            name=to_pascal_case(source or "Page"),
            body=page_body,
            imports=referenced_components(page_body),
        )
        assets = self.assets.flush()
        log.debug(
            "%d new component(s), %d registered node(s), %d new icon(s)",
            len(components),
            len(registry),
            len(assets),
        )
        return TreeResult(source=source, components=components, page=page, assets=assets)

    def convert_trees(self, trees: Iterable[Tuple[str, Node]]) -> List[TreeResult]:
        """Convert named trees in lexicographic order of their names."""
        return [self.convert_tree(tree, name) for name, tree in sorted(trees, key=lambda item: item[0])]

    def run(self, ast_dir: Path | None = None) -> BatchReport:
        """Convert every ``*_ast.json`` file and write modules and icons to disk."""
        source_dir = ast_dir or self.config.asts_dir
        if not source_dir.is_dir():
            raise FileNotFoundError(f"AST directory not found: {source_dir}")

        components_dir = self.config.components_dir
        pages_dir = self.config.pages_dir
        self.assets.output_dir = self.config.svgs_dir
        for directory in (components_dir, pages_dir, self.config.svgs_dir):
            directory.mkdir(parents=True, exist_ok=True)
        _remove_generated(components_dir)
        _remove_generated(pages_dir)

        import_prefix = relative_import_path(pages_dir.as_posix(), components_dir.as_posix())

        report = BatchReport()
        for ast_file in _ast_files(source_dir):
            page_name = ast_file.name[: -len(AST_SUFFIX)]
            self.logger.info("Processing AST for page: %s from %s", page_name, ast_file.name)
            try:
                tree = read_tree(ast_file)
            except TreeError as exc:
                self.logger.error("Skipping %s: %s", ast_file.name, exc)
                report.results.append(TreeResult(source=page_name, skipped=True, reason=str(exc)))
                continue

            try:
                result = self.convert_tree(tree, page_name)
            except Exception as exc:  # pragma: no cover - unexpected failure
                self.logger.exception("Conversion of %s failed", ast_file.name)
                report.results.append(TreeResult(source=page_name, skipped=True, reason=str(exc)))
                continue
            report.results.append(result)
            for definition in result.components:
                target = components_dir / f"{definition.name}.jsx"
                self._write_module(target, component_module(definition), report)
                self.logger.info("Generated new component: %s (Type: %s)", target, definition.origin)
            if result.page is not None:
                target = pages_dir / f"{result.page.name}.jsx"
                self._write_module(target, page_module(result.page, import_prefix), report)
                self.logger.info("Generated page: %s", target)

        report.asset_failures = list(self.assets.failures)
        report.unique_components = len(self.global_registry)
        self.logger.info("Conversion complete")
        self.logger.info("Total unique components generated: %d", report.unique_components)
        if report.asset_failures:
            self.logger.warning("%d icon asset(s) could not be written", len(report.asset_failures))
        return report

    def _write_module(self, target: Path, source: str, report: BatchReport) -> None:
        content = self.formatter.format(source, target.name)
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            self.logger.error("Failed to write %s: %s", target, exc)
            report.write_failures.append(str(target))
            return
        report.written.append(target)


def _ast_files(directory: Path) -> Sequence[Path]:
    return sorted(path for path in directory.iterdir() if path.name.endswith(AST_SUFFIX) and path.is_file())


def _remove_generated(directory: Path) -> None:
    for stale in directory.glob("*.jsx"):
        stale.unlink()


__all__ = ["BatchReport", "Converter"]
