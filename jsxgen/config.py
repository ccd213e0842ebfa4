"""Configuration loading for jsxgen (.jsxgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".jsxgen.yml"

DEFAULT_LAYOUT_IDENTIFIERS = ("navbar", "header", "footer", "sidebar")

DEFAULT_SELF_CLOSING_TAGS = (
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
)


@dataclass
class PathsConfig:
    """Input and output locations, relative to the config root."""

    asts: str = "asts"
    html_input: str = "html"
    react_output: str = "react-app/src"
    components: str = "components"
    pages: str = "pages"
    public: str = "../public"
    svgs: str = "svgs"


@dataclass
class ComponentizationConfig:
    """Thresholds and identifier lists for component detection."""

    min_children_for_repetition: int = 1
    min_repetitions_for_component: int = 2
    collapse_nested_repetitions: bool = True
    layout_identifiers: List[str] = field(
        default_factory=lambda: list(DEFAULT_LAYOUT_IDENTIFIERS)
    )
    self_closing_tags: List[str] = field(
        default_factory=lambda: list(DEFAULT_SELF_CLOSING_TAGS)
    )


@dataclass
class FormattingConfig:
    """Options forwarded to the external Prettier formatter."""

    enabled: bool = True
    executable: str = "prettier"
    timeout: float = 30.0
    prettier: Dict[str, Any] = field(default_factory=lambda: {"parser": "babel"})


@dataclass
class JsxGenConfig:
    """Represents the settings defined in .jsxgen.yml."""

    root: Path
    paths: PathsConfig = field(default_factory=PathsConfig)
    componentization: ComponentizationConfig = field(default_factory=ComponentizationConfig)
    formatting: FormattingConfig = field(default_factory=FormattingConfig)

    @property
    def asts_dir(self) -> Path:
        return self.root / self.paths.asts

    @property
    def html_dir(self) -> Path:
        return self.root / self.paths.html_input

    @property
    def output_dir(self) -> Path:
        return self.root / self.paths.react_output

    @property
    def components_dir(self) -> Path:
        return self.output_dir / self.paths.components

    @property
    def pages_dir(self) -> Path:
        return self.output_dir / self.paths.pages

    @property
    def svgs_dir(self) -> Path:
        return self.output_dir / self.paths.public / self.paths.svgs


def load_config(config_path: Path) -> JsxGenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return JsxGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    paths = PathsConfig()
    paths_data = _as_dict(data.get("paths"))
    for name in paths.__dataclass_fields__:
        value = _as_str(paths_data.get(name))
        if value:
            setattr(paths, name, value)

    componentization = ComponentizationConfig()
    comp_data = _as_dict(data.get("componentization"))
    if comp_data:
        min_children = _as_int(comp_data.get("min_children_for_repetition"))
        if min_children is not None:
            componentization.min_children_for_repetition = min_children
        min_repetitions = _as_int(comp_data.get("min_repetitions_for_component"))
        if min_repetitions is not None:
            componentization.min_repetitions_for_component = min_repetitions
        collapse = _as_bool(comp_data.get("collapse_nested_repetitions"))
        if collapse is not None:
            componentization.collapse_nested_repetitions = collapse
        if "layout_identifiers" in comp_data:
            componentization.layout_identifiers = _as_str_list(comp_data.get("layout_identifiers"))
        if "self_closing_tags" in comp_data:
            componentization.self_closing_tags = [
                tag.lower() for tag in _as_str_list(comp_data.get("self_closing_tags"))
            ]
    _validate_componentization(componentization)

    formatting = FormattingConfig()
    fmt_data = _as_dict(data.get("formatting"))
    if fmt_data:
        enabled = _as_bool(fmt_data.get("enabled"))
        if enabled is not None:
            formatting.enabled = enabled
        executable = _as_str(fmt_data.get("executable"))
        if executable:
            formatting.executable = executable
        timeout = _as_float(fmt_data.get("timeout"))
        if timeout is not None:
            formatting.timeout = timeout
        if "prettier" in fmt_data:
            formatting.prettier = _as_dict(fmt_data.get("prettier"))

    return JsxGenConfig(
        root=root,
        paths=paths,
        componentization=componentization,
        formatting=formatting,
    )


def _validate_componentization(config: ComponentizationConfig) -> None:
    if config.min_children_for_repetition < 1:
        raise ConfigError("componentization.min_children_for_repetition must be at least 1")
    if config.min_repetitions_for_component < 2:
        raise ConfigError("componentization.min_repetitions_for_component must be at least 2")


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        raise ConfigError("Expected an integer, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise ConfigError(f"Expected an integer, got {value!r}") from exc
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float)) and not isinstance(item, bool)]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ComponentizationConfig",
    "ConfigError",
    "FormattingConfig",
    "JsxGenConfig",
    "PathsConfig",
    "load_config",
]
