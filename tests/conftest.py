from __future__ import annotations

import logging
from typing import Iterator

import pytest

from jsxgen.config import ComponentizationConfig, JsxGenConfig
from jsxgen.stores import AssetStore, TreeRegistry
from jsxgen.codegen.generator import CodeGenerator


@pytest.fixture(autouse=True)
def _propagate_jsxgen_logs() -> Iterator[None]:
    """Let caplog see jsxgen records even after the CLI configured logging."""
    logger = logging.getLogger("jsxgen")
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    yield


@pytest.fixture
def assets() -> AssetStore:
    return AssetStore()


@pytest.fixture
def generator(assets: AssetStore) -> CodeGenerator:
    return CodeGenerator(assets, ComponentizationConfig().self_closing_tags)


@pytest.fixture
def registry() -> TreeRegistry:
    return TreeRegistry()


@pytest.fixture
def config(tmp_path) -> JsxGenConfig:
    """Config rooted at ``tmp_path`` with formatting disabled."""
    settings = JsxGenConfig(root=tmp_path)
    settings.formatting.enabled = False
    return settings
