"""FastAPI application exposing the converter as a service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..codegen.modules import component_module, page_module, relative_import_path
from ..config import JsxGenConfig
from ..errors import JsxGenError
from ..orchestrator import Converter
from ..postproc.formatter import SourceFormatter
from ..tree import load_tree


class TreePayload(BaseModel):
    name: str
    tree: Dict[str, Any]


class ConvertRequest(BaseModel):
    trees: List[TreePayload]


class ComponentPayload(BaseModel):
    name: str
    props: List[str]
    path: str
    origin: str
    source: str


class PagePayload(BaseModel):
    name: str
    imports: List[str]
    source: str


class AssetPayload(BaseModel):
    filename: str
    content: str


class ConvertResponse(BaseModel):
    components: List[ComponentPayload]
    pages: List[PagePayload]
    assets: List[AssetPayload]
    skipped: List[str]


class HealthResponse(BaseModel):
    status: str


def _default_converter() -> Converter:
    # Service responses are returned unformatted; callers run their own tooling.
    return Converter(JsxGenConfig(root=Path.cwd()), formatter=SourceFormatter(enabled=False))


def create_app(
    converter_factory: Callable[[], Converter] = _default_converter,
) -> FastAPI:
    """Create the FastAPI application; every request converts one fresh batch."""

    app = FastAPI(title="jsxgen Service", version="0.1.0")

    async def get_converter() -> Converter:
        return converter_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/convert", response_model=ConvertResponse)
    async def convert(
        payload: ConvertRequest,
        converter: Converter = Depends(get_converter),
    ) -> ConvertResponse:
        def _run() -> ConvertResponse:
            trees = [(item.name, load_tree(item.tree)) for item in payload.trees]
            return _build_response(converter, converter.convert_trees(trees))

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.exception_handler(JsxGenError)
    async def converter_error_handler(
        _: Any, exc: JsxGenError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def _build_response(converter: Converter, results: List[Any]) -> ConvertResponse:
    paths = converter.config.paths
    import_prefix = relative_import_path(paths.pages, paths.components)
    response = ConvertResponse(components=[], pages=[], assets=[], skipped=[])
    for result in results:
        if result.skipped:
            response.skipped.append(result.source)
            continue
        for definition in result.components:
            response.components.append(
                ComponentPayload(
                    name=definition.name,
                    props=definition.props,
                    path=definition.path,
                    origin=definition.origin,
                    source=converter.formatter.format(component_module(definition), f"{definition.name}.jsx"),
                )
            )
        page = result.page
        if page is not None:
            response.pages.append(
                PagePayload(
                    name=page.name,
                    imports=page.imports,
                    source=converter.formatter.format(page_module(page, import_prefix), f"{page.name}.jsx"),
                )
            )
        response.assets.extend(
            AssetPayload(filename=asset.filename, content=asset.content) for asset in result.assets
        )
    return response


def run_service(
    host: str = "127.0.0.1", port: int = 8000, config: Optional[JsxGenConfig] = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    if config is None:
        app = create_app()
    else:
        app = create_app(lambda: Converter(config))
    uvicorn.run(app, host=host, port=port)
