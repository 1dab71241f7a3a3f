"""FastAPI application exposing scan, generate and module listing."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ReadmeGenConfig, load_config
from ..discovery import list_modules
from ..generator import GenerationResult, ReadmeGenerator
from ..module_scanner import ModuleScanner


class ScanRequest(BaseModel):
    path: str


class SubmoduleModel(BaseModel):
    name: str
    description: str


class ScanResponse(BaseModel):
    name: str
    description: str
    dependencies: List[str]
    classes: List[str]
    functions: List[str]
    hooks: List[str]
    controllers: List[str]
    forms: List[str]
    submodules: List[SubmoduleModel]


class GenerateRequest(BaseModel):
    path: str
    dry_run: bool = False


class GenerateResponse(BaseModel):
    readme_path: str
    written: bool
    content: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_config() -> ReadmeGenConfig:
    return load_config(Path.cwd())


def create_app(
    config_factory: Callable[[], ReadmeGenConfig] = _default_config,
    generator_factory: Callable[[ReadmeGenConfig], ReadmeGenerator] = ReadmeGenerator,
) -> FastAPI:
    """Create the FastAPI application exposing readmegen operations."""

    app = FastAPI(title="readmegen", version="1.0.0")

    async def get_config() -> ReadmeGenConfig:
        # Loaded per request.
        return config_factory()

    async def _in_thread(func: Callable[[], Any]) -> Any:
        return await asyncio.get_running_loop().run_in_executor(None, func)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/scan", response_model=ScanResponse)
    async def scan_module(payload: ScanRequest) -> ScanResponse:
        report = await _in_thread(lambda: ModuleScanner().scan(payload.path))
        return ScanResponse(**report.to_dict())

    @app.post("/generate", response_model=GenerateResponse)
    async def generate_readme(
        payload: GenerateRequest,
        config: ReadmeGenConfig = Depends(get_config),
    ) -> GenerateResponse:
        generator = generator_factory(config)
        result: GenerationResult = await _in_thread(
            lambda: generator.generate(payload.path, dry_run=payload.dry_run)
        )
        return GenerateResponse(
            readme_path=str(result.path),
            written=result.written,
            content=result.content,
        )

    @app.get("/modules")
    async def modules(
        root: str = ".",
        config: ReadmeGenConfig = Depends(get_config),
    ) -> Dict[str, str]:
        return await _in_thread(lambda: list_modules(Path(root), config.module_dirs))

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
