"""FastAPI application entrypoint for zimcheck service mode."""

from __future__ import annotations

import asyncio
import io
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..archive import ArchiveOpenError
from ..models import EnabledChecks
from ..orchestrator import CheckOutcome, Orchestrator


class CheckRequest(BaseModel):
    path: str
    checks: Optional[List[str]] = None


class CheckResponse(BaseModel):
    status: bool
    path: str
    checks: List[str]
    logs: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing archive checks."""

    app = FastAPI(title="zimcheck service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # One orchestrator per request; reports are never shared across runs.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/check", response_model=CheckResponse)
    async def check_archive(
        payload: CheckRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> CheckResponse:
        enabled = None
        if payload.checks:
            try:
                enabled = EnabledChecks.from_names(payload.checks)
            except ValueError as exc:
                raise HTTPException(status_code=422, detail=str(exc)) from exc

        def _run_check() -> CheckOutcome:
            # The streamed document is discarded; the response carries the logs.
            return orchestrator.run(
                payload.path, enabled=enabled, json_output=True, stream=io.StringIO()
            )

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run_check)
        effective = enabled if enabled is not None else orchestrator.config.enabled
        return CheckResponse(
            status=outcome.status,
            path=payload.path,
            checks=effective.names(),
            logs=outcome.report.to_dict()["logs"],
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ArchiveOpenError)
    async def archive_open_handler(_: Any, exc: ArchiveOpenError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["CheckRequest", "CheckResponse", "create_app", "run_service"]
