"""FastAPI application exposing componentlens queries."""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, Dict, List, Optional, TypeVar

try:  # pragma: no cover - optional dependency
    from fastapi import Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..config import ConfigError
from ..errors import ComponentNotFoundError
from ..models import to_jsonable
from ..orchestrator import Orchestrator

T = TypeVar("T")


class SimilarRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    props: Optional[List[str]] = None
    threshold: float = 0.3
    max_results: Optional[int] = None


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application; the factory is called once per app."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    app = FastAPI(title="componentlens", version="0.1.0")
    state: Dict[str, Orchestrator] = {}
    # Orchestrator caches are not thread safe; executor calls take turns.
    lock = threading.Lock()

    async def get_orchestrator() -> Orchestrator:
        # Records and caches live on the orchestrator, so it is shared across requests.
        if "orchestrator" not in state:
            state["orchestrator"] = orchestrator_factory()
        return state["orchestrator"]

    def _locked(func: Callable[[], T]) -> T:
        with lock:
            return func()

    async def _run(func: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _locked, func)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/components")
    async def list_components(
        category: Optional[str] = None,
        framework: Optional[str] = None,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        summaries = await _run(lambda: orchestrator.list_components(category, framework))
        return to_jsonable(summaries)

    @app.get("/components/{name}")
    async def component_details(
        name: str,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        record = await _run(lambda: orchestrator.get_component_details(name))
        return to_jsonable(record)

    @app.post("/similar")
    async def similar(
        payload: SimilarRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        if payload.name:
            matches = await _run(
                lambda: orchestrator.find_similar(
                    payload.name, payload.threshold, payload.max_results
                )
            )
        elif payload.description:
            matches = await _run(
                lambda: orchestrator.find_by_description(payload.description, payload.props)
            )
        else:
            return JSONResponse(
                status_code=422, content={"detail": "Either name or description is required"}
            )
        return to_jsonable(matches)

    @app.get("/design-system")
    async def design_system(
        category: Optional[str] = None,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        snapshot = await _run(lambda: orchestrator.get_design_system(category))
        return to_jsonable(snapshot)

    @app.get("/categories")
    async def categories(orchestrator: Orchestrator = Depends(get_orchestrator)) -> Any:
        return to_jsonable(await _run(orchestrator.get_categories))

    @app.get("/cache/stats")
    async def cache_stats(orchestrator: Orchestrator = Depends(get_orchestrator)) -> Any:
        return to_jsonable(await _run(orchestrator.cache_stats))

    @app.exception_handler(ComponentNotFoundError)
    async def not_found_handler(_: Any, exc: ComponentNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc), "errors": exc.errors})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app(orchestrator_factory)
    uvicorn.run(app, host=host, port=port)


__all__ = ["SimilarRequest", "create_app", "run_service"]
