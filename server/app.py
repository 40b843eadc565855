"""FastAPI application for VibeMaster.

Exposes the tool-call surface (analyze, orchestrate, providers, stack) over HTTP.
The server wraps a `VibeMaster` instance created at startup; no global mutable state.

Run with `python -m server` or `uvicorn server.app:app --reload --port 8000`.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.requests import Request

from vibemaster import VibeMaster
from vibemaster.models import OrchestratorRequest, RequestType


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging for the server."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=True,
    )
    logging.getLogger("vibemaster").setLevel(level)
    logging.getLogger("server").setLevel(level)


logger = logging.getLogger(__name__)


# ============================================================================
# Request/Response Models
# ============================================================================


class AnalyzeRequest(BaseModel):
    """Request model for vibe analysis."""

    text: str = Field(..., description="Text to classify")


class ScoreModel(BaseModel):
    category: str = Field(..., description="Vibe category")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Aggregated confidence, clamped to 1.0")
    reasoning: str = Field(..., description="Why the detectors chose this category")


class AnalyzeResponse(BaseModel):
    """Response model for vibe analysis."""

    primary_category: str = Field(..., description="Category with the highest summed confidence")
    scores: list[ScoreModel] = Field(..., description="One score per category, highest first")
    summary: str = Field(..., description="Human-readable summary")


class OrchestrateRequest(BaseModel):
    """Request model for orchestration and routing."""

    query: str = Field(..., description="Your question or request")
    type: RequestType = Field(RequestType.QUERY, description="Type of request")
    files: list[str] = Field(default_factory=list, description="Files relevant to the request")


class SmartContextRequest(BaseModel):
    topic: str = Field(..., description="What you want context about")


class SourceModel(BaseModel):
    source: str = Field(..., description="Provider name")
    payload: Any = Field(None, description="Provider answer")
    confidence: float = Field(..., description="Provider confidence")
    timestamp: float = Field(..., description="Monotonic time the answer was received")


class OrchestrateResponse(BaseModel):
    """Response model for orchestration results."""

    answer: str = Field(..., description="Combined answer document")
    sources: list[SourceModel] = Field(..., description="Provider answers in execution order")
    suggestions: list[str] = Field(..., description="Follow-up hints")


class RouteStepModel(BaseModel):
    provider: str = Field(..., description="Provider name")
    priority: int = Field(..., description="Higher runs first")
    reason: str = Field(..., description="Why this provider was chosen")


class RouteResponse(BaseModel):
    query: str = Field(..., description="Original query")
    plan: list[RouteStepModel] = Field(..., description="Steps sorted by priority")


class ProviderModel(BaseModel):
    name: str
    command: str
    args: list[str]
    env: Optional[dict[str, str]] = None
    capabilities: list[str]
    installed: bool


class ProviderListResponse(BaseModel):
    """Response model for listing providers."""

    installed: list[ProviderModel] = Field(..., description="Providers found in the host configuration")
    available: list[ProviderModel] = Field(..., description="All known providers")


class StackRequest(BaseModel):
    path: Optional[str] = Field(None, description="Project path (defaults to the session project)")


class StatusResponse(BaseModel):
    """Response model for system status."""

    initialized: bool = Field(..., description="Whether the system is initialized")
    project_path: Optional[str] = Field(None, description="Project scanned at startup")
    provider_count: int = Field(..., description="Number of known providers")
    detector_count: int = Field(..., description="Number of registered detectors")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Server health status")
    system_ready: bool = Field(..., description="Whether the system is ready")


class VibeMasterServer:
    """Encapsulates FastAPI app + VibeMaster lifecycle."""

    def __init__(self, *, log_level: int = logging.INFO, project_path: Optional[str] = None) -> None:
        configure_logging(log_level)
        self.project_path = project_path
        self.system: Optional[VibeMaster] = None

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        """Lifespan event handler for startup and shutdown."""
        logger.info("=" * 70)
        logger.info("🚀 VIBEMASTER SERVER STARTING")
        logger.info("=" * 70)

        try:
            self.system = VibeMaster()
            logger.info("⚙️  Initializing core system...")
            await self.system.initialize(self.project_path)
            logger.info("✅ Server ready!")
            logger.info("=" * 70)
        except Exception as e:
            logger.error("❌ Failed to initialize system: %s", e)
            # Continue anyway - API will return 503 until ready.

        yield

        logger.info("👋 Server shutting down...")

    def create_app(self) -> FastAPI:
        """Create and configure a FastAPI application instance."""
        app = FastAPI(
            title="VibeMaster API",
            description="Vibe analysis and intelligent MCP orchestration",
            version="1.0.0",
            lifespan=self.lifespan,
        )

        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        def require_system() -> VibeMaster:
            if self.system is None or not self.system.is_initialized():
                raise HTTPException(
                    status_code=503,
                    detail="System not initialized. Please wait for initialization to complete.",
                )
            return self.system

        @app.get("/", tags=["General"])
        async def root() -> dict[str, Any]:
            return {
                "name": "VibeMaster API",
                "version": "1.0.0",
                "docs": "/docs",
                "health": "/health",
                "validEndpoints": [
                    "GET /health",
                    "GET /status",
                    "POST /analyze",
                    "POST /orchestrate",
                    "POST /route",
                    "POST /smart-context",
                    "GET /providers",
                    "POST /stack",
                ],
            }

        @app.get("/health", response_model=HealthResponse, tags=["General"])
        async def health_check() -> HealthResponse:
            system_ready = self.system is not None and self.system.is_initialized()
            return HealthResponse(status="healthy", system_ready=system_ready)

        @app.get("/status", response_model=StatusResponse, tags=["General"])
        async def get_status() -> StatusResponse:
            system = require_system()
            return StatusResponse(
                initialized=system.is_initialized(),
                project_path=system.project_path,
                provider_count=len(system.list_providers()),
                detector_count=len(system.analyzer.detectors),
            )

        @app.post("/analyze", response_model=AnalyzeResponse, tags=["Analysis"])
        async def analyze(request: AnalyzeRequest) -> AnalyzeResponse:
            system = require_system()
            try:
                result = await system.analyze(request.text)
            except Exception as e:
                logger.error("❌ Analysis failed: %s", e)
                raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")
            return AnalyzeResponse(**result.to_serializable())

        @app.post("/orchestrate", response_model=OrchestrateResponse, tags=["Orchestration"])
        async def orchestrate(request: OrchestrateRequest) -> OrchestrateResponse:
            system = require_system()
            logger.info("🔍 Orchestrate: %s...", request.query[:100])
            result = await system.orchestrate(
                OrchestratorRequest(query=request.query, type=request.type, files=request.files)
            )
            logger.info("✅ Orchestration completed")
            return OrchestrateResponse(**result.to_serializable())

        @app.post("/route", response_model=RouteResponse, tags=["Orchestration"])
        async def route(request: OrchestrateRequest) -> RouteResponse:
            system = require_system()
            plan = system.route(OrchestratorRequest(query=request.query, type=request.type, files=request.files))
            return RouteResponse(
                query=request.query,
                plan=[RouteStepModel(**step.to_serializable()) for step in plan],
            )

        @app.post("/smart-context", response_model=OrchestrateResponse, tags=["Orchestration"])
        async def smart_context(request: SmartContextRequest) -> OrchestrateResponse:
            system = require_system()
            result = await system.smart_context(request.topic)
            return OrchestrateResponse(**result.to_serializable())

        @app.get("/providers", response_model=ProviderListResponse, tags=["Providers"])
        async def list_providers() -> ProviderListResponse:
            system = require_system()
            return ProviderListResponse(
                installed=[ProviderModel(**p.to_serializable()) for p in system.get_installed_providers()],
                available=[ProviderModel(**p.to_serializable()) for p in system.get_available_providers()],
            )

        @app.post("/stack", tags=["Providers"])
        async def detect_stack(request: StackRequest) -> dict[str, Any]:
            system = require_system()
            return system.detect_stack(request.path).to_serializable()

        @app.exception_handler(404)
        async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Not Found",
                    "detail": "The requested endpoint does not exist",
                    "docs": "/docs",
                },
            )

        @app.exception_handler(500)
        async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
            logger.exception("Internal server error")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal Server Error", "detail": "An unexpected error occurred"},
            )

        return app


def create_app() -> FastAPI:
    """Factory for creating an app instance (useful for tests/uvicorn)."""
    return VibeMasterServer().create_app()


app = create_app()
