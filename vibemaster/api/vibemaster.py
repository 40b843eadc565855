"""
Core API for VibeMaster

This is the main black-box API that can be used by any interface (CLI, web server, agent tools, etc.)
"""
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from vibemaster.analysis import VibeAnalyzer
from vibemaster.detectors import default_detectors
from vibemaster.discovery import detect_project
from vibemaster.models import (
    AnalysisResult,
    CombinedResult,
    Detector,
    OrchestratorRequest,
    ProjectContext,
    Provider,
    ProviderInvoker,
    RoutingPlan,
)
from vibemaster.orchestration import ResponseCombiner
from vibemaster.registry import ProviderRegistry
from vibemaster.routing import IntelligentRouter
from vibemaster.tools.invokers import StaticProviderInvoker
from vibemaster.tools.mcp_tools import MCPProviderInvoker
from vibemaster.utils.fs import project_directory

logger = logging.getLogger(__name__)

INVOKER_ENV = "VIBEMASTER_INVOKER"


def invoker_from_env() -> ProviderInvoker:
    """Return the provider invoker selected by VIBEMASTER_INVOKER (static or mcp)."""
    choice = os.getenv(INVOKER_ENV, "static").strip().lower()
    if choice == "mcp":
        return MCPProviderInvoker()
    if choice != "static":
        logger.warning("⚠️ Unknown %s=%r; using static invoker", INVOKER_ENV, choice)
    return StaticProviderInvoker()


class VibeMaster:
    """
    Core API for vibe analysis and provider orchestration.

    This class provides a clean, interface-agnostic API for:
    - Classifying the tone of text with pluggable detectors
    - Routing requests to installed MCP providers and combining their answers
    - Introspecting known providers and the current project's stack

    Usage:
        system = VibeMaster()
        await system.initialize("/path/to/project")

        result = await system.analyze("This is AWESOME!!!")
        combined = await system.orchestrate("how to implement the login api")
    """

    def __init__(
        self,
        detectors: Optional[Iterable[Detector]] = None,
        invoker: Optional[ProviderInvoker] = None,
        router: Optional[IntelligentRouter] = None,
        host_config_paths: Optional[Iterable[Path]] = None,
    ):
        """
        Args:
            detectors: Detectors in registration order (defaults to keyword, then pattern)
            invoker: Provider invoker (defaults to VIBEMASTER_INVOKER selection)
            router: Router to plan provider calls
            host_config_paths: Host MCP config files to try instead of the standard locations
        """
        self.analyzer = VibeAnalyzer(detectors if detectors is not None else default_detectors())
        self.router = router or IntelligentRouter()
        self.combiner = ResponseCombiner(invoker or invoker_from_env())
        self.host_config_paths = list(host_config_paths) if host_config_paths is not None else None
        self.registry: Optional[ProviderRegistry] = None
        self.context: Optional[ProjectContext] = None
        self.project_path: Optional[str] = None
        self._initialized = False

    async def initialize(self, project_path: Optional[str] = None, reload_providers: bool = False) -> ProjectContext:
        """
        Scan the project and build the provider registry.

        The registry is built once per session; pass reload_providers=True to rebuild it.

        Returns:
            The detected ProjectContext
        """
        logger.info("Initializing VibeMaster...")
        self.project_path = project_path or project_directory()
        self.context = detect_project(self.project_path)

        if self.registry is None or reload_providers:
            self.registry = ProviderRegistry.from_host_config(self.host_config_paths)

        self._initialized = True
        logger.info("System initialized successfully!")
        return self.context

    def is_initialized(self) -> bool:
        """Check if the system has been initialized."""
        return self._initialized

    def _require_registry(self) -> ProviderRegistry:
        if not self._initialized or self.registry is None:
            raise RuntimeError(
                "System not initialized. Call initialize() first."
            )
        return self.registry

    def register_detector(self, detector: Detector) -> None:
        self.analyzer.register_detector(detector)

    async def analyze(self, text: str) -> AnalysisResult:
        """Classify text; a failing detector aborts the call."""
        return await self.analyzer.analyze(text)

    def _as_request(self, request: OrchestratorRequest | str) -> OrchestratorRequest:
        if isinstance(request, str):
            request = OrchestratorRequest(query=request)
        if request.context is None:
            request.context = self.context
        return request

    def route(self, request: OrchestratorRequest | str) -> RoutingPlan:
        """Return the routing plan for a request without calling any provider."""
        registry = self._require_registry()
        return self.router.route(self._as_request(request), registry.providers)

    async def orchestrate(self, request: OrchestratorRequest | str) -> CombinedResult:
        """
        Route a request to installed providers and merge their answers.

        Provider failures never fail the orchestration.

        Raises:
            RuntimeError: If system is not initialized
        """
        registry = self._require_registry()
        request = self._as_request(request)
        plan = self.router.route(request, registry.providers)
        return await self.combiner.combine(request, plan)

    async def smart_context(self, topic: str) -> CombinedResult:
        """Orchestrate a context request about topic."""
        return await self.orchestrate(f"Provide context about: {topic}")

    def list_providers(self) -> List[Provider]:
        return self._require_registry().available()

    def get_installed_providers(self) -> List[Provider]:
        return self._require_registry().installed()

    def get_available_providers(self) -> List[Provider]:
        return self._require_registry().available()

    def detect_stack(self, path: Optional[str] = None) -> ProjectContext:
        """Detect the stack of path, or of the session's project. Never raises for missing files."""
        return detect_project(path or self.project_path or project_directory())
