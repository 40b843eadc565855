import json
import logging
from typing import List, Optional
from langchain.tools import tool

from vibemaster.models import OrchestratorRequest, RequestType, VibeMasterProtocol, ToolCallable

logger = logging.getLogger(__name__)


def build_vibemaster_tools(system: VibeMasterProtocol) -> List[ToolCallable]:
    @tool
    async def analyze_vibe(text: str) -> str:
        """Classify the tone of a text and return the ranked vibe scores as JSON."""
        logger.info("🔎 Tool 'analyze_vibe' called with %d chars", len(text))
        result = await system.analyze(text)
        return json.dumps(result.to_serializable(), indent=2)

    @tool
    async def orchestrate(query: str, type: str = "query") -> str:
        """Route a request to the best installed MCP providers and return the combined answer."""
        short_q = (query[:200] + '...') if len(query) > 200 else query
        logger.info("🔎 Tool 'orchestrate' called with query=%r", short_q)
        try:
            request_type = RequestType(type)
        except ValueError:
            request_type = RequestType.QUERY
        result = await system.orchestrate(OrchestratorRequest(query=query, type=request_type))
        return result.answer

    @tool
    async def smart_context(topic: str) -> str:
        """Get coding context about a topic, combining docs, memory and project info."""
        result = await system.smart_context(topic)
        return result.answer

    @tool
    def list_providers() -> str:
        """List installed and available MCP providers with their capabilities."""
        installed = system.get_installed_providers()
        available = system.get_available_providers()
        lines = [f"# Installed MCPs ({len(installed)})"]
        lines.extend(f"- {p.name}: {', '.join(p.capabilities)}" for p in installed)
        lines.extend(["", f"# Available MCPs ({len(available)})"])
        lines.extend(
            f"- {p.name}: {', '.join(p.capabilities)} {'✓' if p.installed else '(not installed)'}"
            for p in available
        )
        return "\n".join(lines)

    @tool
    def detect_stack(path: Optional[str] = None) -> str:
        """Detect the technology stack of a project directory (defaults to the current project)."""
        context = system.detect_stack(path)
        return json.dumps(context.to_serializable(), indent=2)

    return [analyze_vibe, orchestrate, smart_context, list_providers, detect_stack]
