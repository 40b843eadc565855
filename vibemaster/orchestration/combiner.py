"""
Response combination: execute a routing plan and merge provider answers.

Provider calls run strictly one after another. A failing call is logged and
left out; the orchestration itself never fails because of a provider.
"""
import logging
from typing import List

from vibemaster.models import (
    CombinedResult,
    OrchestratorRequest,
    ProviderInvoker,
    ProviderResponse,
    RoutingPlan,
)
from vibemaster.utils.response_formatter import format_payload

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTIONS = [
    "Ask a follow-up question to narrow the answer down",
    "Run detect_stack so routing can use your project context",
    "Install the suggested providers from list_providers for richer answers",
]


class ResponseCombiner:
    """Runs a RoutingPlan through a ProviderInvoker and builds a CombinedResult."""

    def __init__(self, invoker: ProviderInvoker):
        self.invoker = invoker

    async def execute(self, request: OrchestratorRequest, plan: RoutingPlan) -> List[ProviderResponse]:
        responses: List[ProviderResponse] = []
        for step in plan:
            try:
                response = await self.invoker.invoke(step.provider, request)
            except Exception as e:
                logger.warning("❌ Provider %s failed (%s): %s", step.provider.name, step.reason, e)
                continue
            logger.info("✅ %s answered (priority %d)", step.provider.name, step.priority)
            responses.append(response)
        return responses

    async def combine(self, request: OrchestratorRequest, plan: RoutingPlan) -> CombinedResult:
        responses = await self.execute(request, plan)
        return CombinedResult(
            answer=render_answer(request.query, responses),
            sources=responses,
            suggestions=list(DEFAULT_SUGGESTIONS),
        )


def render_answer(query: str, responses: List[ProviderResponse]) -> str:
    """Render the combined Markdown answer document."""
    lines = [f"# Response to: {query}", "", "## Sources"]
    if responses:
        lines.extend(f"- {r.source} (confidence {r.confidence:.2f})" for r in responses)
    else:
        lines.append("- none")

    for response in responses:
        lines.extend(["", f"## {response.source}", format_payload(response.payload)])

    return "\n".join(lines)
