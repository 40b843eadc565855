import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from vibemaster.models import OrchestratorRequest, Provider, RoutingPlan, RoutingStep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutingRule:
    triggers: tuple
    capability: str
    priority: int
    reason: str

    def matches(self, query: str) -> bool:
        return any(trigger in query for trigger in self.triggers)


ROUTING_RULES = (
    RoutingRule(("issue", "pr", "pull request"), "github", 10, "GitHub issue/PR mentioned"),
    RoutingRule(("how to", "implement", "api"), "docs", 9, "Documentation needed"),
    RoutingRule(("remember", "previous", "we did"), "memory", 8, "Project memory needed"),
    RoutingRule(("similar", "example", "find code"), "semantic", 7, "Code search needed"),
)

DEFAULT_PRIORITY = 5
DEFAULT_RULES = (
    ("docs", "Default context"),
    ("memory", "Default memory"),
)


def _first_with(providers: List[Provider], capability: str) -> Optional[Provider]:
    return next((p for p in providers if p.has_capability(capability)), None)


class IntelligentRouter:
    """Decide which providers to call for a request, and in what order."""

    def __init__(self, rules: Iterable[RoutingRule] = ROUTING_RULES):
        self.rules = tuple(rules)

    def route(self, request: OrchestratorRequest, providers: Iterable[Provider]) -> RoutingPlan:
        installed = [p for p in providers if p.installed]
        query = request.query.lower()
        plan: RoutingPlan = []

        for rule in self.rules:
            if not rule.matches(query):
                continue
            provider = _first_with(installed, rule.capability)
            if provider is None:
                logger.debug("No installed provider for %s; rule dropped", rule.capability)
                continue
            plan.append(RoutingStep(provider=provider, priority=rule.priority, reason=rule.reason))

        if not plan:
            for capability, reason in DEFAULT_RULES:
                provider = _first_with(installed, capability)
                if provider and all(step.provider.name != provider.name for step in plan):
                    plan.append(RoutingStep(provider=provider, priority=DEFAULT_PRIORITY, reason=reason))

        # sorted() is stable, so equal priorities keep rule order
        plan = sorted(plan, key=lambda step: step.priority, reverse=True)
        logger.info("🧭 Routed %r to %s", request.query[:100], [s.provider.name for s in plan])
        return plan
