import logging

from vibemaster.models import OrchestratorRequest, Provider, ProviderResponse

logger = logging.getLogger(__name__)


class ProviderCallError(RuntimeError):
    """A provider could not answer a request."""


class StaticProviderInvoker:
    """Offline invoker: describes what each provider would be asked.

    Deterministic and network-free, so orchestration can run anywhere.
    """

    confidence = 0.5

    async def invoke(self, provider: Provider, request: OrchestratorRequest) -> ProviderResponse:
        logger.info("📨 Calling %s (static)", provider.name)
        payload = {
            "provider": provider.name,
            "capabilities": list(provider.capabilities),
            "request_type": request.type.value,
            "query": request.query,
        }
        return ProviderResponse.from_parts(provider, payload, self.confidence)
