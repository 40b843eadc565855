from .provider_registry import ProviderRegistry

__all__ = ["ProviderRegistry"]
