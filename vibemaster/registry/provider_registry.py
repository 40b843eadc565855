import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from vibemaster.discovery import discover_providers, load_host_config
from vibemaster.models import Provider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Read-only, ordered set of known providers, unique by name."""

    def __init__(self, providers: Iterable[Provider] = ()):
        unique: List[Provider] = []
        seen = set()
        for provider in providers:
            if provider.name in seen:
                logger.debug("Ignoring duplicate provider %s", provider.name)
                continue
            seen.add(provider.name)
            unique.append(provider)
        self._providers: Tuple[Provider, ...] = tuple(unique)

    @classmethod
    def from_host_config(cls, paths: Optional[Iterable[Path]] = None) -> "ProviderRegistry":
        """Build the registry from the host MCP configuration and the catalogue."""
        return cls(discover_providers(load_host_config(paths)))

    @property
    def providers(self) -> Tuple[Provider, ...]:
        return self._providers

    def installed(self) -> List[Provider]:
        return [p for p in self._providers if p.installed]

    def available(self) -> List[Provider]:
        return list(self._providers)

    def get(self, name: str) -> Optional[Provider]:
        return next((p for p in self._providers if p.name == name), None)

    def with_capability(self, tag: str) -> List[Provider]:
        return [p for p in self._providers if p.has_capability(tag)]

    def __iter__(self) -> Iterator[Provider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)
