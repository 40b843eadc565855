"""
Provider discovery: host MCP configuration plus a catalogue of well-known servers.

Discovery never raises. A missing or unreadable host configuration simply
yields no discovered providers, and the catalogue is still offered.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from vibemaster.models import Provider
from vibemaster.utils.fs import host_config_candidates

logger = logging.getLogger(__name__)

# (name substrings, capabilities); applied in order
CAPABILITY_RULES = (
    (("context", "doc"), ("docs", "context")),
    (("memory",), ("memory", "persistence")),
    (("github",), ("github", "issues")),
    (("search",), ("search",)),
    (("vector", "qdrant"), ("semantic", "search")),
)


@dataclass(frozen=True)
class CatalogueEntry:
    name: str
    command: str
    args: tuple
    capabilities: tuple
    match: str


KNOWN_PROVIDERS = (
    CatalogueEntry(
        name="context7",
        command="npx",
        args=("-y", "@upstash/context7-mcp"),
        capabilities=("docs", "context", "search"),
        match="context7",
    ),
    CatalogueEntry(
        name="memory-keeper",
        command="npx",
        args=("-y", "mcp-memory-keeper"),
        capabilities=("memory", "context", "persistence"),
        match="memory",
    ),
    CatalogueEntry(
        name="github",
        command="npx",
        args=("-y", "@modelcontextprotocol/server-github"),
        capabilities=("github", "issues", "repos"),
        match="github",
    ),
)


def infer_capabilities(name: str) -> tuple:
    """Infer capability tags from a server name by substring matching."""
    lower = name.lower()
    caps: List[str] = []
    for needles, tags in CAPABILITY_RULES:
        if any(needle in lower for needle in needles):
            caps.extend(tag for tag in tags if tag not in caps)
    return tuple(caps)


def load_host_config(paths: Optional[Iterable[Path]] = None) -> Optional[Dict[str, Any]]:
    """Return the first readable JSON host configuration, or None."""
    for path in (paths if paths is not None else host_config_candidates()):
        path = Path(path)
        if not path.is_file():
            continue
        try:
            config = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("⚠️  Could not read host config %s: %s", path, e)
            continue
        if not isinstance(config, dict):
            logger.warning("⚠️  Host config %s is not a JSON object", path)
            continue
        logger.info("📂 Loaded host config from %s", path)
        return config
    return None


def providers_from_host_config(config: Optional[Dict[str, Any]]) -> List[Provider]:
    """Turn the `mcpServers` mapping into installed providers."""
    if not config:
        return []
    servers = config.get("mcpServers")
    if not isinstance(servers, dict):
        return []

    providers = []
    for name, entry in servers.items():
        if not isinstance(entry, dict):
            logger.warning("⚠️  Skipping malformed mcpServers entry %r", name)
            continue
        env = entry.get("env")
        args = entry.get("args") or ()
        if not isinstance(args, (list, tuple)):
            logger.warning("⚠️  Ignoring non-list args for mcpServers entry %r", name)
            args = ()
        providers.append(Provider(
            name=name,
            command=str(entry.get("command") or ""),
            args=tuple(str(arg) for arg in args),
            env={str(k): str(v) for k, v in env.items()} if isinstance(env, dict) else None,
            capabilities=infer_capabilities(name),
            installed=True,
        ))
    return providers


def discover_providers(config: Optional[Dict[str, Any]]) -> List[Provider]:
    """Merge discovered providers with the well-known catalogue by name."""
    providers = providers_from_host_config(config)
    discovered_names = [p.name for p in providers]

    for known in KNOWN_PROVIDERS:
        if known.name in discovered_names:
            continue
        providers.append(Provider(
            name=known.name,
            command=known.command,
            args=known.args,
            capabilities=known.capabilities,
            installed=any(known.match in name for name in discovered_names),
        ))

    logger.info(
        "🔌 Discovered %d providers (%d installed)",
        len(providers), sum(1 for p in providers if p.installed),
    )
    return providers
