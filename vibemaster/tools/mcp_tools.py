"""
MCP provider invocation using langchain_mcp_adapters

Each provider is reached over stdio with its configured command, args and env.
The tool that best matches the query is called with the query as argument.
"""
import logging
import re
from typing import Any, Dict, List, Optional
from langchain_core.tools.base import BaseTool
from langchain_mcp_adapters.client import MultiServerMCPClient
from langchain_mcp_adapters.sessions import Connection

from vibemaster.models import OrchestratorRequest, Provider, ProviderResponse
from vibemaster.tools.invokers import ProviderCallError
from vibemaster.utils.response_formatter import format_response

logger = logging.getLogger(__name__)

QUERY_ARGUMENT_NAMES = ("query", "topic", "libraryName", "q", "text", "input", "question")
_WORD = re.compile(r"[a-z0-9]+")


def provider_connection(provider: Provider) -> Connection:
    """Build a stdio connection for a provider's invocation descriptor."""
    connection: Dict[str, Any] = {
        "transport": "stdio",
        "command": provider.command,
        "args": list(provider.args),
    }
    if provider.env:
        connection["env"] = dict(provider.env)
    return connection  # type: ignore[return-value]


def _words(text: str) -> set:
    return set(_WORD.findall(text.lower()))


def select_tool(tools: List[BaseTool], query: str) -> Optional[BaseTool]:
    """Pick the tool sharing most words with the query; first tool wins ties."""
    if not tools:
        return None
    query_words = _words(query)
    return max(
        tools,
        key=lambda t: len(query_words & _words(f"{t.name} {t.description or ''}")),
    )


def query_argument(tool: BaseTool) -> Optional[str]:
    """Return the name of the argument that should receive the query."""
    properties: Dict[str, Any] = tool.args or {}
    for name in QUERY_ARGUMENT_NAMES:
        if name in properties:
            return name
    schema = tool.args_schema if isinstance(tool.args_schema, dict) else {}
    for name in schema.get("required", []):
        if properties.get(name, {}).get("type") == "string":
            return name
    return None


class MCPProviderInvoker:
    """Invoke providers as MCP servers."""

    confidence = 0.9

    def client_for(self, provider: Provider) -> MultiServerMCPClient:
        return MultiServerMCPClient(connections={provider.name: provider_connection(provider)})

    async def invoke(self, provider: Provider, request: OrchestratorRequest) -> ProviderResponse:
        if not provider.command:
            raise ProviderCallError(f"Provider {provider.name} has no command configured")

        client = self.client_for(provider)
        tools = await client.get_tools(server_name=provider.name)
        logger.info("✅ Loaded %d MCP tools from %s", len(tools), provider.name)

        tool = select_tool(tools, request.query)
        if tool is None:
            raise ProviderCallError(f"Provider {provider.name} exposes no tools")
        argument = query_argument(tool)
        if argument is None:
            raise ProviderCallError(f"Tool {tool.name} on {provider.name} takes no query argument")

        logger.info("📨 Calling %s.%s", provider.name, tool.name)
        result = await tool.ainvoke({argument: request.query})
        return ProviderResponse.from_parts(provider, format_response(result), self.confidence)
