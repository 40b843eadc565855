"""Tools package: provider invokers and the tool-call surface.

`build_vibemaster_tools(system)` exposes the facade operations as LangChain tools;
`get_tools()` assembles them from the registered builders.
Invokers (`StaticProviderInvoker`, `MCPProviderInvoker`) perform single provider calls.
"""

from .get_tools import get_tools
from .invokers import ProviderCallError, StaticProviderInvoker
from .mcp_tools import MCPProviderInvoker

__all__ = ["get_tools", "ProviderCallError", "StaticProviderInvoker", "MCPProviderInvoker"]
