import logging
from typing import List

from vibemaster.models import ToolBuilder, ToolCallable, VibeMasterProtocol
from .vibe_tools import build_vibemaster_tools

logger = logging.getLogger(__name__)

TOOL_BUILDERS: List[ToolBuilder] = [build_vibemaster_tools]


def get_tools(system: VibeMasterProtocol) -> List[ToolCallable]:
    """Expose the operations of `system` as LangChain tools, builder by builder."""
    tools: List[ToolCallable] = [tool for builder in TOOL_BUILDERS for tool in builder(system)]
    logger.info("✅ Loaded %d tools.", len(tools))
    return tools
