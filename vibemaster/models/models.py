from __future__ import annotations
import time
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import List, Protocol, Callable, Any, Dict, Optional, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from langchain.tools import BaseTool


class VibeCategory(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    AGGRESSIVE = "aggressive"
    HELPFUL = "helpful"
    SARCASTIC = "sarcastic"
    ENTHUSIASTIC = "enthusiastic"
    NEUTRAL = "neutral"


class RequestType(str, Enum):
    QUERY = "query"
    IMPLEMENT = "implement"
    DEBUG = "debug"
    EXPLAIN = "explain"


@dataclass
class ClassificationScore:
    category: VibeCategory
    confidence: float
    reasoning: str

    def to_serializable(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
        }


@dataclass
class AnalysisResult:
    primary_category: VibeCategory
    scores: List[ClassificationScore]
    summary: str

    def to_serializable(self) -> Dict[str, Any]:
        return {
            "primary_category": self.primary_category.value,
            "scores": [s.to_serializable() for s in self.scores],
            "summary": self.summary,
        }


@dataclass(frozen=True)
class Provider:
    """An external capability provider (an MCP server). Identity is the name."""
    name: str
    command: str = field(default="", compare=False)
    args: tuple = field(default=(), compare=False)
    env: Optional[Dict[str, str]] = field(default=None, compare=False)
    capabilities: tuple = field(default=(), compare=False)
    installed: bool = field(default=False, compare=False)

    def has_capability(self, tag: str) -> bool:
        return tag in self.capabilities

    def to_serializable(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "command": self.command,
            "args": list(self.args),
            "env": dict(self.env) if self.env else None,
            "capabilities": list(self.capabilities),
            "installed": self.installed,
        }


@dataclass
class RoutingStep:
    provider: Provider
    priority: int
    reason: str

    def to_serializable(self) -> Dict[str, Any]:
        return {
            "provider": self.provider.name,
            "priority": self.priority,
            "reason": self.reason,
        }


RoutingPlan = List[RoutingStep]


@dataclass
class StackInfo:
    frameworks: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    package_manager: str = "unknown"
    dependencies: Dict[str, str] = field(default_factory=dict)


@dataclass
class GitRepo:
    owner: str
    repo: str
    branch: str = "main"


@dataclass
class ProjectContext:
    root_path: str
    stack: StackInfo
    git_repo: Optional[GitRepo] = None

    def to_serializable(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OrchestratorRequest:
    query: str
    type: RequestType = RequestType.QUERY
    context: Optional[ProjectContext] = None
    files: List[str] = field(default_factory=list)


@dataclass
class ProviderResponse:
    source: str
    payload: Any
    confidence: float
    timestamp: float = field(default_factory=time.monotonic)

    @classmethod
    def from_parts(cls, provider: Provider, payload: Any, confidence: float) -> "ProviderResponse":
        return cls(source=provider.name, payload=payload, confidence=confidence)

    def to_serializable(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CombinedResult:
    answer: str
    sources: List[ProviderResponse]
    suggestions: List[str]

    def to_serializable(self) -> Dict[str, Any]:
        return {
            "answer": self.answer,
            "sources": [s.to_serializable() for s in self.sources],
            "suggestions": list(self.suggestions),
        }


# Pluggable seams: detectors score text, invokers call providers
class Detector(Protocol):
    name: str
    async def detect(self, text: str) -> List[ClassificationScore]: ...


class ProviderInvoker(Protocol):
    async def invoke(self, provider: Provider, request: OrchestratorRequest) -> ProviderResponse: ...


# Minimal protocol describing the parts of the facade used by tool builders
class VibeMasterProtocol(Protocol):
    async def analyze(self, text: str) -> AnalysisResult: ...
    async def orchestrate(self, request: OrchestratorRequest | str) -> CombinedResult: ...
    async def smart_context(self, topic: str) -> CombinedResult: ...
    def get_installed_providers(self) -> List[Provider]: ...
    def get_available_providers(self) -> List[Provider]: ...
    def detect_stack(self, path: Optional[str] = None) -> ProjectContext: ...


# Tools may be callables or langchain BaseTool objects
ToolCallable = Union[Callable[..., Any], "BaseTool"]
ToolBuilder = Callable[[VibeMasterProtocol], List[ToolCallable]]
