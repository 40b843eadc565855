"""Data models and schemas"""
from .models import (
    VibeCategory,
    RequestType,
    ClassificationScore,
    AnalysisResult,
    Provider,
    RoutingStep,
    RoutingPlan,
    StackInfo,
    GitRepo,
    ProjectContext,
    OrchestratorRequest,
    ProviderResponse,
    CombinedResult,
    Detector,
    ProviderInvoker,
    VibeMasterProtocol,
    ToolCallable,
    ToolBuilder,
)

__all__ = [
    "VibeCategory",
    "RequestType",
    "ClassificationScore",
    "AnalysisResult",
    "Provider",
    "RoutingStep",
    "RoutingPlan",
    "StackInfo",
    "GitRepo",
    "ProjectContext",
    "OrchestratorRequest",
    "ProviderResponse",
    "CombinedResult",
    "Detector",
    "ProviderInvoker",
    "VibeMasterProtocol",
    "ToolCallable",
    "ToolBuilder",
]
