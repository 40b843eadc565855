"""Project and provider discovery: host config → providers, project dir → stack"""
from .provider_discovery import discover_providers, infer_capabilities, load_host_config, providers_from_host_config
from .stack_detector import detect_project, detect_stack, get_git_info

__all__ = [
    "discover_providers",
    "infer_capabilities",
    "load_host_config",
    "providers_from_host_config",
    "detect_project",
    "detect_stack",
    "get_git_info",
]
