"""Filesystem helpers and response normalisation"""
from .fs import host_config_candidates, project_directory
from .response_formatter import format_response, format_payload

__all__ = ["host_config_candidates", "project_directory", "format_response", "format_payload"]
