"""
Core API for VibeMaster.

This package provides a clean, interface-agnostic API that can be used
by CLI, web servers, agent tools, or any other interface.
"""
from .vibemaster import VibeMaster

__all__ = ["VibeMaster"]
