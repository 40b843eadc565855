"""
VibeMaster Core - vibe analysis and MCP provider orchestration

This is a pure library module with NO CLI or server code.
Import this in your CLI, server, or any other application.

Usage:
    from vibemaster import VibeMaster

    # initialize(), analyze() and orchestrate() are async
    # await system.initialize(); await system.analyze(...)
"""

from vibemaster.api import VibeMaster

__all__ = ["VibeMaster"]
