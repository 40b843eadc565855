"""Utilities for normalizing provider/tool responses to plain text."""

from __future__ import annotations
import json
from typing import Any
import logging

logger = logging.getLogger(__name__)


def format_response(resp: object) -> str:
    """Normalize results returned by MCP tools into a string.

    Accepts strings, MCP content blocks (dicts with `type`/`text`), lists of
    blocks, tuples of `(content, artifact)` and objects exposing `content`
    or `text`.
    """
    try:
        if isinstance(resp, str):
            return resp
        if isinstance(resp, tuple) and len(resp) == 2:
            return format_response(resp[0])
        if isinstance(resp, dict):
            if "text" in resp:
                return str(resp["text"])
            if "content" in resp:
                return format_response(resp["content"])
            return json.dumps(resp, indent=2, default=str)
        if isinstance(resp, list):
            return "\n".join(format_response(item) for item in resp)
        if hasattr(resp, "content"):
            return format_response(getattr(resp, "content"))
        if hasattr(resp, "text"):
            return str(getattr(resp, "text"))
        return str(resp)
    except Exception:
        logger.exception("Error formatting response")
        return str(resp)


def format_payload(payload: Any) -> str:
    """Render a provider payload for the combined answer document."""
    if isinstance(payload, str):
        return payload
    try:
        return json.dumps(payload, indent=2, default=str)
    except (TypeError, ValueError):
        return str(payload)
