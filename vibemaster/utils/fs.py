import os
import sys
from pathlib import Path
from typing import List
import logging

logger = logging.getLogger(__name__)

HOST_CONFIG_ENV = "VIBEMASTER_HOST_CONFIG"
PROJECT_PATH_ENV = "VIBEMASTER_PROJECT_PATH"


def project_directory() -> str:
    """Return the project directory scanned at startup."""
    configured = os.getenv(PROJECT_PATH_ENV)
    if configured:
        candidate = Path(configured).expanduser()
        if candidate.is_dir():
            return str(candidate.resolve())
        logger.warning("⚠️ %s=%s is not a directory; using cwd", PROJECT_PATH_ENV, configured)
    return str(Path.cwd())


def host_config_candidates() -> List[Path]:
    """Return host configuration files to try, most specific first."""
    configured = os.getenv(HOST_CONFIG_ENV)
    if configured:
        return [Path(configured).expanduser()]

    home = Path.home()
    candidates = []
    if sys.platform == "darwin":
        candidates.append(home / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json")
    elif sys.platform.startswith("win"):
        appdata = os.getenv("APPDATA")
        if appdata:
            candidates.append(Path(appdata) / "Claude" / "claude_desktop_config.json")
    else:
        candidates.append(home / ".config" / "Claude" / "claude_desktop_config.json")
    candidates.append(home / ".cursor" / "mcp.json")
    return candidates
