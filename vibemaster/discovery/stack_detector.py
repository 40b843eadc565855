"""Read-only detection of a project's technology stack and GitHub remote."""
import json
import logging
import re
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from vibemaster.models import GitRepo, ProjectContext, StackInfo

logger = logging.getLogger(__name__)

_GITHUB_REMOTE = re.compile(r"url = .*github\.com[:/](.+?)/(.+?)\.git")
_HEAD_REF = re.compile(r"ref:\s*refs/heads/(.+)")

# npm dependency -> display name; versioned frameworks get the version appended
_NPM_FRAMEWORKS = (
    ("next", "Next.js", True),
    ("react", "React", True),
    ("vue", "Vue", True),
    ("express", "Express", True),
    ("@supabase/supabase-js", "Supabase", False),
    ("stripe", "Stripe", False),
)
_PYTHON_FRAMEWORKS = (("django", "Django"), ("flask", "Flask"), ("fastapi", "FastAPI"))


def _read_json(path: Path) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("⚠️  Could not parse %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("⚠️  Could not read %s: %s", path, e)
        return None


def _add(items: list, value: str) -> None:
    if value not in items:
        items.append(value)


def _scan_python_frameworks(text: str, stack: StackInfo) -> None:
    lower = text.lower()
    for needle, label in _PYTHON_FRAMEWORKS:
        if needle in lower:
            _add(stack.frameworks, label)


def detect_stack(project_path: str) -> StackInfo:
    """Inspect manifest and marker files under project_path."""
    root = Path(project_path)
    stack = StackInfo()

    package_json = root / "package.json"
    if package_json.is_file():
        stack.package_manager = "npm"
        _add(stack.languages, "JavaScript/TypeScript")
        pkg = _read_json(package_json) or {}
        deps: Dict[str, str] = {}
        for key in ("dependencies", "devDependencies"):
            section = pkg.get(key)
            if isinstance(section, dict):
                deps.update({str(k): str(v) for k, v in section.items()})
        stack.dependencies = deps
        for dep, label, versioned in _NPM_FRAMEWORKS:
            if dep in deps:
                stack.frameworks.append(f"{label} {deps[dep]}" if versioned else label)

    requirements = root / "requirements.txt"
    if requirements.is_file():
        stack.package_manager = "pip"
        _add(stack.languages, "Python")
        _scan_python_frameworks(_read_text(requirements) or "", stack)

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        _add(stack.languages, "Python")
        if stack.package_manager == "unknown":
            stack.package_manager = "pip"
        try:
            data = tomllib.loads(_read_text(pyproject) or "")
        except tomllib.TOMLDecodeError as e:
            logger.warning("⚠️  Could not parse %s: %s", pyproject, e)
            data = {}
        project = data.get("project")
        dependencies = project.get("dependencies", []) if isinstance(project, dict) else []
        if isinstance(dependencies, list):
            _scan_python_frameworks("\n".join(str(d) for d in dependencies), stack)

    if (root / "go.mod").is_file():
        _add(stack.languages, "Go")
        stack.package_manager = "go mod"

    if (root / "Cargo.toml").is_file():
        _add(stack.languages, "Rust")
        stack.package_manager = "cargo"

    return stack


def get_git_info(project_path: str) -> Optional[GitRepo]:
    """Return the GitHub owner/repo/branch of project_path, if any."""
    git_dir = Path(project_path) / ".git"
    config_path = git_dir / "config"
    if not config_path.is_file():
        return None

    config = _read_text(config_path)
    if config is None:
        return None
    match = _GITHUB_REMOTE.search(config)
    if not match:
        return None

    branch = "main"
    head = git_dir / "HEAD"
    if head.is_file():
        head_match = _HEAD_REF.match((_read_text(head) or "").strip())
        if head_match:
            branch = head_match.group(1)

    return GitRepo(owner=match.group(1), repo=match.group(2), branch=branch)


def detect_project(project_path: str) -> ProjectContext:
    """Build the full project context for project_path."""
    logger.info("🔍 Detecting stack for %s", project_path)
    return ProjectContext(
        root_path=str(project_path),
        stack=detect_stack(project_path),
        git_repo=get_git_info(project_path),
    )
