import json

import pytest

from vibemaster import VibeMaster
from vibemaster.api.vibemaster import invoker_from_env
from vibemaster.models import OrchestratorRequest, RequestType, VibeCategory
from vibemaster.tools import MCPProviderInvoker, StaticProviderInvoker


class _FlakyInvoker:
    async def invoke(self, provider, request):
        raise ConnectionError(f"{provider.name} unreachable")


@pytest.fixture
def host_config(tmp_path):
    path = tmp_path / "mcp.json"
    path.write_text(json.dumps({
        "mcpServers": {
            "context7": {"command": "npx", "args": ["-y", "@upstash/context7-mcp"]},
            "memory-keeper": {"command": "npx", "args": ["-y", "mcp-memory-keeper"]},
        }
    }))
    return path


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    (root / "requirements.txt").write_text("flask\n")
    return root


@pytest.mark.asyncio
async def test_initialize_detects_project_and_providers(host_config, project):
    system = VibeMaster(invoker=StaticProviderInvoker(), host_config_paths=[host_config])
    context = await system.initialize(str(project))

    assert system.is_initialized()
    assert context.stack.frameworks == ["Flask"]
    assert [p.name for p in system.get_installed_providers()] == ["context7", "memory-keeper"]
    assert [p.name for p in system.list_providers()] == ["context7", "memory-keeper", "github"]


@pytest.mark.asyncio
async def test_registry_is_built_once_per_session(host_config, project):
    system = VibeMaster(invoker=StaticProviderInvoker(), host_config_paths=[host_config])
    await system.initialize(str(project))
    registry = system.registry

    await system.initialize(str(project))
    assert system.registry is registry

    await system.initialize(str(project), reload_providers=True)
    assert system.registry is not registry


@pytest.mark.asyncio
async def test_orchestrate_requires_initialize():
    system = VibeMaster(invoker=StaticProviderInvoker())
    with pytest.raises(RuntimeError, match="not initialized"):
        await system.orchestrate("how to implement auth")
    with pytest.raises(RuntimeError):
        system.list_providers()


@pytest.mark.asyncio
async def test_analyze_does_not_need_initialize():
    result = await VibeMaster(invoker=StaticProviderInvoker()).analyze("THIS IS ABSOLUTELY TERRIBLE")
    assert result.primary_category is VibeCategory.AGGRESSIVE


@pytest.mark.asyncio
async def test_orchestrate_routes_and_combines(host_config, project):
    system = VibeMaster(invoker=StaticProviderInvoker(), host_config_paths=[host_config])
    await system.initialize(str(project))

    result = await system.orchestrate(
        OrchestratorRequest(query="please remember what we did with the API", type=RequestType.DEBUG)
    )
    assert [r.source for r in result.sources] == ["context7", "memory-keeper"]
    assert result.sources[0].payload["request_type"] == "debug"
    assert result.answer.startswith("# Response to: please remember what we did with the API")


@pytest.mark.asyncio
async def test_orchestrate_attaches_session_context(host_config, project):
    system = VibeMaster(invoker=StaticProviderInvoker(), host_config_paths=[host_config])
    await system.initialize(str(project))
    request = OrchestratorRequest(query="hello")
    system.route(request)
    assert request.context is system.context


@pytest.mark.asyncio
async def test_orchestrate_survives_provider_failures(host_config, project):
    system = VibeMaster(invoker=_FlakyInvoker(), host_config_paths=[host_config])
    await system.initialize(str(project))

    result = await system.orchestrate("how to implement auth")
    assert result.sources == []
    assert len(result.suggestions) == 3


@pytest.mark.asyncio
async def test_smart_context_wraps_topic(host_config, project):
    system = VibeMaster(invoker=StaticProviderInvoker(), host_config_paths=[host_config])
    await system.initialize(str(project))
    result = await system.smart_context("caching")
    assert result.answer.startswith("# Response to: Provide context about: caching")


def test_detect_stack_defaults_to_session_project(tmp_path):
    (tmp_path / "Cargo.toml").write_text("[package]\n")
    system = VibeMaster(invoker=StaticProviderInvoker())
    assert system.detect_stack(str(tmp_path)).stack.package_manager == "cargo"


def test_invoker_from_env(monkeypatch):
    monkeypatch.setenv("VIBEMASTER_INVOKER", "mcp")
    assert isinstance(invoker_from_env(), MCPProviderInvoker)
    monkeypatch.setenv("VIBEMASTER_INVOKER", "bogus")
    assert isinstance(invoker_from_env(), StaticProviderInvoker)
    monkeypatch.delenv("VIBEMASTER_INVOKER")
    assert isinstance(invoker_from_env(), StaticProviderInvoker)
