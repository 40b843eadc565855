import pytest

from vibemaster.models import OrchestratorRequest, Provider
from vibemaster.routing import IntelligentRouter, RoutingRule


def _provider(name, *caps, installed=True):
    return Provider(name=name, command="npx", capabilities=tuple(caps), installed=installed)


@pytest.fixture
def providers():
    return [
        _provider("offline-docs", "docs", installed=False),
        _provider("github", "github", "issues", "repos"),
        _provider("context7", "docs", "context", "search"),
        _provider("memory-keeper", "memory", "context", "persistence"),
        _provider("qdrant", "semantic", "search"),
    ]


def _route(query, providers):
    return IntelligentRouter().route(OrchestratorRequest(query=query), providers)


def test_docs_outranks_memory(providers):
    plan = _route("please remember what we did with the API", providers)
    assert [(s.provider.name, s.priority) for s in plan] == [("context7", 9), ("memory-keeper", 8)]


def test_issue_routes_to_github_first(providers):
    plan = _route("show me an open issue", providers)
    assert plan[0].priority == 10
    assert plan[0].reason == "GitHub issue/PR mentioned"
    assert plan[0].provider.name == "github"


def test_only_installed_providers_are_selected(providers):
    plan = _route("how to implement pagination", providers)
    assert [s.provider.name for s in plan] == ["context7"]


def test_code_search_rule(providers):
    plan = _route("find code similar to this", providers)
    assert [(s.provider.name, s.reason) for s in plan] == [("qdrant", "Code search needed")]


def test_pr_substring_matches_inside_words(providers):
    plan = _route("improve the api", providers)
    assert [s.priority for s in plan] == [10, 9]


def test_default_plan_when_no_rule_fires(providers):
    plan = _route("hello there", providers)
    assert [(s.provider.name, s.priority, s.reason) for s in plan] == [
        ("context7", 5, "Default context"),
        ("memory-keeper", 5, "Default memory"),
    ]


def test_rule_without_installed_provider_is_dropped():
    providers = [_provider("context7", "docs"), _provider("memory-keeper", "memory")]
    plan = _route("show me an open issue", providers)
    assert [s.reason for s in plan] == ["Default context", "Default memory"]


def test_default_does_not_repeat_a_provider():
    providers = [_provider("all-in-one", "docs", "memory")]
    plan = _route("hello there", providers)
    assert [(s.provider.name, s.reason) for s in plan] == [("all-in-one", "Default context")]


def test_empty_plan_without_installed_providers():
    assert _route("how to implement x", [_provider("context7", "docs", installed=False)]) == []


def test_plan_is_sorted_by_priority(providers):
    queries = [
        "find a similar example for the api, remember the previous pull request",
        "we did this before",
        "nothing to see",
    ]
    for query in queries:
        priorities = [s.priority for s in _route(query, providers)]
        assert priorities == sorted(priorities, reverse=True)


def test_equal_priorities_keep_rule_order(providers):
    router = IntelligentRouter(rules=[
        RoutingRule(("alpha",), "memory", 3, "first"),
        RoutingRule(("beta",), "docs", 3, "second"),
        RoutingRule(("gamma",), "github", 4, "third"),
    ])
    plan = router.route(OrchestratorRequest(query="alpha beta gamma"), providers)
    assert [s.reason for s in plan] == ["third", "first", "second"]
