import pytest

from vibemaster.analysis import VibeAnalyzer, aggregate_scores
from vibemaster.detectors import KeywordDetector, PatternDetector
from vibemaster.models import ClassificationScore, VibeCategory


def _score(category: VibeCategory, confidence: float, reasoning: str = "r") -> ClassificationScore:
    return ClassificationScore(category=category, confidence=confidence, reasoning=reasoning)


class _StaticDetector:
    def __init__(self, name, scores):
        self.name = name
        self._scores = scores

    async def detect(self, text):
        return list(self._scores)


class _BrokenDetector:
    name = "Broken"

    async def detect(self, text):
        raise ValueError("boom")


def test_aggregate_sums_and_joins_reasoning():
    result = aggregate_scores([
        _score(VibeCategory.CASUAL, 0.6, "a"),
        _score(VibeCategory.ENTHUSIASTIC, 0.45, "c"),
        _score(VibeCategory.CASUAL, 0.3, "b"),
    ])
    assert result.primary_category is VibeCategory.CASUAL
    assert [s.category for s in result.scores] == [VibeCategory.CASUAL, VibeCategory.ENTHUSIASTIC]
    assert result.scores[0].confidence == pytest.approx(0.9)
    assert result.scores[0].reasoning == "a | b"
    assert result.summary == "Identified as casual with confidence score 0.90 based on 2 indicators"


def test_aggregate_clamps_display_but_ranks_by_raw_sum():
    result = aggregate_scores([
        _score(VibeCategory.CASUAL, 1.0),
        _score(VibeCategory.AGGRESSIVE, 0.8),
        _score(VibeCategory.AGGRESSIVE, 0.4),
    ])
    assert result.primary_category is VibeCategory.AGGRESSIVE
    assert [s.confidence for s in result.scores] == [1.0, 1.0]
    # equal display confidence keeps first-seen order
    assert [s.category for s in result.scores] == [VibeCategory.CASUAL, VibeCategory.AGGRESSIVE]
    assert "confidence score 1.20" in result.summary


def test_aggregate_tie_uses_category_declaration_order():
    result = aggregate_scores([
        _score(VibeCategory.HELPFUL, 0.2),
        _score(VibeCategory.PROFESSIONAL, 0.2),
    ])
    assert result.primary_category is VibeCategory.PROFESSIONAL


def test_aggregate_without_scores():
    result = aggregate_scores([])
    assert result.primary_category is VibeCategory.NEUTRAL
    assert result.scores == []
    assert result.summary == "Identified as neutral with confidence score 0.00 based on 0 indicators"


@pytest.mark.asyncio
async def test_analyzer_combines_default_detectors():
    analyzer = VibeAnalyzer([KeywordDetector(), PatternDetector()])
    result = await analyzer.analyze("hey this is so cool!!! ...")

    assert result.primary_category is VibeCategory.CASUAL
    casual = result.scores[0]
    assert casual.category is VibeCategory.CASUAL
    assert casual.confidence == pytest.approx(0.7)
    assert casual.reasoning == "Found keywords: hey, cool | Uses ellipses, conversational style."
    assert result.scores[1].category is VibeCategory.ENTHUSIASTIC


@pytest.mark.asyncio
async def test_analyzer_final_scores_do_not_depend_on_registration_order():
    text = "WOW, THIS IS AWESOME, I LOVE IT!!!! ... thanks for the help"
    forward = await VibeAnalyzer([KeywordDetector(), PatternDetector()]).analyze(text)
    backward = await VibeAnalyzer([PatternDetector(), KeywordDetector()]).analyze(text)

    def as_set(result):
        return {(s.category, round(s.confidence, 6)) for s in result.scores}

    assert as_set(forward) == as_set(backward)
    assert forward.primary_category is backward.primary_category


@pytest.mark.asyncio
async def test_analyzer_is_idempotent():
    analyzer = VibeAnalyzer([KeywordDetector(), PatternDetector()])
    first = await analyzer.analyze("Best regards, see the deadline...")
    second = await analyzer.analyze("Best regards, see the deadline...")
    assert first == second


@pytest.mark.asyncio
async def test_analyzer_keeps_registration_order_in_reasoning():
    analyzer = VibeAnalyzer()
    analyzer.register_detector(_StaticDetector("one", [_score(VibeCategory.SARCASTIC, 0.1, "first")]))
    analyzer.register_detector(_StaticDetector("two", [_score(VibeCategory.SARCASTIC, 0.2, "second")]))
    result = await analyzer.analyze("anything")
    assert result.scores[0].reasoning == "first | second"


@pytest.mark.asyncio
async def test_failing_detector_aborts_analysis():
    analyzer = VibeAnalyzer([KeywordDetector(), _BrokenDetector()])
    with pytest.raises(ValueError, match="boom"):
        await analyzer.analyze("hello")
