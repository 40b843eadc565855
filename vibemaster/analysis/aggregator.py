"""
Vibe analysis: run every registered detector, then merge their scores.

Aggregation sums confidences per category. The raw sum decides the primary
category; the displayed confidence is clamped to 1.0.
"""
import logging
from typing import Dict, Iterable, List, Optional

from vibemaster.models import AnalysisResult, ClassificationScore, Detector, VibeCategory

logger = logging.getLogger(__name__)

_DECLARATION_ORDER = {category: index for index, category in enumerate(VibeCategory)}


def aggregate_scores(scores: Iterable[ClassificationScore]) -> AnalysisResult:
    """Merge per-detector scores into a single ranked AnalysisResult.

    Args:
        scores: Scores in detector registration order, then emission order

    Returns:
        AnalysisResult with at most one score per category
    """
    totals: Dict[VibeCategory, float] = {}
    reasons: Dict[VibeCategory, List[str]] = {}

    for score in scores:
        totals[score.category] = totals.get(score.category, 0.0) + score.confidence
        reasons.setdefault(score.category, []).append(score.reasoning)

    if not totals:
        return AnalysisResult(
            primary_category=VibeCategory.NEUTRAL,
            scores=[],
            summary=_summary(VibeCategory.NEUTRAL, 0.0, 0),
        )

    # Equal raw sums fall back to enum declaration order
    primary = min(totals, key=lambda c: (-totals[c], _DECLARATION_ORDER[c]))

    final_scores = [
        ClassificationScore(
            category=category,
            confidence=min(total, 1.0),
            reasoning=" | ".join(reasons[category]),
        )
        for category, total in totals.items()
    ]
    final_scores.sort(key=lambda s: s.confidence, reverse=True)

    return AnalysisResult(
        primary_category=primary,
        scores=final_scores,
        summary=_summary(primary, totals[primary], len(final_scores)),
    )


def _summary(primary: VibeCategory, max_confidence: float, indicators: int) -> str:
    return (
        f"Identified as {primary.value} with confidence score "
        f"{max_confidence:.2f} based on {indicators} indicators"
    )


class VibeAnalyzer:
    """Holds an ordered set of detectors and analyzes text with all of them."""

    def __init__(self, detectors: Optional[Iterable[Detector]] = None):
        self.detectors: List[Detector] = list(detectors) if detectors is not None else []

    def register_detector(self, detector: Detector) -> None:
        self.detectors.append(detector)
        logger.debug("Registered detector %s", getattr(detector, "name", type(detector).__name__))

    async def analyze(self, text: str) -> AnalysisResult:
        """Run detectors one after another and aggregate their scores.

        A detector that raises aborts the analysis; no partial result is returned.
        """
        all_scores: List[ClassificationScore] = []
        for detector in self.detectors:
            all_scores.extend(await detector.detect(text))

        result = aggregate_scores(all_scores)
        logger.info("🎭 %s", result.summary)
        return result
