import re
from typing import List

from vibemaster.models import ClassificationScore, VibeCategory

_UPPER = re.compile(r"[A-Z]")
_ALPHA = re.compile(r"[A-Za-z]")


class PatternDetector:
    """Stateless rules over surface features: caps, exclamation marks, ellipses.

    Rules fire independently and are emitted in a fixed order
    (caps, exclamations, ellipsis).
    """

    name = "PatternDetector"

    async def detect(self, text: str) -> List[ClassificationScore]:
        scores: List[ClassificationScore] = []

        upper_count = len(_UPPER.findall(text))
        total_count = len(_ALPHA.findall(text))
        if total_count > 10 and upper_count / total_count > 0.6:
            scores.append(ClassificationScore(
                category=VibeCategory.AGGRESSIVE,
                confidence=0.8,
                reasoning="Excessive use of ALL CAPS.",
            ))

        exclamation_count = text.count("!")
        if exclamation_count > 2:
            scores.append(ClassificationScore(
                category=VibeCategory.ENTHUSIASTIC,
                confidence=round(min(exclamation_count * 0.15, 0.9), 2),
                reasoning="Multiple exclamation marks detected.",
            ))

        if "..." in text:
            scores.append(ClassificationScore(
                category=VibeCategory.CASUAL,
                confidence=0.3,
                reasoning="Uses ellipses, conversational style.",
            ))

        return scores
