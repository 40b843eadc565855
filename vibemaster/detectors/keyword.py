import logging
from typing import Dict, List

from vibemaster.models import ClassificationScore, VibeCategory

logger = logging.getLogger(__name__)

KEYWORDS: Dict[VibeCategory, List[str]] = {
    VibeCategory.PROFESSIONAL: ['regards', 'sincerely', 'deadline', 'objective', 'workflow', 'leverage', 'synergy'],
    VibeCategory.CASUAL: ['hey', 'lol', 'cool', 'stuff', 'gonna', 'wanna', 'yeah', 'vibes'],
    VibeCategory.AGGRESSIVE: ['stupid', 'idiot', 'wrong', 'fail', 'bad', 'hate', 'worst', 'shut up'],
    VibeCategory.HELPFUL: ['assist', 'guide', 'help', 'support', 'solution', 'recommend', 'tip'],
    # Sarcasm is context dependent; these are weak hints at best
    VibeCategory.SARCASTIC: ['great job', 'obviously', 'clearly', 'sure', 'wow'],
    VibeCategory.ENTHUSIASTIC: ['awesome', 'amazing', 'love', 'fantastic', 'excited', 'great!', 'wow!'],
}

NEUTRAL_REASONING = "No specific vibe keywords detected."


class KeywordDetector:
    """Score text by counting trigger words per category."""

    name = "KeywordDetector"

    def __init__(self, keywords: Dict[VibeCategory, List[str]] | None = None):
        self.keywords = keywords if keywords is not None else KEYWORDS

    async def detect(self, text: str) -> List[ClassificationScore]:
        lower_text = text.lower()
        scores: List[ClassificationScore] = []

        for category, words in self.keywords.items():
            if category is VibeCategory.NEUTRAL:
                continue
            found = [word for word in words if word in lower_text]
            if found:
                scores.append(ClassificationScore(
                    category=category,
                    confidence=round(min(len(found) * 0.2, 1.0), 2),
                    reasoning=f"Found keywords: {', '.join(found)}",
                ))

        if not scores:
            scores.append(ClassificationScore(
                category=VibeCategory.NEUTRAL,
                confidence=0.5,
                reasoning=NEUTRAL_REASONING,
            ))

        logger.debug("%s produced %d scores", self.name, len(scores))
        return scores
