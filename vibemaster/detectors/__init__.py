"""Rule-based vibe detectors.

Each detector exposes a `name` and an async `detect(text)` returning a list of
`ClassificationScore`. `default_detectors()` returns them in registration order.
"""
from typing import List

from vibemaster.models import Detector
from .keyword import KeywordDetector
from .pattern import PatternDetector


def default_detectors() -> List[Detector]:
    return [KeywordDetector(), PatternDetector()]


__all__ = ["KeywordDetector", "PatternDetector", "default_detectors"]
