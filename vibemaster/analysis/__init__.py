"""Score aggregation across detectors"""
from .aggregator import VibeAnalyzer, aggregate_scores

__all__ = ["VibeAnalyzer", "aggregate_scores"]
