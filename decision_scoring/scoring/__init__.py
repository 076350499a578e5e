"""Scoring and ranking module."""

from .weights import WeightNormalizer, normalize_weights, as_percentages
from .aggregator import ScoreAggregator
from .ranker import Ranker

__all__ = [
    'WeightNormalizer',
    'normalize_weights',
    'as_percentages',
    'ScoreAggregator',
    'Ranker'
]
