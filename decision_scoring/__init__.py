"""Decision Scoring - weighted-criteria scoring and ranking of decision options."""

__version__ = "1.0.0"

from .core import Decision, DecisionState, ScoringEngine
from .models import Criterion, Option, OptionScore, Results, Margin, MarginBucket, NotApplicable
from .errors import (
    DecisionScoringError,
    InvalidWeights,
    MissingRating,
    InvalidRating,
    EmptyOptionSet,
    EmptyCriterionSet,
    DuplicateId,
    UnknownReference,
    StaleResults,
)
from .utils import load_config, setup_logging

__all__ = [
    "Decision", "DecisionState", "ScoringEngine",
    "Criterion", "Option", "OptionScore", "Results", "Margin", "MarginBucket", "NotApplicable",
    "DecisionScoringError", "InvalidWeights", "MissingRating", "InvalidRating",
    "EmptyOptionSet", "EmptyCriterionSet", "DuplicateId", "UnknownReference", "StaleResults",
    "load_config", "setup_logging",
]
