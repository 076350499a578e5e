"""Core decision module."""

from .decision import Decision, DecisionState, ratings_from_nested, ratings_to_nested
from .engine import ScoringEngine

__all__ = ["Decision", "DecisionState", "ScoringEngine", "ratings_from_nested", "ratings_to_nested"]
