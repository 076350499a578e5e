"""Scoring engine orchestrator.

Coordinates all stages: validation -> weight normalization -> aggregation ->
ranking -> margin classification. Every stage is synchronous and pure; the
only state touched is the decision record passed to :meth:`ScoringEngine.recompute`.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from ..errors import DecisionScoringError, EmptyCriterionSet, EmptyOptionSet
from ..models import Results
from ..scoring import Ranker, ScoreAggregator, WeightNormalizer
from .decision import Decision

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Scores decision records and keeps their cached results consistent."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize scoring engine.

        Args:
            config: Application configuration; the ``ratings`` and ``ranking``
                sections are used
        """
        self.config = config or {}
        self.normalizer = WeightNormalizer()
        self.aggregator = ScoreAggregator(self.config.get('ratings', {}))
        self.ranker = Ranker(self.config.get('ranking', {}))

    def validate(self, decision: Decision) -> Dict[str, float]:
        """Run every pre-scoring check.

        Args:
            decision: Decision to check

        Returns:
            Normalized criterion weights

        Raises:
            DecisionScoringError: On the first validation failure found
        """
        if not decision.options:
            raise EmptyOptionSet()
        if not decision.criteria:
            raise EmptyCriterionSet()

        decision.check_structure()
        normalized = self.normalizer.normalize(decision.criteria)

        for option in decision.options:
            self.aggregator.check_ratings(option, decision.ratings, normalized)

        return normalized

    def score(self, decision: Decision) -> Results:
        """Compute results for a decision without modifying it.

        Args:
            decision: Decision to score

        Returns:
            Ranked results with margin classification

        Raises:
            DecisionScoringError: If the decision is not scorable
        """
        try:
            normalized = self.validate(decision)
        except DecisionScoringError as e:
            logger.warning(f"Decision '{decision.id}' cannot be scored: {e}")
            raise

        option_scores = [
            self.aggregator.aggregate(option, decision.ratings, normalized)
            for option in decision.options
        ]
        ranked = self.ranker.rank(option_scores)
        margin = self.ranker.classify(ranked)

        logger.info(f"Decision '{decision.id}' scored: winner '{margin.winner.name}' "
                    f"({ranked[0].score:.2f}), {margin.bucket.value}")

        return Results(option_scores=ranked, normalized_weights=normalized, margin=margin)

    def recompute(self, decision: Decision) -> Results:
        """Score a decision and cache the results on the record.

        Calling this twice on an unchanged record yields identical results.
        On failure the record keeps its previous state and cached results.

        Args:
            decision: Decision to (re)score

        Returns:
            The freshly cached results
        """
        results = self.score(decision)
        decision.attach_results(results)
        return results

    @contextmanager
    def editing(self, decision: Decision) -> Iterator[Decision]:
        """Edit a decision and recompute its results when the block exits.

        Example::

            with engine.editing(decision) as d:
                d.set_rating('laptop-a', 'price', 7)

        If the block raises, nothing is recomputed and the record stays edited.
        """
        yield decision
        self.recompute(decision)
