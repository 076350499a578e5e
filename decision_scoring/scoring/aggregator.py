"""Weighted score aggregation for a single option."""

import logging
import math
from typing import Dict, Optional

from ..errors import InvalidRating, MissingRating
from ..models import Option, OptionScore, Ratings

logger = logging.getLogger(__name__)


class ScoreAggregator:
    """Combines an option's ratings with normalized criterion weights."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize score aggregator.

        Args:
            config: Rating scale configuration (``min`` / ``max``; ``None``
                disables a bound)
        """
        self.config = config or {}
        self.min_rating = self.config.get('min', 0)
        self.max_rating = self.config.get('max', 10)

    def check_ratings(self, option: Option, ratings: Ratings,
                      normalized_weights: Dict[str, float]) -> None:
        """Verify an option has a valid rating for every weighted criterion.

        Criteria with a zero weight may be left unrated.

        Raises:
            MissingRating: If a criterion with non-zero weight is unrated
            InvalidRating: If a rating is not finite or outside the scale
        """
        for criterion_id, weight in normalized_weights.items():
            key = (option.id, criterion_id)
            if key not in ratings:
                if weight > 0:
                    raise MissingRating(option.id, criterion_id)
                continue
            self.check_value(option.id, criterion_id, ratings[key])

    def check_value(self, option_id: str, criterion_id: str, value) -> None:
        """Validate a single rating value against the configured scale."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidRating(option_id, criterion_id, value)
        if not math.isfinite(value):
            raise InvalidRating(option_id, criterion_id, value)
        if self.min_rating is not None and value < self.min_rating:
            raise InvalidRating(option_id, criterion_id, value)
        if self.max_rating is not None and value > self.max_rating:
            raise InvalidRating(option_id, criterion_id, value)

    def aggregate(self, option: Option, ratings: Ratings,
                  normalized_weights: Dict[str, float]) -> OptionScore:
        """Compute the weighted score of one option.

        score = sum(rating(option, c) * weight(c)) over all criteria c. No
        rounding is applied.

        Args:
            option: Option to score
            ratings: All ratings of the decision keyed by (option_id, criterion_id)
            normalized_weights: Criterion id to normalized weight

        Returns:
            OptionScore with per-criterion contributions
        """
        self.check_ratings(option, ratings, normalized_weights)

        score = 0.0
        contributions = {}
        for criterion_id, weight in normalized_weights.items():
            rating = ratings.get((option.id, criterion_id))
            contribution = float(rating) * weight if rating is not None else 0.0
            contributions[criterion_id] = contribution
            score += contribution

        logger.debug(f"Option '{option.id}' scored {score}")
        return OptionScore(option=option, score=score, contributions=contributions)
