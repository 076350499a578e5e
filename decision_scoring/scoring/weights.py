"""Weight normalization for decision criteria."""

import logging
import math
from typing import Dict, Iterable

from ..errors import EmptyCriterionSet, InvalidWeights
from ..models import Criterion

logger = logging.getLogger(__name__)


class WeightNormalizer:
    """Rescales raw criterion weights into a distribution that sums to 1."""

    def normalize(self, criteria: Iterable[Criterion]) -> Dict[str, float]:
        """Normalize criterion weights.

        Args:
            criteria: Criteria with non-negative raw weights

        Returns:
            Mapping of criterion id to normalized weight

        Raises:
            EmptyCriterionSet: If no criteria are given
            InvalidWeights: If a weight is negative or not finite, or all are zero
        """
        criteria = list(criteria)
        if not criteria:
            raise EmptyCriterionSet()

        raw = {}
        for criterion in criteria:
            weight = criterion.weight
            if not isinstance(weight, (int, float)) or isinstance(weight, bool):
                raise InvalidWeights(f"Weight of criterion '{criterion.id}' is not a number")
            if not math.isfinite(weight) or weight < 0:
                raise InvalidWeights(
                    f"Weight of criterion '{criterion.id}' must be a non-negative number, got {weight!r}"
                )
            raw[criterion.id] = float(weight)

        try:
            total = math.fsum(raw.values())
        except OverflowError:
            # Weights near the float limit; rescale so the sum stays finite
            largest = max(raw.values())
            raw = {criterion_id: weight / largest for criterion_id, weight in raw.items()}
            total = math.fsum(raw.values())
        if total <= 0:
            raise InvalidWeights("All criterion weights are zero")

        normalized = {criterion_id: weight / total for criterion_id, weight in raw.items()}
        logger.debug(f"Normalized weights over total {total}: {normalized}")
        return normalized


def normalize_weights(criteria: Iterable[Criterion]) -> Dict[str, float]:
    """Convenience function to normalize weights with the default settings.

    Args:
        criteria: Criteria with non-negative raw weights

    Returns:
        Mapping of criterion id to normalized weight
    """
    return WeightNormalizer().normalize(criteria)


def as_percentages(normalized: Dict[str, float]) -> Dict[str, float]:
    """Express normalized weights as percentages for display."""
    return {criterion_id: weight * 100 for criterion_id, weight in normalized.items()}
