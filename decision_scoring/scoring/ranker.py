"""Ranking of option scores and margin-of-victory classification."""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import EmptyOptionSet
from ..models import Margin, MarginBucket, NotApplicable, OptionScore

logger = logging.getLogger(__name__)

DEFAULT_TIE_EPSILON = 1e-9
DEFAULT_NARROW_MARGIN = 0.5
DEFAULT_DECISIVE_MARGIN = 2.0


class Ranker:
    """Orders option scores and classifies the winning margin."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize ranker.

        Args:
            config: Ranking configuration (``tie_epsilon``, ``narrow_margin``,
                ``decisive_margin``)
        """
        self.config = config or {}
        self.tie_epsilon = self.config.get('tie_epsilon', DEFAULT_TIE_EPSILON)
        self.narrow_margin = self.config.get('narrow_margin', DEFAULT_NARROW_MARGIN)
        self.decisive_margin = self.config.get('decisive_margin', DEFAULT_DECISIVE_MARGIN)

        if self.narrow_margin > self.decisive_margin:
            raise ValueError(
                f"narrow_margin ({self.narrow_margin}) must not exceed "
                f"decisive_margin ({self.decisive_margin})"
            )

    def rank(self, option_scores: Sequence[OptionScore]) -> Tuple[OptionScore, ...]:
        """Order option scores by score, descending.

        Scores within ``tie_epsilon`` of the highest score in their group form
        a tie group and keep their input order.

        Args:
            option_scores: Scores in original option order

        Returns:
            Ranked tuple of option scores

        Raises:
            EmptyOptionSet: If there is nothing to rank
        """
        if not option_scores:
            raise EmptyOptionSet()

        indexed = sorted(enumerate(option_scores), key=lambda item: -item[1].score)

        ranked: List[OptionScore] = []
        group = [indexed[0]]
        for item in indexed[1:]:
            if abs(group[0][1].score - item[1].score) <= self.tie_epsilon:
                group.append(item)
                continue
            ranked.extend(score for _, score in sorted(group, key=lambda i: i[0]))
            group = [item]
        ranked.extend(score for _, score in sorted(group, key=lambda i: i[0]))

        return tuple(ranked)

    def classify(self, ranked: Sequence[OptionScore]) -> Margin:
        """Classify how decisively the top option beat the runner-up.

        Args:
            ranked: Option scores as returned by :meth:`rank`

        Returns:
            Margin with bucket, point difference and percentage difference
        """
        if not ranked:
            raise EmptyOptionSet()

        winner = ranked[0]
        if len(ranked) == 1:
            return Margin(bucket=MarginBucket.CLEAR_CHOICE, winner=winner.option)

        runner_up = ranked[1]
        points = winner.score - runner_up.score

        if runner_up.score == 0:
            percent = NotApplicable
        else:
            percent = (points / runner_up.score) * 100

        if points < self.narrow_margin:
            bucket = MarginBucket.NARROW_MARGIN
        elif points < self.decisive_margin:
            bucket = MarginBucket.BETTER_BY
        else:
            bucket = MarginBucket.DECISIVELY_BETTER

        logger.debug(f"Margin {points} between '{winner.option.id}' and "
                     f"'{runner_up.option.id}' classified as {bucket.value}")

        return Margin(
            bucket=bucket,
            winner=winner.option,
            runner_up=runner_up.option,
            points=points,
            percent=percent,
        )
