"""Narrative text for the winning option and its margin."""

from typing import Dict, Optional

from ..models import Margin, MarginBucket, Results
from ..utils import format_percent, format_points

DEFAULT_MESSAGES = {
    'clear_choice': "{option} is the clear choice.",
    'narrow_margin': "{option} wins by a narrow margin.",
    'better_by': "{option} is better by {points} points ({percent}% higher).",
    'better_by_no_percent': "{option} is better by {points} points.",
    'decisively_better': "{option} is decisively better, leading by {points} points.",
    'share': "I made a decision about \"{title}\" and the result is: {result}. {margin}",
}


class MessageBuilder:
    """Fills the configured message templates from scoring results."""

    def __init__(self, config: Optional[Dict] = None):
        self.templates = dict(DEFAULT_MESSAGES)
        self.templates.update(config or {})

    def margin_message(self, margin: Margin) -> str:
        """Describe the margin between winner and runner-up."""
        option = margin.winner.name
        bucket = margin.bucket

        if bucket is MarginBucket.CLEAR_CHOICE:
            return self.templates['clear_choice'].format(option=option)
        if bucket is MarginBucket.NARROW_MARGIN:
            return self.templates['narrow_margin'].format(option=option)

        points = format_points(margin.points)
        if bucket is MarginBucket.BETTER_BY:
            if not margin.has_percent:
                return self.templates['better_by_no_percent'].format(option=option, points=points)
            return self.templates['better_by'].format(
                option=option, points=points, percent=format_percent(margin.percent)
            )
        return self.templates['decisively_better'].format(option=option, points=points)

    def winner_message(self, results: Results) -> str:
        return self.margin_message(results.margin)

    def share_message(self, title: str, results: Results) -> str:
        """Text for sharing a decision outcome."""
        return self.templates['share'].format(
            title=title,
            result=results.winner.option.name,
            margin=self.winner_message(results),
        )
