"""Printable HTML report for a scored decision."""

import logging
import re
from urllib.parse import quote
from typing import Dict, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from ..core.decision import Decision
from ..utils import format_date, format_score
from .messages import MessageBuilder

logger = logging.getLogger(__name__)

THEMES = {
    'light': {
        'primary': '#3B82F6',
        'background': '#F8FAFC',
        'card': '#FFFFFF',
        'text': '#1E293B',
        'text_secondary': '#64748B',
        'border': '#E2E8F0',
        'success': '#10B981',
        'success_light': '#D1FAE5',
    },
    'dark': {
        'primary': '#60A5FA',
        'background': '#0F172A',
        'card': '#1E293B',
        'text': '#F1F5F9',
        'text_secondary': '#94A3B8',
        'border': '#334155',
        'success': '#10B981',
        'success_light': '#064E3B',
    },
}


def report_filename(decision: Decision) -> str:
    """File name for an exported report, e.g. ``Decision-New_laptop.html``."""
    name = re.sub(r'\s', '_', decision.title.strip()) if decision.title else ''
    return f"Decision-{name or 'Report'}.html"


def content_disposition(filename: str) -> str:
    """``Content-Disposition`` value safe for any title.

    Header values must be latin-1, so non-ASCII names go in the RFC 5987
    ``filename*`` parameter with an ASCII-only ``filename`` fallback.
    """
    fallback = filename.encode('ascii', 'ignore').decode('ascii')
    fallback = re.sub(r'["\\]', '', fallback)
    fallback = re.sub(r'[^ -~]', '', fallback) or 'Decision-Report.html'
    return f"inline; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


class ReportRenderer:
    """Renders decisions into self-contained HTML documents."""

    def __init__(self, config: Optional[Dict] = None, messages: Optional[Dict] = None):
        """Initialize report renderer.

        Args:
            config: Report configuration (``theme``, ``top_placements``)
            messages: Message template overrides
        """
        self.config = config or {}
        self.default_theme = self.config.get('theme', 'light')
        self.top_placements = self.config.get('top_placements', 3)
        self.messages = MessageBuilder(messages)
        self.env = Environment(
            loader=PackageLoader('decision_scoring', 'templates'),
            autoescape=select_autoescape(['html'])
        )

    def build_context(self, decision: Decision, theme: str) -> Dict:
        """Collect the values the report template displays."""
        if theme not in THEMES:
            raise ValueError(f"Unknown theme '{theme}', expected one of {sorted(THEMES)}")

        results = decision.results
        weights = results.normalized_weights

        criteria = [
            {
                'name': criterion.name,
                'weight': criterion.weight,
                'percent': f"{weights.get(criterion.id, 0.0) * 100:.0f}",
            }
            for criterion in decision.criteria
        ]

        rows = []
        rows_by_id = {}
        for rank, option_score in enumerate(results.option_scores, start=1):
            cells = []
            for criterion in decision.criteria:
                rating = decision.get_rating(option_score.option.id, criterion.id)
                cells.append({
                    'rating': '-' if rating is None else f"{rating:g}",
                    'contribution': format_score(option_score.contributions.get(criterion.id, 0.0)),
                })
            rows.append({
                'rank': rank,
                'name': option_score.option.name,
                'score': format_score(option_score.score),
                'cells': cells,
            })
            rows_by_id[option_score.option.id] = rows[-1]

        return {
            'title': decision.title,
            'description': decision.description,
            'date': format_date(decision.created_at),
            'winner_message': self.messages.winner_message(results),
            'placements': [rows_by_id[s.option.id] for s in results.top(self.top_placements)],
            'rows': rows,
            'criteria': criteria,
            'colors': THEMES[theme],
            'dark': theme == 'dark',
        }

    def render(self, decision: Decision, theme: Optional[str] = None) -> str:
        """Render a scored decision as HTML.

        Args:
            decision: Scored decision
            theme: ``light`` or ``dark``; the configured default when omitted

        Returns:
            HTML document

        Raises:
            StaleResults: If the decision has no current results
        """
        context = self.build_context(decision, theme or self.default_theme)
        template = self.env.get_template('report.html')
        logger.debug(f"Rendering report for decision '{decision.id}'")
        return template.render(**context)
