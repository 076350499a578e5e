"""AI insight collaborator.

Sends a summary of a scored decision to a text-generation endpoint (an
Ollama-compatible ``/api/generate`` by default) and returns its narrative
text. Scoring never depends on this call.
"""

import logging
import time
from typing import Dict, Optional

import requests

from ..core.decision import Decision
from ..errors import InsightUnavailable
from ..utils import format_score
from .messages import MessageBuilder

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = "Sorry, we could not generate insights at this time. Please try again later."


def build_insight_prompt(decision: Decision, messages: Optional[Dict] = None) -> str:
    """Describe a scored decision for the text-generation model.

    Raises:
        StaleResults: If the decision has no current results
    """
    results = decision.results
    weights = results.normalized_weights

    lines = [
        "You are a thoughtful decision coach.",
        "Give a short, practical analysis of the decision below: why the winner",
        "came out on top, where the runner-up is stronger, and what to double-check.",
        "Answer in plain text, no markdown.",
        "",
        f"Decision: {decision.title}",
    ]
    if decision.description:
        lines.append(f"Context: {decision.description}")

    lines.append("Criteria (importance):")
    for criterion in decision.criteria:
        lines.append(f"- {criterion.name}: {weights.get(criterion.id, 0.0) * 100:.0f}%")

    lines.append("Options (score out of the rating scale, ratings per criterion):")
    for option_score in results.option_scores:
        ratings = ", ".join(
            f"{criterion.name}={decision.get_rating(option_score.option.id, criterion.id)}"
            for criterion in decision.criteria
        )
        lines.append(f"- {option_score.option.name}: {format_score(option_score.score)} ({ratings})")

    lines.append(f"Outcome: {MessageBuilder(messages).winner_message(results)}")
    return "\n".join(lines)


class InsightClient:
    """Requests narrative insight text for decisions."""

    def __init__(self, config: Optional[Dict] = None, messages: Optional[Dict] = None):
        """Initialize insight client.

        Args:
            config: Insight configuration (``url``, ``model``, ``timeout``,
                ``retries``, ``retry_delay``, ``fallback_message``)
            messages: Message template overrides used in the prompt
        """
        self.config = config or {}
        self.url = self.config.get('url', 'http://localhost:11434/api/generate')
        self.model = self.config.get('model', 'llama3')
        self.timeout = self.config.get('timeout', 60)
        self.retries = self.config.get('retries', 2)
        self.retry_delay = self.config.get('retry_delay', 0.8)
        self.fallback_message = self.config.get('fallback_message', DEFAULT_FALLBACK)
        self.messages = messages

    def _request(self, prompt: str) -> str:
        last_err = None
        for attempt in range(self.retries + 1):
            try:
                r = requests.post(
                    self.url,
                    json={"model": self.model, "prompt": prompt, "stream": False},
                    timeout=self.timeout
                )
                r.raise_for_status()
                data = r.json()
                if not isinstance(data, dict):
                    raise ValueError(f"Unexpected response body: {type(data).__name__}")
                text = data.get("response")
                text = text.strip() if isinstance(text, str) else ""
                if text:
                    return text
                last_err = InsightUnavailable("Empty response from insight service")
            except (requests.RequestException, ValueError) as e:
                last_err = e
                logger.warning(f"Insight request attempt {attempt + 1} failed: {e}")
            if attempt < self.retries:
                time.sleep(self.retry_delay * (attempt + 1))
        raise InsightUnavailable(str(last_err)) from last_err

    def generate(self, decision: Decision) -> str:
        """Generate insight text for a scored decision.

        Raises:
            InsightUnavailable: If the service fails after all retries
            StaleResults: If the decision has no current results
        """
        prompt = build_insight_prompt(decision, self.messages)
        logger.info(f"Requesting insights for decision '{decision.id}'")
        return self._request(prompt)

    def generate_or_fallback(self, decision: Decision) -> str:
        """Generate insight text, returning the fallback message on failure."""
        try:
            return self.generate(decision)
        except InsightUnavailable as e:
            logger.error(f"Insights unavailable for decision '{decision.id}': {e}")
            return self.fallback_message
