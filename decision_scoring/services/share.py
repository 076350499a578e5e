"""Share-text collaborator."""

from typing import Dict, Optional

from ..core.decision import Decision
from .messages import MessageBuilder


def share_message(decision: Decision, messages: Optional[Dict] = None) -> str:
    """Build the text shared for a scored decision.

    Only the winning option's name and the margin message are used.

    Args:
        decision: Scored decision
        messages: Message template overrides

    Raises:
        StaleResults: If the decision has no current results
    """
    return MessageBuilder(messages).share_message(decision.title, decision.results)
