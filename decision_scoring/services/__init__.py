"""Collaborators around the scoring engine: messages, sharing, reports, storage, insights."""

from .messages import MessageBuilder
from .share import share_message
from .report import ReportRenderer, content_disposition, report_filename
from .storage import DecisionStore
from .insights import InsightClient, build_insight_prompt

__all__ = [
    "MessageBuilder",
    "share_message",
    "ReportRenderer",
    "report_filename",
    "content_disposition",
    "DecisionStore",
    "InsightClient",
    "build_insight_prompt",
]
