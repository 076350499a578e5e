"""API module for decision scoring."""

from .server import create_app
from .models import DecisionRequest, DecisionResponse, ResultsResponse

__all__ = ["create_app", "DecisionRequest", "DecisionResponse", "ResultsResponse"]
