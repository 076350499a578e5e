"""Pydantic models for API requests and responses."""

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel


class CriterionModel(BaseModel):
    """A weighted criterion."""
    id: str
    name: str
    weight: float


class OptionModel(BaseModel):
    """A candidate option."""
    id: str
    name: str


class DecisionRequest(BaseModel):
    """Request model for creating, updating or scoring a decision.

    ``ratings`` maps option id to criterion id to rating.
    """
    title: str
    description: Optional[str] = None
    criteria: List[CriterionModel]
    options: List[OptionModel]
    ratings: Dict[str, Dict[str, float]] = {}


class OptionScoreModel(BaseModel):
    option: OptionModel
    score: float
    contributions: Dict[str, float]


class MarginModel(BaseModel):
    bucket: str
    winner: OptionModel
    runner_up: Optional[OptionModel] = None
    points: Optional[float] = None
    percent: Optional[Union[float, str]] = None


class ResultsResponse(BaseModel):
    """Response model for scoring results."""
    option_scores: List[OptionScoreModel]
    normalized_weights: Dict[str, float]
    margin: MarginModel
    winner_message: str


class DecisionResponse(BaseModel):
    """Response model for a stored decision."""
    id: str
    title: str
    description: Optional[str] = None
    criteria: List[CriterionModel]
    options: List[OptionModel]
    ratings: Dict[str, Dict[str, float]]
    state: str
    created_at: datetime
    updated_at: datetime
    results: Optional[ResultsResponse] = None


class ShareResponse(BaseModel):
    message: str


class InsightResponse(BaseModel):
    insights: str
