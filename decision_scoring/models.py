"""Data models for criteria, options and scoring results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

# (option_id, criterion_id) -> rating
RatingKey = Tuple[str, str]
Ratings = Dict[RatingKey, float]


class _NotApplicable:
    """Marker for a percentage that cannot be computed (zero runner-up score)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NotApplicable'

    def __bool__(self) -> bool:
        return False


NotApplicable = _NotApplicable()
NOT_APPLICABLE_TOKEN = 'n/a'


@dataclass(frozen=True)
class Criterion:
    """A weighted dimension of comparison."""
    id: str
    name: str
    weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'weight': self.weight}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Criterion':
        return cls(id=str(data['id']), name=data.get('name', ''), weight=data.get('weight', 0))


@dataclass(frozen=True)
class Option:
    """One of the candidate choices being compared."""
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Option':
        return cls(id=str(data['id']), name=data.get('name', ''))


class MarginBucket(Enum):
    """Qualitative description of how clearly the winner beat the runner-up."""
    CLEAR_CHOICE = "clear_choice"
    NARROW_MARGIN = "narrow_margin"
    BETTER_BY = "better_by"
    DECISIVELY_BETTER = "decisively_better"


@dataclass(frozen=True)
class OptionScore:
    """Weighted aggregate for one option.

    ``contributions`` maps criterion id to ``rating * normalized weight``; the
    contributions add up to ``score``.
    """
    option: Option
    score: float
    contributions: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'option': self.option.to_dict(),
            'score': self.score,
            'contributions': dict(self.contributions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OptionScore':
        return cls(
            option=Option.from_dict(data['option']),
            score=float(data['score']),
            contributions={k: float(v) for k, v in data.get('contributions', {}).items()},
        )


@dataclass(frozen=True)
class Margin:
    """Margin-of-victory classification between the top two options.

    ``points`` and ``percent`` are ``None`` when there is no runner-up.
    ``percent`` is ``NotApplicable`` when the runner-up scored zero.
    """
    bucket: MarginBucket
    winner: Option
    runner_up: Optional[Option] = None
    points: Optional[float] = None
    percent: Union[float, _NotApplicable, None] = None

    @property
    def has_percent(self) -> bool:
        return isinstance(self.percent, float)

    def to_dict(self) -> Dict[str, Any]:
        percent = self.percent
        if percent is NotApplicable:
            percent = NOT_APPLICABLE_TOKEN
        return {
            'bucket': self.bucket.value,
            'winner': self.winner.to_dict(),
            'runner_up': self.runner_up.to_dict() if self.runner_up else None,
            'points': self.points,
            'percent': percent,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Margin':
        percent = data.get('percent')
        if percent == NOT_APPLICABLE_TOKEN:
            percent = NotApplicable
        elif percent is not None:
            percent = float(percent)
        runner_up = data.get('runner_up')
        points = data.get('points')
        return cls(
            bucket=MarginBucket(data['bucket']),
            winner=Option.from_dict(data['winner']),
            runner_up=Option.from_dict(runner_up) if runner_up else None,
            points=float(points) if points is not None else None,
            percent=percent,
        )


@dataclass(frozen=True)
class Results:
    """Ranked outcome of one scoring pass."""
    option_scores: Tuple[OptionScore, ...]
    normalized_weights: Dict[str, float]
    margin: Margin

    @property
    def winner(self) -> OptionScore:
        return self.option_scores[0]

    @property
    def runner_up(self) -> Optional[OptionScore]:
        return self.option_scores[1] if len(self.option_scores) > 1 else None

    def top(self, n: int = 3) -> List[OptionScore]:
        """First ``n`` placements."""
        return list(self.option_scores[:n])

    def score_for(self, option_id: str) -> Optional[OptionScore]:
        for option_score in self.option_scores:
            if option_score.option.id == option_id:
                return option_score
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'option_scores': [s.to_dict() for s in self.option_scores],
            'normalized_weights': dict(self.normalized_weights),
            'margin': self.margin.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Results':
        return cls(
            option_scores=tuple(OptionScore.from_dict(s) for s in data['option_scores']),
            normalized_weights={k: float(v) for k, v in data['normalized_weights'].items()},
            margin=Margin.from_dict(data['margin']),
        )
