"""Decision record: the persisted aggregate and its scoring lifecycle.

A record starts as ``DRAFT``. Scoring it caches ``Results`` and moves it to
``SCORED``. Any change to criteria, options or ratings moves a scored record to
``EDITED``; its cached results are kept for reference but cannot be read
through :attr:`Decision.results` until the record is recomputed.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ..errors import DecisionScoringError, DuplicateId, StaleResults, UnknownReference
from ..models import Criterion, Option, Ratings, Results


class DecisionState(Enum):
    """Scoring lifecycle state of a decision record."""
    DRAFT = "draft"
    SCORED = "scored"
    EDITED = "edited"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def ratings_from_nested(nested: Dict[str, Dict[str, float]]) -> Ratings:
    """Convert ``{option_id: {criterion_id: rating}}`` into flat rating keys."""
    return {
        (option_id, criterion_id): value
        for option_id, row in nested.items()
        for criterion_id, value in row.items()
    }


def ratings_to_nested(ratings: Ratings) -> Dict[str, Dict[str, float]]:
    """Convert flat rating keys into ``{option_id: {criterion_id: rating}}``."""
    nested: Dict[str, Dict[str, float]] = {}
    for (option_id, criterion_id), value in ratings.items():
        nested.setdefault(option_id, {})[criterion_id] = value
    return nested


@dataclass
class Decision:
    """A decision with its criteria, options, ratings and cached results."""
    id: str
    title: str
    description: Optional[str] = None
    criteria: List[Criterion] = field(default_factory=list)
    options: List[Option] = field(default_factory=list)
    ratings: Ratings = field(default_factory=dict)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    state: DecisionState = DecisionState.DRAFT
    cached_results: Optional[Results] = None
    scored_contents: Optional[tuple] = field(default=None, repr=False, compare=False)

    @classmethod
    def create(cls,
               title: str,
               criteria: Iterable[Criterion] = (),
               options: Iterable[Option] = (),
               ratings: Optional[Ratings] = None,
               description: Optional[str] = None,
               decision_id: Optional[str] = None) -> 'Decision':
        """Create a new draft decision.

        Args:
            title: Decision title
            criteria: Criteria in display order
            options: Options in display order
            ratings: Ratings keyed by (option_id, criterion_id)
            description: Optional free-text description
            decision_id: Explicit id; a UUID is generated when omitted

        Returns:
            Decision in the ``DRAFT`` state

        Raises:
            DuplicateId: If two criteria or two options share an id
            UnknownReference: If a rating refers to a missing option or criterion
        """
        now = _now()
        decision = cls(
            id=decision_id or new_id(),
            title=title,
            description=description,
            criteria=list(criteria),
            options=list(options),
            ratings=dict(ratings or {}),
            created_at=now,
            updated_at=now,
        )
        decision.check_structure()
        return decision

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_scored(self) -> bool:
        self._sync_state()
        return self.state is DecisionState.SCORED

    @property
    def results(self) -> Results:
        """Cached results of the last scoring pass.

        Raises:
            StaleResults: If the record is a draft or was changed since scoring,
                including direct changes to ``criteria``, ``options`` or ``ratings``
        """
        self._sync_state()
        if self.state is not DecisionState.SCORED or self.cached_results is None:
            raise StaleResults()
        return self.cached_results

    def attach_results(self, results: Results) -> None:
        """Store freshly computed results and mark the record scored."""
        self.cached_results = results
        self.scored_contents = self.contents_snapshot()
        self.state = DecisionState.SCORED

    def contents_snapshot(self) -> tuple:
        """Immutable copy of everything the scores depend on."""
        return (
            tuple(self.criteria),
            tuple(self.options),
            tuple(sorted(self.ratings.items())),
        )

    def _sync_state(self) -> None:
        if self.state is DecisionState.SCORED and self.scored_contents != self.contents_snapshot():
            self.state = DecisionState.EDITED
            self.updated_at = _now()

    def _touch(self, invalidate: bool = True) -> None:
        self.updated_at = _now()
        if invalidate and self.state is DecisionState.SCORED:
            self.state = DecisionState.EDITED

    def check_structure(self) -> None:
        """Verify id uniqueness and rating references.

        Raises:
            DuplicateId: If two criteria or two options share an id
            UnknownReference: If a rating refers to a missing option or criterion
        """
        criterion_ids = set()
        for criterion in self.criteria:
            if criterion.id in criterion_ids:
                raise DuplicateId('criterion', criterion.id)
            criterion_ids.add(criterion.id)

        option_ids = set()
        for option in self.options:
            if option.id in option_ids:
                raise DuplicateId('option', option.id)
            option_ids.add(option.id)

        for option_id, criterion_id in self.ratings:
            if option_id not in option_ids:
                raise UnknownReference('option', option_id)
            if criterion_id not in criterion_ids:
                raise UnknownReference('criterion', criterion_id)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_criterion(self, criterion_id: str) -> Criterion:
        for criterion in self.criteria:
            if criterion.id == criterion_id:
                return criterion
        raise UnknownReference('criterion', criterion_id)

    def get_option(self, option_id: str) -> Option:
        for option in self.options:
            if option.id == option_id:
                return option
        raise UnknownReference('option', option_id)

    def get_rating(self, option_id: str, criterion_id: str) -> Optional[float]:
        return self.ratings.get((option_id, criterion_id))

    def unrated_pairs(self) -> List[tuple]:
        """(option_id, criterion_id) pairs that have no rating yet."""
        return [
            (option.id, criterion.id)
            for option in self.options
            for criterion in self.criteria
            if (option.id, criterion.id) not in self.ratings
        ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update_details(self, title: Optional[str] = None,
                       description: Optional[str] = None) -> None:
        """Change title or description. Scores are not affected."""
        if title is not None:
            self.title = title
        if description is not None:
            self.description = description or None
        self._touch(invalidate=False)

    def add_criterion(self, name: str, weight: float,
                      criterion_id: Optional[str] = None) -> Criterion:
        criterion = Criterion(id=criterion_id or new_id(), name=name, weight=weight)
        if any(c.id == criterion.id for c in self.criteria):
            raise DuplicateId('criterion', criterion.id)
        self.criteria.append(criterion)
        self._touch()
        return criterion

    def update_criterion(self, criterion_id: str, name: Optional[str] = None,
                         weight: Optional[float] = None) -> Criterion:
        current = self.get_criterion(criterion_id)
        updated = Criterion(
            id=current.id,
            name=current.name if name is None else name,
            weight=current.weight if weight is None else weight,
        )
        self.criteria[self.criteria.index(current)] = updated
        self._touch()
        return updated

    def remove_criterion(self, criterion_id: str) -> None:
        """Remove a criterion together with all of its ratings."""
        criterion = self.get_criterion(criterion_id)
        self.criteria.remove(criterion)
        self.ratings = {k: v for k, v in self.ratings.items() if k[1] != criterion_id}
        self._touch()

    def add_option(self, name: str, option_id: Optional[str] = None) -> Option:
        option = Option(id=option_id or new_id(), name=name)
        if any(o.id == option.id for o in self.options):
            raise DuplicateId('option', option.id)
        self.options.append(option)
        self._touch()
        return option

    def rename_option(self, option_id: str, name: str) -> Option:
        current = self.get_option(option_id)
        renamed = Option(id=current.id, name=name)
        self.options[self.options.index(current)] = renamed
        self._touch()
        return renamed

    def remove_option(self, option_id: str) -> None:
        """Remove an option together with all of its ratings."""
        option = self.get_option(option_id)
        self.options.remove(option)
        self.ratings = {k: v for k, v in self.ratings.items() if k[0] != option_id}
        self._touch()

    def set_rating(self, option_id: str, criterion_id: str, value: float) -> None:
        self.get_option(option_id)
        self.get_criterion(criterion_id)
        self.ratings[(option_id, criterion_id)] = value
        self._touch()

    def clear_rating(self, option_id: str, criterion_id: str) -> None:
        if self.ratings.pop((option_id, criterion_id), None) is not None:
            self._touch()

    def replace_contents(self, criteria: Iterable[Criterion], options: Iterable[Option],
                         ratings: Ratings) -> None:
        """Replace criteria, options and ratings in one edit."""
        previous = (self.criteria, self.options, self.ratings)
        self.criteria = list(criteria)
        self.options = list(options)
        self.ratings = dict(ratings)
        try:
            self.check_structure()
        except DecisionScoringError:
            self.criteria, self.options, self.ratings = previous
            raise
        self._touch()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        self._sync_state()
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'criteria': [c.to_dict() for c in self.criteria],
            'options': [o.to_dict() for o in self.options],
            'ratings': ratings_to_nested(self.ratings),
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'state': self.state.value,
            'results': self.cached_results.to_dict() if self.cached_results else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Decision':
        """Rebuild a decision from :meth:`to_dict` output."""
        results = data.get('results')
        cached = Results.from_dict(results) if results else None
        state = DecisionState(data.get('state', DecisionState.DRAFT.value))
        if cached is None and state is DecisionState.SCORED:
            state = DecisionState.DRAFT

        decision = cls(
            id=data['id'],
            title=data.get('title', ''),
            description=data.get('description'),
            criteria=[Criterion.from_dict(c) for c in data.get('criteria', [])],
            options=[Option.from_dict(o) for o in data.get('options', [])],
            ratings=ratings_from_nested(data.get('ratings', {})),
            created_at=datetime.fromisoformat(data['created_at']),
            updated_at=datetime.fromisoformat(data['updated_at']),
            state=state,
            cached_results=cached,
        )
        decision.check_structure()
        if decision.state is DecisionState.SCORED:
            decision.scored_contents = decision.contents_snapshot()
        return decision
