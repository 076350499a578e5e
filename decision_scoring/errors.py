"""Error types raised by the decision scoring engine and its collaborators."""

from typing import Any


class DecisionScoringError(ValueError):
    """Base class for deterministic input-validation failures.

    These abort a whole scoring pass; partial results are never returned.
    """

    message = "The decision cannot be scored."

    def __init__(self, detail: str = None):
        super().__init__(detail or self.message)


class InvalidWeights(DecisionScoringError):
    """All criterion weights are zero, or a weight is negative or not finite."""

    message = "Please give at least one criterion a weight above zero."


class MissingRating(DecisionScoringError):
    """A required (option, criterion) rating is absent."""

    message = "Please rate all options before viewing results."

    def __init__(self, option_id: str, criterion_id: str):
        self.option_id = option_id
        self.criterion_id = criterion_id
        super().__init__(
            f"Missing rating for option '{option_id}' on criterion '{criterion_id}'"
        )


class InvalidRating(DecisionScoringError):
    """A rating is not a finite number or lies outside the configured scale."""

    message = "Ratings must be numbers within the rating scale."

    def __init__(self, option_id: str, criterion_id: str, value: Any):
        self.option_id = option_id
        self.criterion_id = criterion_id
        self.value = value
        super().__init__(
            f"Invalid rating {value!r} for option '{option_id}' on criterion '{criterion_id}'"
        )


class EmptyOptionSet(DecisionScoringError):
    """Scoring attempted with no options."""

    message = "Please add at least one option."


class EmptyCriterionSet(DecisionScoringError):
    """Scoring attempted with no criteria."""

    message = "Please add at least one criterion."


class DuplicateId(DecisionScoringError):
    """Two options (or two criteria) share an id."""

    message = "Every option and criterion needs a unique id."

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"Duplicate {kind} id '{item_id}'")


class UnknownReference(DecisionScoringError):
    """A rating or edit refers to an option or criterion that does not exist."""

    message = "The rating refers to an unknown option or criterion."

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"Unknown {kind} id '{item_id}'")


class StaleResults(DecisionScoringError):
    """Results were read from a record that is not in the Scored state."""

    message = "Results are out of date; recompute the decision first."


class StorageError(Exception):
    """The persistence collaborator failed to read or write a decision."""


class DecisionNotFound(StorageError):
    """No stored decision has the requested id."""

    def __init__(self, decision_id: str):
        self.decision_id = decision_id
        super().__init__(f"Decision not found: {decision_id}")


class InsightUnavailable(Exception):
    """The AI insight collaborator could not produce text."""
