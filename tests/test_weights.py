"""Tests for weight normalization."""

import math

import pytest
from decision_scoring.errors import EmptyCriterionSet, InvalidWeights
from decision_scoring.models import Criterion
from decision_scoring.scoring import WeightNormalizer, as_percentages, normalize_weights


@pytest.fixture
def criteria():
    """Criteria with arbitrary positive raw weights."""
    return [
        Criterion('cost', 'Cost', 3),
        Criterion('quality', 'Quality', 1),
        Criterion('speed', 'Speed', 2.5),
        Criterion('support', 'Support', 0.5),
    ]


def test_normalized_weights_sum_to_one(criteria):
    """Test normalized weights form a distribution."""
    normalized = normalize_weights(criteria)

    assert set(normalized) == {'cost', 'quality', 'speed', 'support'}
    assert abs(sum(normalized.values()) - 1.0) < 1e-9


def test_normalized_weights_are_proportional(criteria):
    """Test ratios between weights are preserved."""
    normalized = normalize_weights(criteria)
    raw = {c.id: c.weight for c in criteria}

    for i in raw:
        for j in raw:
            assert normalized[i] / normalized[j] == pytest.approx(raw[i] / raw[j], rel=1e-12)


def test_three_to_one_split():
    """Test the simple 3:1 split gives 0.75 / 0.25."""
    normalized = normalize_weights([Criterion('a', 'A', 3), Criterion('b', 'B', 1)])

    assert normalized == {'a': 0.75, 'b': 0.25}


def test_zero_weight_criterion_kept():
    """Test a zero weight stays zero without breaking normalization."""
    normalized = normalize_weights([Criterion('a', 'A', 2), Criterion('b', 'B', 0)])

    assert normalized == {'a': 1.0, 'b': 0.0}


def test_all_zero_weights_rejected():
    """Test all-zero weights raise instead of falling back to equal weights."""
    with pytest.raises(InvalidWeights):
        normalize_weights([Criterion('a', 'A', 0), Criterion('b', 'B', 0)])


@pytest.mark.parametrize('weight', [-1, math.nan, math.inf, 'heavy', True])
def test_invalid_weight_rejected(weight):
    """Test negative, non-finite and non-numeric weights are rejected."""
    with pytest.raises(InvalidWeights):
        WeightNormalizer().normalize([Criterion('a', 'A', weight), Criterion('b', 'B', 1)])


def test_empty_criteria_rejected():
    """Test normalization needs at least one criterion."""
    with pytest.raises(EmptyCriterionSet):
        normalize_weights([])


def test_percentages():
    """Test percentage conversion for display."""
    percentages = as_percentages({'a': 0.75, 'b': 0.25})

    assert percentages == {'a': 75.0, 'b': 25.0}


def test_weights_near_float_limit():
    """Test huge finite weights normalize instead of overflowing."""
    normalized = normalize_weights([Criterion('a', 'A', 1e308), Criterion('b', 'B', 1e308)])

    assert normalized == {'a': 0.5, 'b': 0.5}


def test_huge_weights_keep_proportions():
    normalized = normalize_weights([Criterion('a', 'A', 1.5e308), Criterion('b', 'B', 0.5e308)])

    assert normalized['a'] == pytest.approx(0.75)
    assert normalized['b'] == pytest.approx(0.25)
