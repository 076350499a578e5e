"""Tests for the scoring engine."""

import pytest
from decision_scoring import (
    Criterion,
    Decision,
    DecisionState,
    EmptyCriterionSet,
    EmptyOptionSet,
    InvalidWeights,
    MissingRating,
    Option,
    ScoringEngine,
)
from decision_scoring.models import MarginBucket
from decision_scoring.utils import load_config


@pytest.fixture
def engine():
    return ScoringEngine(load_config())


@pytest.fixture
def three_way_decision():
    """Three options, two criteria weighted 3:1."""
    return Decision.create(
        "Which option?",
        criteria=[Criterion('c1', 'First', 3), Criterion('c2', 'Second', 1)],
        options=[Option('a', 'Option A'), Option('b', 'Option B'), Option('c', 'Option C')],
        ratings={
            ('a', 'c1'): 10, ('a', 'c2'): 0,
            ('b', 'c1'): 0, ('b', 'c2'): 10,
            ('c', 'c1'): 5, ('c', 'c2'): 5,
        },
    )


def test_three_way_scenario(engine, three_way_decision):
    """Test the worked example: A=7.5, C=5.0, B=2.5."""
    results = engine.score(three_way_decision)

    assert results.normalized_weights == {'c1': 0.75, 'c2': 0.25}
    assert [s.option.name for s in results.option_scores] == ['Option A', 'Option C', 'Option B']
    assert [s.score for s in results.option_scores] == [7.5, 5.0, 2.5]
    assert results.margin.bucket is MarginBucket.DECISIVELY_BETTER
    assert results.winner.option.id == 'a'
    assert results.runner_up.option.id == 'c'


def test_score_does_not_modify_decision(engine, three_way_decision):
    """Test score() leaves the record untouched."""
    engine.score(three_way_decision)

    assert three_way_decision.state is DecisionState.DRAFT
    assert three_way_decision.cached_results is None


def test_recompute_is_deterministic(engine, three_way_decision):
    """Test scoring an unchanged decision twice gives identical results."""
    first = engine.recompute(three_way_decision)
    second = engine.recompute(three_way_decision)

    assert first == second
    assert [s.score for s in first.option_scores] == [s.score for s in second.option_scores]
    assert three_way_decision.results == first


def test_raising_winner_rating_never_lowers_its_score(engine, three_way_decision):
    """Test monotonicity of the winner's score in its own ratings."""
    previous = engine.score(three_way_decision).score_for('a').score

    for value in [1, 4, 7, 10]:
        three_way_decision.set_rating('a', 'c2', value)
        current = engine.score(three_way_decision).score_for('a').score
        assert current >= previous
        previous = current


def test_identical_options_keep_input_order(engine):
    """Test tied options appear in their original order."""
    decision = Decision.create(
        "Tie",
        criteria=[Criterion('q', 'Quality', 1)],
        options=[Option('z', 'Zed'), Option('y', 'Why'), Option('x', 'Ex')],
        ratings={('z', 'q'): 6, ('y', 'q'): 6, ('x', 'q'): 6},
    )
    results = engine.score(decision)

    assert [s.option.id for s in results.option_scores] == ['z', 'y', 'x']
    assert results.margin.bucket is MarginBucket.NARROW_MARGIN


def test_single_option_clear_choice(engine):
    """Test a single option is always the clear choice."""
    decision = Decision.create(
        "Only one",
        criteria=[Criterion('q', 'Quality', 2)],
        options=[Option('solo', 'Solo')],
        ratings={('solo', 'q'): 3},
    )
    results = engine.score(decision)

    assert len(results.option_scores) == 1
    assert results.margin.bucket is MarginBucket.CLEAR_CHOICE


def test_all_zero_weights_produce_no_results(engine, three_way_decision):
    """Test all-zero weights raise and nothing is cached."""
    three_way_decision.update_criterion('c1', weight=0)
    three_way_decision.update_criterion('c2', weight=0)

    with pytest.raises(InvalidWeights):
        engine.recompute(three_way_decision)

    assert three_way_decision.cached_results is None
    assert three_way_decision.state is DecisionState.DRAFT


def test_missing_rating_identifies_pair(engine, three_way_decision):
    """Test the missing pair is reported exactly."""
    three_way_decision.clear_rating('b', 'c2')

    with pytest.raises(MissingRating) as exc_info:
        engine.score(three_way_decision)

    assert (exc_info.value.option_id, exc_info.value.criterion_id) == ('b', 'c2')


def test_no_options_rejected(engine):
    decision = Decision.create("Empty", criteria=[Criterion('q', 'Quality', 1)])

    with pytest.raises(EmptyOptionSet):
        engine.score(decision)


def test_no_criteria_rejected(engine):
    decision = Decision.create("Empty", options=[Option('a', 'A')])

    with pytest.raises(EmptyCriterionSet):
        engine.score(decision)


def test_editing_recomputes(engine, three_way_decision):
    """Test the editing context rescoring on exit."""
    engine.recompute(three_way_decision)

    with engine.editing(three_way_decision) as decision:
        decision.set_rating('b', 'c1', 10)
        assert decision.state is DecisionState.EDITED

    assert three_way_decision.state is DecisionState.SCORED
    assert three_way_decision.results.winner.option.id == 'b'


def test_editing_failure_keeps_record_edited(engine, three_way_decision):
    """Test an exception inside the block skips recomputation."""
    engine.recompute(three_way_decision)

    with pytest.raises(RuntimeError):
        with engine.editing(three_way_decision) as decision:
            decision.set_rating('b', 'c1', 10)
            raise RuntimeError("abort edit")

    assert three_way_decision.state is DecisionState.EDITED


def test_failed_recompute_keeps_previous_cache(engine, three_way_decision):
    """Test a failed rescoring never replaces cached results."""
    original = engine.recompute(three_way_decision)
    three_way_decision.clear_rating('a', 'c1')

    with pytest.raises(MissingRating):
        engine.recompute(three_way_decision)

    assert three_way_decision.state is DecisionState.EDITED
    assert three_way_decision.cached_results == original


def test_configured_rating_scale(three_way_decision):
    """Test the engine applies the configured rating scale."""
    engine = ScoringEngine({'ratings': {'min': 0, 'max': 100}})
    three_way_decision.set_rating('c', 'c1', 80)

    results = engine.score(three_way_decision)

    assert results.winner.option.id == 'c'
    assert results.winner.score == 80 * 0.75 + 5 * 0.25
