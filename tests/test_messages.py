"""Tests for winner messages and share text."""

import pytest
from decision_scoring import Criterion, Decision, Option, ScoringEngine, StaleResults
from decision_scoring.models import Margin, MarginBucket, NotApplicable
from decision_scoring.services import MessageBuilder, share_message


@pytest.fixture
def winner():
    return Option('a', 'Lisbon')


@pytest.fixture
def runner_up():
    return Option('b', 'Oslo')


def test_clear_choice(winner):
    margin = Margin(bucket=MarginBucket.CLEAR_CHOICE, winner=winner)

    assert MessageBuilder().margin_message(margin) == "Lisbon is the clear choice."


def test_narrow_margin(winner, runner_up):
    margin = Margin(bucket=MarginBucket.NARROW_MARGIN, winner=winner, runner_up=runner_up,
                    points=0.2, percent=2.6)

    assert MessageBuilder().margin_message(margin) == "Lisbon wins by a narrow margin."


def test_better_by(winner, runner_up):
    """Test points use one decimal and percent none."""
    margin = Margin(bucket=MarginBucket.BETTER_BY, winner=winner, runner_up=runner_up,
                    points=1.5, percent=1.5 / 6.5 * 100)

    assert MessageBuilder().margin_message(margin) == "Lisbon is better by 1.5 points (23% higher)."


def test_better_by_without_percent(winner, runner_up):
    """Test the percentage is left out when it cannot be computed."""
    margin = Margin(bucket=MarginBucket.BETTER_BY, winner=winner, runner_up=runner_up,
                    points=1.5, percent=NotApplicable)

    assert MessageBuilder().margin_message(margin) == "Lisbon is better by 1.5 points."


def test_decisively_better(winner, runner_up):
    margin = Margin(bucket=MarginBucket.DECISIVELY_BETTER, winner=winner, runner_up=runner_up,
                    points=3.0, percent=60.0)

    assert MessageBuilder().margin_message(margin) == "Lisbon is decisively better, leading by 3.0 points."


def test_custom_templates(winner):
    builder = MessageBuilder({'clear_choice': "Go with {option}!"})
    margin = Margin(bucket=MarginBucket.CLEAR_CHOICE, winner=winner)

    assert builder.margin_message(margin) == "Go with Lisbon!"


def test_share_message():
    """Test share text names the title, winner and margin."""
    decision = Decision.create(
        "Holiday",
        criteria=[Criterion('fun', 'Fun', 1)],
        options=[Option('a', 'Lisbon'), Option('b', 'Oslo')],
        ratings={('a', 'fun'): 9, ('b', 'fun'): 4},
    )
    ScoringEngine().recompute(decision)

    text = share_message(decision)

    assert '"Holiday"' in text
    assert 'the result is: Lisbon.' in text
    assert 'decisively better' in text


def test_share_requires_current_results():
    decision = Decision.create("Draft", options=[Option('a', 'A')])

    with pytest.raises(StaleResults):
        share_message(decision)
