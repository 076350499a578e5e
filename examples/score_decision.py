"""Example: Score a single decision and save it."""

import json

from decision_scoring import Criterion, Decision, Option, ScoringEngine, load_config
from decision_scoring.services import DecisionStore, MessageBuilder, share_message
from decision_scoring.utils import format_score


def main():
    """Score a decision and display results."""

    config = load_config()
    engine = ScoringEngine(config)

    decision = Decision.create(
        "Where should we go on holiday?",
        description="One week in late summer, two adults.",
        criteria=[
            Criterion("cost", "Cost", 3),
            Criterion("weather", "Weather", 2),
            Criterion("food", "Food", 1),
        ],
        options=[
            Option("lisbon", "Lisbon"),
            Option("oslo", "Oslo"),
            Option("naples", "Naples"),
        ],
        ratings={
            ("lisbon", "cost"): 7, ("lisbon", "weather"): 8, ("lisbon", "food"): 8,
            ("oslo", "cost"): 3, ("oslo", "weather"): 6, ("oslo", "food"): 6,
            ("naples", "cost"): 8, ("naples", "weather"): 8, ("naples", "food"): 10,
        },
    )

    print(f"Scoring decision: {decision.title}")
    print("-" * 60)

    results = engine.recompute(decision)

    print(f"\n{'='*60}")
    print(f"RESULTS")
    print(f"{'='*60}")
    for rank, option_score in enumerate(results.option_scores, start=1):
        print(f"{rank}. {option_score.option.name:<12} {format_score(option_score.score)}")

    print(f"\n{MessageBuilder(config.get('messages')).winner_message(results)}")

    print(f"\n{'='*60}")
    print(f"CRITERIA WEIGHTS")
    print(f"{'='*60}")
    for criterion in decision.criteria:
        print(f"{criterion.name:<12} {results.normalized_weights[criterion.id] * 100:.0f}%")

    print(f"\nShare text: {share_message(decision, config.get('messages'))}")

    store = DecisionStore(config.get('storage'))
    path = store.save(decision)
    print(f"\nDecision saved to: {path}")
    print(json.dumps(results.to_dict()['margin'], indent=2))


if __name__ == '__main__':
    main()
