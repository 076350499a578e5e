"""Tests for the AI insight collaborator."""

import pytest
import requests
from decision_scoring import Criterion, Decision, Option, ScoringEngine
from decision_scoring.errors import InsightUnavailable
from decision_scoring.services import InsightClient, build_insight_prompt
from decision_scoring.services import insights as insights_module


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        return self.payload


@pytest.fixture
def decision():
    decision = Decision.create(
        "Job offer",
        description="Two offers in the same city",
        criteria=[Criterion('pay', 'Salary', 2), Criterion('growth', 'Growth', 2)],
        options=[Option('s', 'Startup'), Option('c', 'Corporate')],
        ratings={('s', 'pay'): 6, ('s', 'growth'): 9, ('c', 'pay'): 8, ('c', 'growth'): 5},
    )
    ScoringEngine().recompute(decision)
    return decision


@pytest.fixture
def client():
    return InsightClient({'url': 'http://insights.test/api/generate', 'model': 'test-model',
                          'retries': 1, 'retry_delay': 0})


def test_prompt_describes_decision(decision):
    prompt = build_insight_prompt(decision)

    assert 'Decision: Job offer' in prompt
    assert 'Context: Two offers in the same city' in prompt
    assert '- Salary: 50%' in prompt
    assert '- Startup: 7.5 (Salary=6, Growth=9)' in prompt
    assert 'Startup is better by 1.0 points' in prompt


def test_generate_posts_prompt(monkeypatch, decision, client):
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        return FakeResponse({'response': '  Startup offers more growth.  '})

    monkeypatch.setattr(insights_module.requests, 'post', fake_post)

    assert client.generate(decision) == 'Startup offers more growth.'
    assert len(calls) == 1
    url, payload, _ = calls[0]
    assert url == 'http://insights.test/api/generate'
    assert payload['model'] == 'test-model'
    assert payload['stream'] is False
    assert 'Job offer' in payload['prompt']


def test_generate_retries_then_fails(monkeypatch, decision, client):
    attempts = []

    def failing_post(url, json=None, timeout=None):
        attempts.append(url)
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(insights_module.requests, 'post', failing_post)

    with pytest.raises(InsightUnavailable):
        client.generate(decision)
    assert len(attempts) == 2


def test_empty_response_is_unavailable(monkeypatch, decision, client):
    monkeypatch.setattr(insights_module.requests, 'post',
                        lambda url, json=None, timeout=None: FakeResponse({'response': ''}))

    with pytest.raises(InsightUnavailable):
        client.generate(decision)


def test_http_error_falls_back(monkeypatch, decision, client):
    monkeypatch.setattr(insights_module.requests, 'post',
                        lambda url, json=None, timeout=None: FakeResponse({}, status_code=503))

    assert client.generate_or_fallback(decision) == client.fallback_message


def test_insights_do_not_touch_scores(monkeypatch, decision, client):
    """Test an insight failure leaves the cached results alone."""
    before = decision.results
    monkeypatch.setattr(insights_module.requests, 'post',
                        lambda url, json=None, timeout=None: FakeResponse({}, status_code=500))

    client.generate_or_fallback(decision)

    assert decision.results == before


@pytest.mark.parametrize('body', [['not', 'a', 'dict'], 'plain text', {'response': 42}])
def test_unexpected_body_falls_back(monkeypatch, decision, client, body):
    """Test malformed JSON bodies produce the fallback text."""
    monkeypatch.setattr(insights_module.requests, 'post',
                        lambda url, json=None, timeout=None: FakeResponse(body))

    with pytest.raises(InsightUnavailable):
        client.generate(decision)
    assert client.generate_or_fallback(decision) == client.fallback_message
