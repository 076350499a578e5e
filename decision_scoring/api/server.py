"""HTTP API around the scoring engine and its collaborators."""

import logging
from typing import Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse

from ..core.decision import Decision, ratings_from_nested
from ..core.engine import ScoringEngine
from ..errors import DecisionNotFound, DecisionScoringError, StorageError
from ..models import Criterion, Option, Results
from ..services.insights import InsightClient
from ..services.messages import MessageBuilder
from ..services.report import THEMES, ReportRenderer, content_disposition, report_filename
from ..services.storage import DecisionStore
from ..utils import load_config, setup_logging
from .models import (
    DecisionRequest,
    DecisionResponse,
    InsightResponse,
    ResultsResponse,
    ShareResponse,
)

logger = logging.getLogger(__name__)


def _contents(request: DecisionRequest):
    criteria = [Criterion(id=c.id, name=c.name, weight=c.weight) for c in request.criteria]
    options = [Option(id=o.id, name=o.name) for o in request.options]
    return criteria, options, ratings_from_nested(request.ratings)


def create_app(config: Optional[Dict] = None) -> FastAPI:
    """Build the API application.

    Args:
        config: Application configuration; the bundled config.yaml when omitted

    Returns:
        FastAPI application
    """
    if config is None:
        config = load_config()
    setup_logging(config.get('logging'))

    messages_config = config.get('messages', {})
    engine = ScoringEngine(config)
    store = DecisionStore(config.get('storage', {}))
    messages = MessageBuilder(messages_config)
    renderer = ReportRenderer(config.get('report', {}), messages_config)
    insight_client = InsightClient(config.get('insights', {}), messages_config)

    app = FastAPI(title="Decision Scoring API",
                  description="Score options against weighted criteria and rank them")
    app.state.engine = engine
    app.state.store = store
    app.state.insights = insight_client

    @app.exception_handler(DecisionScoringError)
    async def scoring_error_handler(request: Request, exc: DecisionScoringError):
        return JSONResponse(
            status_code=422,
            content={"error": type(exc).__name__, "detail": str(exc), "message": exc.message},
        )

    @app.exception_handler(DecisionNotFound)
    async def not_found_handler(request: Request, exc: DecisionNotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Decision storage is unavailable"})

    def results_response(results: Results) -> ResultsResponse:
        data = results.to_dict()
        data['winner_message'] = messages.winner_message(results)
        return ResultsResponse(**data)

    def decision_response(decision: Decision) -> DecisionResponse:
        data = decision.to_dict()
        data['results'] = results_response(decision.results) if decision.is_scored else None
        return DecisionResponse(**data)

    @app.post("/score", response_model=ResultsResponse)
    def score(request: DecisionRequest):
        """Score a decision without storing it."""
        criteria, options, ratings = _contents(request)
        decision = Decision.create(request.title, criteria, options, ratings,
                                   description=request.description)
        return results_response(engine.score(decision))

    @app.post("/decisions", response_model=DecisionResponse, status_code=201)
    def create_decision(request: DecisionRequest):
        """Create, score and store a decision."""
        criteria, options, ratings = _contents(request)
        decision = Decision.create(request.title, criteria, options, ratings,
                                   description=request.description)
        engine.recompute(decision)
        store.save(decision)
        return decision_response(decision)

    @app.get("/decisions", response_model=List[DecisionResponse])
    def list_decisions():
        return [decision_response(d) for d in store.list_decisions()]

    @app.get("/decisions/{decision_id}", response_model=DecisionResponse)
    def get_decision(decision_id: str):
        return decision_response(store.get(decision_id))

    @app.put("/decisions/{decision_id}", response_model=DecisionResponse)
    def update_decision(decision_id: str, request: DecisionRequest):
        """Replace a decision's contents and rescore it."""
        decision = store.get(decision_id)
        criteria, options, ratings = _contents(request)
        with engine.editing(decision):
            decision.update_details(title=request.title, description=request.description or "")
            decision.replace_contents(criteria, options, ratings)
        store.save(decision)
        return decision_response(decision)

    @app.delete("/decisions/{decision_id}", status_code=204)
    def delete_decision(decision_id: str):
        if not store.delete(decision_id):
            raise HTTPException(status_code=404, detail=f"Decision not found: {decision_id}")

    @app.get("/decisions/{decision_id}/share", response_model=ShareResponse)
    def share_decision(decision_id: str):
        decision = store.get(decision_id)
        return ShareResponse(message=messages.share_message(decision.title, decision.results))

    @app.get("/decisions/{decision_id}/report", response_class=HTMLResponse)
    def decision_report(decision_id: str, theme: Optional[str] = None):
        """Printable HTML report."""
        if theme is not None and theme not in THEMES:
            raise HTTPException(status_code=400, detail=f"Unknown theme: {theme}")
        decision = store.get(decision_id)
        html = renderer.render(decision, theme=theme)
        return HTMLResponse(
            content=html,
            headers={"Content-Disposition": content_disposition(report_filename(decision))},
        )

    @app.post("/decisions/{decision_id}/insights", response_model=InsightResponse)
    def decision_insights(decision_id: str):
        """Narrative insight text; the fallback message when the service is down."""
        decision = store.get(decision_id)
        return InsightResponse(insights=insight_client.generate_or_fallback(decision))

    return app


def main():
    """Run the API server."""
    config = load_config()
    server = config.get('server', {})
    uvicorn.run(create_app(config), host=server.get('host', '0.0.0.0'),
                port=server.get('port', 8000), reload=False)


if __name__ == "__main__":
    main()
