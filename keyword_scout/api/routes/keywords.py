"""
Keyword research endpoints.

Full keyword search (main + related metrics), quick dropdown suggestions
and Google Trends related queries.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from loguru import logger

from keyword_scout.api.dependencies import (
    get_expander,
    get_orchestrator,
    get_token_issuer,
    get_trend_source,
)
from keyword_scout.api.models import (
    ErrorResponse,
    KeywordSearchResponse,
    QuickSuggestionsResponse,
    RelatedQueriesResponse,
)
from keyword_scout.api.routes.suggestions import MISSING_QUERY
from keyword_scout.research.trends import fallback_related_queries
from keyword_scout.seo.search_orchestrator import SearchOrchestrator
from keyword_scout.seo.suggestion_expander import SuggestionExpander
from keyword_scout.session import RequestTokenIssuer

router = APIRouter(prefix="/api/v1/keywords", tags=["keywords"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.get("/search", response_model=KeywordSearchResponse, responses=ERROR_RESPONSES)
async def search_keywords(
    q: Optional[str] = Query(None, description="Seed keyword"),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
    tokens: RequestTokenIssuer = Depends(get_token_issuer),
):
    """Analyze a seed keyword and its related keywords.

    ``request_token`` increases with every search; clients should ignore
    responses older than the last token they received.
    """
    if not q or not q.strip():
        return JSONResponse(status_code=400, content=MISSING_QUERY)

    token = tokens.issue()
    result = await orchestrator.run(q.strip())
    result.request_token = token
    return KeywordSearchResponse.from_result(result)


@router.get("/quick", response_model=QuickSuggestionsResponse, responses=ERROR_RESPONSES)
def quick_suggestions(
    q: Optional[str] = Query(None, description="Seed keyword"),
    expander: SuggestionExpander = Depends(get_expander),
):
    """Instant dropdown suggestions (no network calls)."""
    if not q or not q.strip():
        return JSONResponse(status_code=400, content=MISSING_QUERY)

    query = q.strip()
    return QuickSuggestionsResponse(query=query, suggestions=expander.quick_suggestions(query))


@router.get("/related", response_model=RelatedQueriesResponse, responses=ERROR_RESPONSES)
def related_queries(
    q: Optional[str] = Query(None, description="Seed keyword"),
    trend_source=Depends(get_trend_source),
):
    """Top related queries from Google Trends."""
    if not q or not q.strip():
        return JSONResponse(status_code=400, content=MISSING_QUERY)

    query = q.strip()
    if trend_source is None:
        logger.debug("Trend lookups disabled, returning fixed related queries")
        related = fallback_related_queries(query)
    else:
        related = trend_source.related_queries(query)

    return RelatedQueriesResponse(query=query, related=related)
