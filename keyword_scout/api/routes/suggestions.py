"""
Autocomplete suggestion endpoint.

Live Google suggestions when reachable, local template catalogue otherwise.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from loguru import logger

from keyword_scout.api.dependencies import get_fetcher
from keyword_scout.api.models import ErrorResponse, SuggestionsResponse
from keyword_scout.seo.remote_suggestions import RemoteSuggestionFetcher

router = APIRouter(prefix="/api", tags=["suggestions"])

MISSING_QUERY = {"error": "Query parameter is required"}


@router.get(
    "/suggestions",
    response_model=SuggestionsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_suggestions(
    q: Optional[str] = Query(None, description="Seed keyword"),
    fetcher: RemoteSuggestionFetcher = Depends(get_fetcher),
):
    """Google-style suggestions for ``q``; ``source`` tells which path answered."""
    if not q or not q.strip():
        return JSONResponse(status_code=400, content=MISSING_QUERY)

    query = q.strip()
    logger.info(f"Fetching suggestions for '{query}'")
    result = fetcher.fetch(query)

    return SuggestionsResponse(
        query=query,
        suggestions=result.suggestions,
        source=result.source.value,
        count=result.count,
    )
