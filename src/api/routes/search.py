"""
Search API Routes.

Provides term-based listing search by free text and by pre-extracted
term groups.

NOTE: Routes use `def` (not `async def`) because the underlying services
(OpenAI SDK, Supabase client) are synchronous. FastAPI runs sync route
handlers in a thread pool, avoiding event-loop blocking.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException

from config.settings import get_settings
from core.logging import get_logger
from listing_search.models import SearchResult, SemanticSearchRequest, TermSearchRequest
from listing_search.service import get_listing_search_service

logger = get_logger(__name__)

router = APIRouter(prefix="/api/search", tags=["Search"])


def _check_limit(limit: Optional[int]) -> None:
    max_limit = get_settings().search_max_limit
    if limit is not None and limit > max_limit:
        raise HTTPException(status_code=422, detail=f"limit must be at most {max_limit}")


@router.post(
    "/semantic",
    response_model=SearchResult,
    summary="Search listings by free text",
)
def semantic_search(request: SemanticSearchRequest) -> SearchResult:
    """
    Search listings with a typed or transcribed query.

    - Terms are extracted by the LLM, or locally when it is unavailable
    - Synonyms are normalized ("retro lamp" finds "vintage" listings)
    - Short queries must match every term; longer ones ~70% of terms
    """
    _check_limit(request.limit)
    service = get_listing_search_service()
    try:
        return service.search(request.query, limit=request.limit)
    except Exception as e:
        logger.error("Semantic search failed", query=request.query, error=str(e))
        raise HTTPException(status_code=500, detail="Search failed")


@router.post(
    "/terms",
    response_model=SearchResult,
    summary="Search listings by pre-extracted term groups",
)
def term_search(request: TermSearchRequest) -> SearchResult:
    """
    Search listings with term groups from a non-text source (e.g. an image).

    If `query` is also given, its extracted terms are merged with the
    supplied groups and it is reported as the original query.
    """
    _check_limit(request.limit)
    service = get_listing_search_service()
    try:
        groups = list(request.term_groups)
        if request.query and request.query.strip():
            query_groups, _ = service.extract_terms(request.query)
            groups.extend(query_groups)

        return service.search_by_terms(
            groups,
            limit=request.limit,
            source_query=request.query or "",
        )
    except Exception as e:
        logger.error(
            "Term search failed",
            terms=[group.term for group in request.term_groups],
            error=str(e),
        )
        raise HTTPException(status_code=500, detail="Search failed")
