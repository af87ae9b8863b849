"""
Listing search service.

Two entry points over one pipeline:

    search(query)              extract (remote, local fallback) -> normalize -> fetch -> rank
    search_by_terms(groups)    normalize -> fetch -> rank

Each call is independent; the service holds only its collaborators and
read-only configuration, so one instance is shared across requests.
"""

import threading
import time
from typing import Iterable, List, Mapping, Optional, Tuple

from config.constants import DEFAULT_TERM_SEARCH_CONFIG, TermSearchConfig
from config.settings import get_settings
from core.logging import get_logger
from listing_search.candidates import CandidateFetcher
from listing_search.models import (
    SearchInterpretation,
    SearchResult,
    TermGroup,
    TermSource,
)
from listing_search.ranking import rank
from listing_search.term_extractor import RemoteTermExtractor, extract_term_groups, get_term_extractor
from listing_search.term_groups import RawTermGroup, normalize_groups
from listing_search.vocabulary import SYNONYMS

logger = get_logger(__name__)


class ListingSearchService:
    """Term-based listing search over recent active listings."""

    def __init__(
        self,
        extractor: Optional[RemoteTermExtractor] = None,
        fetcher: Optional[CandidateFetcher] = None,
        synonyms: Mapping[str, str] = SYNONYMS,
        config: TermSearchConfig = DEFAULT_TERM_SEARCH_CONFIG,
        default_limit: Optional[int] = None,
    ):
        self._extractor = extractor
        self._fetcher = fetcher
        self._synonyms = synonyms
        self._config = config
        self._default_limit = default_limit or get_settings().search_default_limit

    @property
    def extractor(self) -> RemoteTermExtractor:
        if self._extractor is None:
            self._extractor = get_term_extractor()
        return self._extractor

    @property
    def fetcher(self) -> CandidateFetcher:
        if self._fetcher is None:
            self._fetcher = CandidateFetcher(config=self._config)
        return self._fetcher

    def _resolve_limit(self, limit: Optional[int]) -> int:
        if not limit or limit < 1:
            return self._default_limit
        return limit

    # =========================================================================
    # Entry Points
    # =========================================================================

    def extract_terms(self, query: str) -> Tuple[List[TermGroup], TermSource]:
        """Normalized term groups for a query and the extractor that produced them."""
        return extract_term_groups(query, self.extractor, self._synonyms)

    def search(self, query: str, limit: Optional[int] = None) -> SearchResult:
        """
        Free-text search.

        An empty or whitespace-only query returns an empty result without
        touching the extractor or storage.
        """
        if not query or not query.strip():
            return SearchResult(listings=[], interpretation=None, debug=None)

        term_groups, source = self.extract_terms(query)
        return self._run(term_groups, source, query, self._resolve_limit(limit))

    def search_by_terms(
        self,
        term_groups: Iterable[RawTermGroup],
        limit: Optional[int] = None,
        source_query: str = "",
    ) -> SearchResult:
        """
        Search with term groups extracted elsewhere (e.g. from an image).

        Groups are normalized here, so raw {term, variants} pairs are fine.
        """
        groups = normalize_groups(term_groups, self._synonyms)
        return self._run(groups, TermSource.VISION, source_query, self._resolve_limit(limit))

    # =========================================================================
    # Pipeline
    # =========================================================================

    def _run(
        self,
        term_groups: List[TermGroup],
        source: TermSource,
        original_query: str,
        limit: int,
    ) -> SearchResult:
        t_start = time.time()
        interpretation = SearchInterpretation(
            original_query=original_query,
            term_groups=term_groups,
            source=source,
        )

        candidates = self.fetcher.fetch(limit) if term_groups else []
        listings, debug = rank(candidates, term_groups, limit, self._config)

        logger.info(
            "Listing search complete",
            query=original_query,
            terms=[group.term for group in term_groups],
            source=source.value,
            scanned=debug.total_listings_scanned,
            matched=debug.direct_matches,
            returned=len(listings),
            min_matches_required=debug.min_matches_required,
            latency_ms=int((time.time() - t_start) * 1000),
        )

        return SearchResult(listings=listings, interpretation=interpretation, debug=debug)


_service: Optional[ListingSearchService] = None
_service_lock = threading.Lock()


def get_listing_search_service() -> ListingSearchService:
    """Get or create the ListingSearchService singleton (thread-safe)."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = ListingSearchService()
    return _service
