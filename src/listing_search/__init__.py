"""
Listing Search Module: term-based relevance search over marketplace listings.

Provides:
- ListingSearchService: free-text and pre-extracted term search
- RemoteTermExtractor: OpenAI term extraction with local fallback
- extract_local / normalize_groups: deterministic term extraction and normalization
- CandidateFetcher: recent active listings from Supabase
- rank / match_term_group: tiered field matching and scoring
- normalize_tag_column / tags_to_db_format: tag column parsing and writing
"""

from listing_search.candidates import CandidateFetcher, candidate_window
from listing_search.local_extractor import extract_local
from listing_search.matching import MatchResult, MatchTier, build_field_pools, match_term_group
from listing_search.models import (
    Listing,
    SearchDebug,
    SearchInterpretation,
    SearchResult,
    TermGroup,
    TermSource,
)
from listing_search.ranking import min_matches_required, rank
from listing_search.service import ListingSearchService, get_listing_search_service
from listing_search.term_extractor import (
    RemoteTermExtractor,
    TermExtractionError,
    extract_term_groups,
    get_term_extractor,
    parse_extraction_content,
)
from listing_search.term_groups import normalize_groups
from listing_search.text import normalize_tag_column, normalize_term, normalize_text, tags_to_db_format
from listing_search.vocabulary import STOP_WORDS, SYNONYMS, canonical_term

__all__ = [
    "CandidateFetcher",
    "candidate_window",
    "extract_local",
    "MatchResult",
    "MatchTier",
    "build_field_pools",
    "match_term_group",
    "Listing",
    "SearchDebug",
    "SearchInterpretation",
    "SearchResult",
    "TermGroup",
    "TermSource",
    "min_matches_required",
    "rank",
    "ListingSearchService",
    "get_listing_search_service",
    "RemoteTermExtractor",
    "TermExtractionError",
    "extract_term_groups",
    "get_term_extractor",
    "parse_extraction_content",
    "normalize_groups",
    "normalize_tag_column",
    "normalize_term",
    "normalize_text",
    "tags_to_db_format",
    "STOP_WORDS",
    "SYNONYMS",
    "canonical_term",
]
