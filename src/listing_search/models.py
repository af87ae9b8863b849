"""
Pydantic models for listing search.

TermGroup is the unit every stage of the pipeline passes around; Listing
is a read-only projection of a storage row; SearchResult is what callers
get back.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Enums
# ============================================================================

class TermSource(str, Enum):
    """Where the term groups used by a search came from."""
    OPENAI = "openai"   # Remote LLM extraction
    LOCAL = "local"     # Deterministic local extractor
    VISION = "vision"   # Supplied by the caller (e.g. an image-understanding pass)


# ============================================================================
# Term Groups
# ============================================================================

class TermGroup(BaseModel):
    """
    A canonical search concept plus every spelling/synonym that counts as a hit.

    Built by normalize_groups(), which guarantees that term is normalized and
    non-empty and that variants contains term.
    """
    term: str
    variants: List[str] = Field(default_factory=list)


class ExtractedTerm(BaseModel):
    """
    A raw term/variants pair as returned by an extractor or an API caller.

    Nothing is normalized yet; normalize_groups() does that.
    """
    model_config = ConfigDict(extra="ignore")

    term: str
    variants: List[str] = Field(default_factory=list)

    @field_validator("term", mode="before")
    @classmethod
    def coerce_term(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator("variants", mode="before")
    @classmethod
    def coerce_variants(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple)):
            return [str(item) for item in v if item is not None]
        # Left for List[str] validation to reject (numbers, booleans, objects)
        return v


class TermExtractionPayload(BaseModel):
    """The JSON object the remote extractor is asked to return."""
    model_config = ConfigDict(extra="ignore")

    terms: List[ExtractedTerm]

    @field_validator("terms", mode="before")
    @classmethod
    def coerce_bare_strings(cls, v):
        # LLMs sometimes answer {"terms": ["lamp", ...]} instead of objects
        if isinstance(v, list):
            return [{"term": item} if isinstance(item, str) else item for item in v]
        return v


# ============================================================================
# Listings
# ============================================================================

class Listing(BaseModel):
    """
    Read-only projection of a marketplace listing row.

    Tag columns (moods, styles, intents) and keyword columns are stored
    inconsistently (array, JSON-array string or comma-separated string), so
    they are kept as-is here and normalized at match time. Unknown columns
    (price, seller profile join, ...) are preserved for the response.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    story_text: Optional[str] = None
    category: Optional[str] = None

    moods: Any = None
    styles: Any = None
    intents: Any = None

    keywords: Any = None
    ai_suggested_keywords: Any = None

    ai_generated_title: Optional[str] = None
    ai_generated_description: Optional[str] = None

    status: Optional[str] = None
    created_at: Optional[str] = None

    @field_validator("id", "created_at", mode="before")
    @classmethod
    def coerce_to_str(cls, v):
        if v is None:
            return None
        return str(v)


# ============================================================================
# Results
# ============================================================================

class SearchInterpretation(BaseModel):
    """How the query was understood."""
    original_query: str
    term_groups: List[TermGroup]
    source: TermSource


class SearchDebug(BaseModel):
    """Observability block; not meant for production decisions."""
    columns_searched: List[str] = Field(default_factory=list)
    term_match_counts: Dict[str, int] = Field(default_factory=dict)
    min_matches_required: int = 0
    total_listings_scanned: int = 0
    direct_matches: int = 0


class SearchResult(BaseModel):
    """Ranked listings (best first) plus interpretation and debug info."""
    listings: List[Listing] = Field(default_factory=list)
    interpretation: Optional[SearchInterpretation] = None
    debug: Optional[SearchDebug] = None


# ============================================================================
# API Request Models
# ============================================================================

class SemanticSearchRequest(BaseModel):
    """Request body for free-text search."""
    query: str = Field(..., min_length=1, max_length=500, description="Free-text or transcribed voice query")
    limit: Optional[int] = Field(None, ge=1, description="Maximum listings to return (default SEARCH_DEFAULT_LIMIT, at most SEARCH_MAX_LIMIT)")


class TermSearchRequest(BaseModel):
    """Request body for search by pre-extracted term groups."""
    term_groups: List[ExtractedTerm] = Field(default_factory=list, description="Term groups from a non-text source")
    limit: Optional[int] = Field(None, ge=1, description="Maximum listings to return (default SEARCH_DEFAULT_LIMIT, at most SEARCH_MAX_LIMIT)")
    query: Optional[str] = Field(None, max_length=500, description="Optional spoken/typed query to merge in")
