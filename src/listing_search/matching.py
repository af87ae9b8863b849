"""
Field matching: does a listing satisfy a term group, and at which tier?

A listing is looked at through four pools, checked in priority order:

    tier      pool                                            weight
    tag       moods + styles + intents + category             3.0
    keyword   keywords + ai_suggested_keywords                2.0
    text      title + description + story_text + category     1.0
    ai_text   ai_generated_title + ai_generated_description   0.5

A group matches at the first tier where any of its variants is contained
in a pool element (tag/keyword) or in the pool string (text/ai_text).
Later tiers are not consulted, so one group contributes one weight.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from config.constants import DEFAULT_TERM_SEARCH_CONFIG, TermSearchConfig
from listing_search.models import Listing, TermGroup
from listing_search.text import join_normalized, normalize_tag_column, normalize_text


class MatchTier(str, Enum):
    TAG = "tag"
    KEYWORD = "keyword"
    TEXT = "text"
    AI_TEXT = "ai_text"


# Listing columns read by the matcher, in tier order
COLUMNS_SEARCHED = [
    "moods", "styles", "intents", "category",
    "keywords", "ai_suggested_keywords",
    "title", "description", "story_text",
    "ai_generated_title", "ai_generated_description",
]


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    weight: float
    tier: Optional[MatchTier] = None


NO_MATCH = MatchResult(matched=False, weight=0.0)


@dataclass(frozen=True)
class FieldPools:
    """Normalized, per-listing match pools. Build once, match many groups."""
    tags: List[str]
    keywords: List[str]
    text: str
    ai_text: str


def _normalized_elements(*columns) -> List[str]:
    pool = []
    for column in columns:
        for tag in normalize_tag_column(column):
            normalized = normalize_text(tag)
            if normalized:
                pool.append(normalized)
    return pool


def build_field_pools(listing: Listing) -> FieldPools:
    category = normalize_text(listing.category)
    tags = _normalized_elements(listing.moods, listing.styles, listing.intents)
    if category:
        tags.append(category)

    return FieldPools(
        tags=tags,
        keywords=_normalized_elements(listing.keywords, listing.ai_suggested_keywords),
        text=join_normalized(listing.title, listing.description, listing.story_text, listing.category),
        ai_text=join_normalized(listing.ai_generated_title, listing.ai_generated_description),
    )


def _in_elements(variants: Sequence[str], elements: Sequence[str]) -> bool:
    return any(variant in element for variant in variants for element in elements)


def _in_text(variants: Sequence[str], text: str) -> bool:
    return bool(text) and any(variant in text for variant in variants)


def match_pools(
    pools: FieldPools,
    group: TermGroup,
    config: TermSearchConfig = DEFAULT_TERM_SEARCH_CONFIG,
) -> MatchResult:
    """Match one term group against prebuilt pools, stopping at the first tier hit."""
    variants = [v for v in (normalize_text(v) for v in group.variants or [group.term]) if v]
    if not variants:
        return NO_MATCH

    if _in_elements(variants, pools.tags):
        return MatchResult(True, config.TAG_WEIGHT, MatchTier.TAG)
    if _in_elements(variants, pools.keywords):
        return MatchResult(True, config.KEYWORD_WEIGHT, MatchTier.KEYWORD)
    if _in_text(variants, pools.text):
        return MatchResult(True, config.TEXT_WEIGHT, MatchTier.TEXT)
    if _in_text(variants, pools.ai_text):
        return MatchResult(True, config.AI_TEXT_WEIGHT, MatchTier.AI_TEXT)
    return NO_MATCH


def match_term_group(
    listing: Listing,
    group: TermGroup,
    config: TermSearchConfig = DEFAULT_TERM_SEARCH_CONFIG,
) -> MatchResult:
    return match_pools(build_field_pools(listing), group, config)
