"""
Search policy constants.

These are values that don't change based on environment but may need
to be tuned. The matcher and ranker only read them through
TermSearchConfig, so retuning never touches the matching algorithm.
"""

from dataclasses import dataclass


# =============================================================================
# Term Search Configuration
# =============================================================================

@dataclass(frozen=True)
class TermSearchConfig:
    """Weights and thresholds for term-based listing search."""

    # Weight per field tier (first tier that matches wins)
    TAG_WEIGHT: float = 3.0
    KEYWORD_WEIGHT: float = 2.0
    TEXT_WEIGHT: float = 1.0
    AI_TEXT_WEIGHT: float = 0.5

    # Flat bonus added per matched term group
    MATCH_BONUS: float = 2.0

    # Share of term groups a listing must match once there are enough groups.
    # Below SUPERMAJORITY_MIN_GROUPS every group must match.
    SUPERMAJORITY_RATIO: float = 0.7
    SUPERMAJORITY_MIN_GROUPS: int = 3

    # Candidate window: max(limit * MULTIPLIER, MIN_CANDIDATES, BROWSE_WINDOW)
    CANDIDATE_MULTIPLIER: int = 20
    MIN_CANDIDATES: int = 200
    BROWSE_WINDOW: int = 500


DEFAULT_TERM_SEARCH_CONFIG = TermSearchConfig()


# Listing status that makes a listing searchable
ACTIVE_STATUS = "active"

# Seller profile projection joined onto every listing row (not read by search)
SELLER_PROFILE_PROJECTION = (
    "profiles:seller_id (display_name, location_city, avatar_url, ts_badge, rating, review_count)"
)
