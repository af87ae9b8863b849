"""
Ranking: hard-filter by minimum matched groups, then sort by score.

    score = sum(tier weights of matched groups) + matched_groups * MATCH_BONUS

Listings matching fewer than min_matches_required() groups are dropped
outright. Ties keep candidate (newest-first) order.
"""

import math
from typing import List, Sequence, Tuple

from config.constants import DEFAULT_TERM_SEARCH_CONFIG, TermSearchConfig
from listing_search.matching import COLUMNS_SEARCHED, build_field_pools, match_pools
from listing_search.models import Listing, SearchDebug, TermGroup


def min_matches_required(group_count: int, config: TermSearchConfig = DEFAULT_TERM_SEARCH_CONFIG) -> int:
    """All groups for 1-2 terms; ceil(70%) from SUPERMAJORITY_MIN_GROUPS terms up."""
    if group_count < config.SUPERMAJORITY_MIN_GROUPS:
        return group_count
    # round() first: 0.7 * 10 is 7.000000000000001 in binary floating point
    return math.ceil(round(config.SUPERMAJORITY_RATIO * group_count, 9))


def rank(
    listings: Sequence[Listing],
    term_groups: Sequence[TermGroup],
    limit: int,
    config: TermSearchConfig = DEFAULT_TERM_SEARCH_CONFIG,
) -> Tuple[List[Listing], SearchDebug]:
    """
    Score and order listings against term groups.

    Returns:
        (ranked listings truncated to limit, debug block). term_match_counts
        and direct_matches are counted before truncation.
    """
    if not term_groups:
        return [], SearchDebug(columns_searched=list(COLUMNS_SEARCHED))

    required = min_matches_required(len(term_groups), config)
    match_counts = {group.term: 0 for group in term_groups}
    scored: List[Tuple[float, Listing]] = []

    for listing in listings:
        pools = build_field_pools(listing)
        matched = 0
        weight = 0.0
        for group in term_groups:
            result = match_pools(pools, group, config)
            if result.matched:
                matched += 1
                weight += result.weight
                match_counts[group.term] += 1

        if matched < required:
            continue
        scored.append((weight + matched * config.MATCH_BONUS, listing))

    ranked = sorted(scored, key=lambda item: item[0], reverse=True)

    debug = SearchDebug(
        columns_searched=list(COLUMNS_SEARCHED),
        term_match_counts=match_counts,
        min_matches_required=required,
        total_listings_scanned=len(listings),
        direct_matches=len(scored),
    )
    return [listing for _, listing in ranked[:limit]], debug
