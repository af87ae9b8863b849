"""
Candidate fetching from the Supabase listings table.

Search scores an in-memory window of the most recent active listings, so
this is one read-only query per search: no pagination, no retries.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from config.constants import (
    ACTIVE_STATUS,
    DEFAULT_TERM_SEARCH_CONFIG,
    SELLER_PROFILE_PROJECTION,
    TermSearchConfig,
)
from config.database import get_supabase_client
from config.settings import get_settings
from core.logging import get_logger
from listing_search.models import Listing

logger = get_logger(__name__)


def candidate_window(limit: int, config: TermSearchConfig = DEFAULT_TERM_SEARCH_CONFIG) -> int:
    """
    Number of recent listings to scan for a request of `limit` results.

    The browse window dominates for every limit up to 25; larger limits
    scan limit * CANDIDATE_MULTIPLIER rows.
    """
    return max(limit * config.CANDIDATE_MULTIPLIER, config.MIN_CANDIDATES, config.BROWSE_WINDOW)


class CandidateFetcher:
    """Loads active listings, newest first, with the seller profile joined in."""

    def __init__(
        self,
        client=None,
        table: Optional[str] = None,
        config: TermSearchConfig = DEFAULT_TERM_SEARCH_CONFIG,
    ):
        self._client = client
        self._table = table or get_settings().listings_table
        self._config = config

    @property
    def client(self):
        """Supabase client; resolved lazily so a missing config only fails the fetch."""
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    def fetch(self, limit: int) -> List[Listing]:
        """
        Fetch candidate listings for a search returning `limit` results.

        Returns [] on any storage error; search then reports no results
        instead of failing.
        """
        window = candidate_window(limit, self._config)

        try:
            response = (
                self.client.table(self._table)
                .select(f"*, {SELLER_PROFILE_PROJECTION}")
                .eq("status", ACTIVE_STATUS)
                .order("created_at", desc=True)
                .limit(window)
                .execute()
            )
        except Exception as e:
            logger.error("Candidate fetch failed", table=self._table, window=window, error=str(e))
            return []

        rows = response.data or []
        listings = [listing for listing in (self._to_listing(row) for row in rows) if listing is not None]

        logger.debug("Fetched candidate listings", requested=window, rows=len(rows), active=len(listings))
        return listings

    @staticmethod
    def _to_listing(row: Dict[str, Any]) -> Optional[Listing]:
        try:
            listing = Listing.model_validate(row)
        except ValidationError as e:
            logger.warning("Skipping malformed listing row", listing_id=row.get("id"), error=str(e))
            return None
        if listing.status is not None and listing.status != ACTIVE_STATUS:
            return None
        return listing
