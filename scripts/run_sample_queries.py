"""
Run sample marketplace queries through the full listing search pipeline.
Shows the term interpretation, debug counts and top listings for each query.

Usage:
    PYTHONPATH=src python scripts/run_sample_queries.py
    PYTHONPATH=src python scripts/run_sample_queries.py --json results.json
"""

import argparse
import json
import time
from dotenv import load_dotenv
load_dotenv()

from core.logging import configure_logging
from listing_search.service import ListingSearchService
from listing_search.text import normalize_tag_column


QUERIES = [
    "whimsical gift for mom that is vintage",
    "cozy mug for myself",
    "retro stereo under $100",
    "elegant decor",
    "something quirky for a friend",
]

TOP_N = 5  # Show top N listings per query


def _tags(value) -> str:
    return ", ".join(normalize_tag_column(value)) or "none"


def run_queries(limit: int):
    print("Initializing listing search service...")
    service = ListingSearchService()
    print("Service ready.\n")

    all_results = []
    total_start = time.time()

    for idx, query in enumerate(QUERIES, 1):
        print(f"{'=' * 80}")
        print(f"[{idx:2d}/{len(QUERIES)}] \"{query}\"")
        print(f"{'=' * 80}")

        t_start = time.time()
        try:
            result = service.search(query, limit=limit)
            elapsed_ms = int((time.time() - t_start) * 1000)

            interpretation = result.interpretation
            debug = result.debug
            terms = [group.term for group in interpretation.term_groups] if interpretation else []

            print(f"\n  Source:     {interpretation.source.value if interpretation else '-'}")
            print(f"  Terms:      {', '.join(terms) or 'none'}")
            if debug:
                print(f"  Scanned:    {debug.total_listings_scanned}")
                print(f"  Required:   {debug.min_matches_required} of {len(terms)} terms")
                print(f"  Matches:    {debug.term_match_counts}")
            print(f"  Elapsed:    {elapsed_ms}ms\n")

            if result.listings:
                print(f"  Top {min(TOP_N, len(result.listings))} Listings:")
                for i, listing in enumerate(result.listings[:TOP_N], 1):
                    print(f"  {i}. {listing.title or '(untitled)'}")
                    print(f"     Category: {listing.category or 'N/A'}")
                    print(f"     Moods:    {_tags(listing.moods)}")
                    print(f"     Styles:   {_tags(listing.styles)}")
                    print(f"     Intents:  {_tags(listing.intents)}")
            else:
                print("  NO RESULTS")

            all_results.append({
                "query": query,
                "source": interpretation.source.value if interpretation else None,
                "terms": terms,
                "count": len(result.listings),
                "top_results": [listing.title for listing in result.listings[:TOP_N]],
                "elapsed_ms": elapsed_ms,
                "success": True,
            })

        except Exception as e:
            elapsed_ms = int((time.time() - t_start) * 1000)
            print(f"\n  ERROR: {e}")
            all_results.append({
                "query": query,
                "elapsed_ms": elapsed_ms,
                "success": False,
                "error": str(e),
            })

        print()

    total_elapsed = int(time.time() - total_start)
    succeeded = sum(1 for r in all_results if r["success"])
    print(f"{'=' * 80}")
    print(f"Done: {succeeded}/{len(QUERIES)} queries succeeded in {total_elapsed}s")
    return all_results


def main():
    parser = argparse.ArgumentParser(description="Run sample listing search queries")
    parser.add_argument("--limit", type=int, default=24, help="Listings per query")
    parser.add_argument("--json", dest="json_path", help="Also write results to this JSON file")
    args = parser.parse_args()

    configure_logging(json_logs=False, log_level="WARNING")
    results = run_queries(args.limit)

    if args.json_path:
        with open(args.json_path, "w") as f:
            json.dump(results, f, indent=2)
        print(f"Results written to {args.json_path}")


if __name__ == "__main__":
    main()
