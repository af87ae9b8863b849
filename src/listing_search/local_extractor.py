"""
Deterministic local term extraction.

Used when the remote extractor is unavailable, and always safe to call:
no I/O, no randomness, no exceptions for any string input.
"""

from typing import AbstractSet, Dict, List, Mapping

from listing_search.models import TermGroup
from listing_search.text import normalize_term, normalize_text
from listing_search.vocabulary import STOP_WORDS, SYNONYMS, canonical_term


def extract_local(
    query: str,
    synonyms: Mapping[str, str] = SYNONYMS,
    stop_words: AbstractSet[str] = STOP_WORDS,
) -> List[TermGroup]:
    """
    Split a query into term groups keyed by canonical term.

    "funky retro lamp" -> [whimsical {funky, whimsical}, vintage {retro, vintage}, lamp {lamp}]

    Stop words are dropped before synonym lookup; words that normalize to a
    single character are skipped. Groups come out in first-seen order.
    """
    grouped: Dict[str, List[str]] = {}

    for word in normalize_text(query).split():
        if word in stop_words:
            continue
        canonical = canonical_term(word, synonyms)
        if not canonical:
            continue
        variants = grouped.setdefault(canonical, [canonical])
        raw = normalize_term(word)
        if raw and raw not in variants:
            variants.append(raw)

    return [TermGroup(term=term, variants=variants) for term, variants in grouped.items()]
