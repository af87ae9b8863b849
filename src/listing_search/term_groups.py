"""
Term group normalization.

Whatever produced the raw groups (remote LLM, local extractor, an image
pass upstream, an API caller), they go through normalize_groups() before
matching so that every group honors the TermGroup invariants.
"""

from typing import Any, Dict, Iterable, List, Mapping, Union

from listing_search.models import ExtractedTerm, TermGroup
from listing_search.text import normalize_term
from listing_search.vocabulary import SYNONYMS, canonical_term

RawTermGroup = Union[TermGroup, ExtractedTerm, Mapping[str, Any]]


def normalize_groups(
    raw_groups: Iterable[RawTermGroup],
    synonyms: Mapping[str, str] = SYNONYMS,
) -> List[TermGroup]:
    """
    Canonicalize and de-duplicate raw term groups.

    - the primary term is normalized and mapped through the synonym table
      twice, so an informal word returned as `term` still lands on its
      canonical form; groups whose term resolves to "" are dropped
    - variants are normalized the same way (without synonym lookup) and
      unioned with the raw and canonical term
    - groups that share a canonical term are merged into one
    """
    merged: Dict[str, List[str]] = {}

    for raw in raw_groups:
        raw_term, raw_variants = _unpack(raw)

        first_pass = canonical_term(raw_term, synonyms)
        term = canonical_term(first_pass, synonyms)
        if not term:
            continue

        variants = merged.setdefault(term, [term])
        for candidate in (normalize_term(raw_term), first_pass, *raw_variants):
            variant = normalize_term(candidate)
            if variant and variant not in variants:
                variants.append(variant)

    return [TermGroup(term=term, variants=variants) for term, variants in merged.items()]


def _unpack(raw: RawTermGroup):
    if isinstance(raw, (TermGroup, ExtractedTerm)):
        return raw.term, raw.variants
    extracted = ExtractedTerm.model_validate(raw)
    return extracted.term, extracted.variants
