"""
Static search vocabulary: synonym table and stop words.

SYNONYMS maps an informal or variant word to the canonical term listings
are tagged with. It is the only place synonym policy lives; add a line
here to teach search a new variant. Both tables are read-only and can be
replaced per call by passing a different mapping to the extractor and
normalizer functions.
"""

from types import MappingProxyType
from typing import Mapping

from listing_search.text import normalize_term


_SYNONYMS = {
    # Moods
    "whimsy": "whimsical",
    "playful": "whimsical",
    "funky": "whimsical",
    "fun": "whimsical",
    "quirk": "quirky",
    "quirks": "quirky",
    "unusual": "quirky",
    "nostalgia": "nostalgic",
    "impulse": "impulsive",
    "spontaneous": "impulsive",
    "chilled": "chill",
    "calm": "chill",
    "calming": "chill",
    "peaceful": "chill",
    "serene": "chill",
    "cosy": "cozy",
    "comfy": "cozy",
    "heartfelt": "warm-heart",
    "festive": "celebrate",
    "celebration": "celebrate",
    "party": "celebrate",

    # Styles
    "antique": "vintage",
    "antiques": "vintage",
    "retro": "vintage",
    "classic": "vintage",
    "midcentury": "mid-century",
    "midcenturymodern": "mid-century",
    "mcm": "mid-century",
    "contemporary": "modern",
    "sleek": "modern",
    "farmhouse": "rustic",
    "country": "rustic",
    "kitsch": "kitschy",
    "campy": "kitschy",
    "elegance": "elegant",
    "sophisticated": "elegant",
    "refined": "elegant",
    "classy": "elegant",
    "boho": "bohemian",
    "artdeco": "art-deco",

    # Intents
    "gifts": "gift",
    "gifting": "gift",
    "present": "gift",
    "presents": "gift",
    "collectibles": "collectible",
    "collection": "collectible",
    "collector": "collectible",
    "collecting": "collectible",
    "collect": "collectible",
    "functional": "practical",
    "utility": "practical",
    "useful": "practical",
    "decoration": "decor",
    "decorative": "decor",
    "indulge": "indulgence",
    "treat": "indulgence",
    "accessories": "accessorize",
    "accessory": "accessorize",
    "dinnerware": "tableware",
    "serveware": "tableware",
}

SYNONYMS: Mapping[str, str] = MappingProxyType(_SYNONYMS)


STOP_WORDS = frozenset({
    # Articles, conjunctions, prepositions
    "a", "an", "the", "and", "or", "but", "nor", "so", "yet",
    "for", "of", "to", "in", "on", "at", "by", "with", "without", "from",
    "into", "onto", "about", "around", "under", "over", "than", "as",
    "up", "out", "off",
    # Pronouns and determiners
    "i", "me", "my", "mine", "myself", "we", "us", "our", "you", "your",
    "he", "him", "his", "she", "her", "hers", "they", "them", "their",
    "it", "its", "this", "that", "these", "those", "who", "whom", "whose",
    "which", "what", "some", "any", "all", "each", "every", "another", "other",
    # Verbs of asking and being
    "is", "are", "was", "were", "be", "been", "being", "am",
    "do", "does", "did", "have", "has", "had", "can", "could", "would",
    "should", "will", "want", "wanted", "need", "needs", "looking", "look",
    "find", "show", "get", "buy", "give", "got",
    # Hedges and filler
    "really", "very", "maybe", "perhaps", "just", "kind", "kinda", "sort",
    "sorta", "like", "something", "somethin", "anything", "thing", "things",
    "stuff", "item", "items", "please", "thanks", "okay", "ok", "um", "uh",
    "also", "too", "more", "most", "much", "bit", "little", "lot", "nice",
    "good", "great", "cool",
    # Gift recipients rarely appear on listings themselves
    "mom", "mum", "mother", "dad", "father", "friend", "friends", "wife",
    "husband", "sister", "brother", "grandma", "grandpa", "grandmother",
    "grandfather", "aunt", "uncle", "son", "daughter", "boyfriend",
    "girlfriend", "someone", "somebody", "person", "people",
})


def canonical_term(word: str, synonyms: Mapping[str, str] = SYNONYMS) -> str:
    """
    Normalize a word and map it to its canonical term.

    Unmapped words pass through normalized; unusable words (empty or a
    single character) become "".
    """
    normalized = normalize_term(word)
    if not normalized:
        return ""
    return normalize_term(synonyms.get(normalized, normalized))
