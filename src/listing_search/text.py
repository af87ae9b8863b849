"""
Text and tag normalization shared by every search stage.

normalize_text() is the single definition of "comparable text": lowercase,
only [a-z0-9], whitespace and hyphens, single spaces, trimmed. Query words,
term variants and listing fields all go through it before comparison.
"""

import json
import re
from typing import Any, List, Optional, Sequence

from core.logging import get_logger

logger = get_logger(__name__)


_NON_TERM_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")

# Tag cleanup
_EDGE_JUNK = re.compile(r'^[\["\s]+|[\]"\s]+$')
_INNER_JUNK = re.compile(r'["\[\]]')
_TIGHT_COMMA = re.compile(r",(\S)")


def normalize_text(text: Any) -> str:
    """Lowercase, replace anything outside [a-z0-9\\s-] with a space, collapse whitespace, trim."""
    if text is None:
        return ""
    lowered = str(text).lower()
    cleaned = _NON_TERM_CHARS.sub(" ", lowered)
    return _WHITESPACE.sub(" ", cleaned).strip()


def normalize_term(text: Any) -> str:
    """normalize_text(), but single characters and empties become ""."""
    normalized = normalize_text(text)
    if len(normalized) <= 1:
        return ""
    return normalized


def join_normalized(*parts: Any) -> str:
    """Normalize the space-joined concatenation of the non-empty parts."""
    return normalize_text(" ".join(str(part) for part in parts if part))


# =============================================================================
# Tag Columns
# =============================================================================

def clean_tag(tag: Any) -> str:
    """Trim stray quotes/brackets and put a space after tight commas."""
    cleaned = str(tag).strip()
    cleaned = _EDGE_JUNK.sub("", cleaned)
    cleaned = _INNER_JUNK.sub("", cleaned)
    return _TIGHT_COMMA.sub(r", \1", cleaned)


def normalize_tag_column(value: Any) -> List[str]:
    """
    Turn a tag column value into an ordered list of clean tag strings.

    Tag columns (moods, styles, intents, keywords) arrive in three shapes:

    - a list/tuple of strings: cleaned element by element
    - a JSON array string ('["Home Decor","Collectibles"]'): parsed, then cleaned
    - a comma-separated string ("Home Decor,Collectibles"): split, then cleaned

    A string that looks like JSON but does not parse falls through to comma
    splitting. Anything else yields no tags. Casing is preserved; comparison
    code lowercases via normalize_text().
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        return _clean_all(value)

    if not isinstance(value, str):
        logger.debug("Ignoring tag column of unsupported type", value_type=type(value).__name__)
        return []

    if value.strip().startswith("["):
        try:
            parsed = json.loads(value)
        except ValueError:
            logger.debug("Tag column is not valid JSON, splitting on commas", value=value[:80])
        else:
            if isinstance(parsed, list):
                return _clean_all(parsed)

    return _clean_all(value.split(","))


def _clean_all(tags: Sequence[Any]) -> List[str]:
    cleaned = (clean_tag(tag) for tag in tags if tag is not None)
    return [tag for tag in cleaned if tag]


def tags_to_db_format(tags: Optional[Sequence[Any]]) -> Optional[str]:
    """Inverse of normalize_tag_column for writes: clean each tag and comma-join."""
    if not tags:
        return None
    return ",".join(clean_tag(tag) for tag in tags)
