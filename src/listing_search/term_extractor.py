"""
Remote term extraction via OpenAI, with local fallback.

The remote extractor asks gpt-4o-mini to turn a free-text query into
canonical terms plus variants. It raises TermExtractionError on every
failure (disabled, no API key, network/HTTP error, unparsable payload) and
extract_term_groups() turns that into a fall back to extract_local().
"""

import json
import re
import threading
import time
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from config.settings import get_settings
from core.logging import get_logger
from listing_search.local_extractor import extract_local
from listing_search.models import ExtractedTerm, TermExtractionPayload, TermGroup, TermSource
from listing_search.term_groups import normalize_groups
from listing_search.vocabulary import SYNONYMS

logger = get_logger(__name__)


class TermExtractionError(Exception):
    """Remote term extraction failed; the caller should use the local extractor."""
    pass


# =============================================================================
# Prompt
# =============================================================================

_PROMPT = """You extract search terms from shopping queries for a secondhand marketplace.

Rules:
- Strip filler words (articles, pronouns, "looking for", "something", "for my mom", ...).
- Extract only meaningful search terms: objects, materials, colors, moods, styles, occasions.
- Normalize obvious synonyms to one canonical lowercase term (e.g. "retro" and "antique" -> "vintage", "funky" -> "whimsical").
- List the original wording and close synonyms as variants of each term.
- Do NOT classify terms into fields or categories.

Return ONLY a JSON object of this exact shape:
{"terms": [{"term": "vintage", "variants": ["vintage", "retro", "antique"]}]}

Query: """

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_BARE_JSON = re.compile(r"\{.*\}", re.DOTALL)


# =============================================================================
# Response Parsing
# =============================================================================

def parse_extraction_content(content: str) -> List[ExtractedTerm]:
    """
    Parse the message content of an extraction completion.

    Tries a strict JSON parse first, then the first ```json fenced block,
    then the outermost {...} in the text. The result must be an object
    with a "terms" array; anything else raises TermExtractionError.
    """
    data = _load_json_object(content)

    if not isinstance(data, dict) or not isinstance(data.get("terms"), list):
        raise TermExtractionError("Extraction response has no 'terms' array")

    try:
        payload = TermExtractionPayload.model_validate(data)
    except (ValidationError, TypeError, ValueError) as e:
        raise TermExtractionError(f"Extraction response has malformed terms: {e}") from e

    return payload.terms


def _load_json_object(content: str) -> Any:
    try:
        return json.loads(content)
    except ValueError:
        pass

    for pattern in (_FENCED_JSON, _BARE_JSON):
        match = pattern.search(content)
        if match is None:
            continue
        try:
            return json.loads(match.group(1) if match.groups() else match.group(0))
        except ValueError:
            continue

    raise TermExtractionError("Extraction response is not valid JSON")


# =============================================================================
# Remote Extractor
# =============================================================================

class RemoteTermExtractor:
    """LLM-based term extractor using OpenAI chat completions."""

    def __init__(self, client=None):
        self._client = client
        self._client_lock = threading.Lock()
        settings = get_settings()
        self._api_key = settings.openai_api_key
        self._model = settings.term_extractor_model
        self._timeout = settings.term_extractor_timeout_seconds
        self._temperature = settings.term_extractor_temperature
        self._max_tokens = settings.term_extractor_max_tokens
        self._enabled = settings.term_extractor_enabled and (bool(self._api_key) or client is not None)

    @property
    def client(self):
        """Lazy-load OpenAI client."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    from openai import OpenAI
                    self._client = OpenAI(
                        api_key=self._api_key,
                        timeout=self._timeout,
                        max_retries=0,
                    )
        return self._client

    @property
    def enabled(self) -> bool:
        return self._enabled

    def extract(self, query: str) -> List[ExtractedTerm]:
        """
        Ask the LLM for raw term/variant pairs.

        Returned terms are NOT normalized; pass them through normalize_groups().

        Raises:
            TermExtractionError: extractor disabled, request failed, or the
                response could not be parsed.
        """
        if not self._enabled:
            raise TermExtractionError("Remote term extractor disabled (no API key or feature flag off)")

        t_start = time.time()
        try:
            response = self.client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": _PROMPT + query}],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise TermExtractionError(f"Term extraction request failed: {e}") from e

        if not content:
            raise TermExtractionError("Term extraction returned empty response")

        terms = parse_extraction_content(content)

        logger.info(
            "Remote term extraction complete",
            query=query,
            terms=[t.term for t in terms],
            latency_ms=int((time.time() - t_start) * 1000),
        )
        return terms


_extractor: Optional[RemoteTermExtractor] = None
_extractor_lock = threading.Lock()


def get_term_extractor() -> RemoteTermExtractor:
    """Get or create the RemoteTermExtractor singleton (thread-safe)."""
    global _extractor
    if _extractor is None:
        with _extractor_lock:
            if _extractor is None:
                _extractor = RemoteTermExtractor()
    return _extractor


# =============================================================================
# Extraction With Fallback
# =============================================================================

def extract_term_groups(
    query: str,
    extractor: Optional[RemoteTermExtractor] = None,
    synonyms: Mapping[str, str] = SYNONYMS,
) -> Tuple[List[TermGroup], TermSource]:
    """
    Extract normalized term groups for a query.

    Uses the remote extractor when it succeeds and yields at least one
    usable group; otherwise the local extractor. Never raises.

    Returns:
        (term_groups, source) where source says which extractor produced them.
    """
    extractor = extractor or get_term_extractor()

    try:
        raw_terms = extractor.extract(query)
    except TermExtractionError as e:
        logger.warning("Remote term extraction failed, falling back to local", query=query, error=str(e))
    else:
        groups = normalize_groups(raw_terms, synonyms)
        if groups:
            return groups, TermSource.OPENAI
        logger.warning("Remote term extraction yielded no usable terms, falling back to local", query=query)

    return normalize_groups(extract_local(query, synonyms), synonyms), TermSource.LOCAL
