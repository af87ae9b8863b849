"""
Unit tests for remote term extraction and the local fallback.

Tests cover:
1. Parsing completion content (strict JSON, fenced JSON, bare JSON, bad payloads)
2. RemoteTermExtractor request shape and failure modes (mocked OpenAI client)
3. extract_term_groups fallback to the local extractor

Run with: PYTHONPATH=src python -m pytest tests/unit/test_term_extractor.py -v
"""

import pytest
from unittest.mock import MagicMock, patch

from config.settings import get_settings_for_testing
from listing_search.models import ExtractedTerm, TermSource
from listing_search.term_extractor import (
    RemoteTermExtractor,
    TermExtractionError,
    extract_term_groups,
    get_term_extractor,
    parse_extraction_content,
)


# =============================================================================
# Fixtures
# =============================================================================

def _completion(content):
    response = MagicMock()
    choice = MagicMock()
    choice.message.content = content
    response.choices = [choice]
    return response


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create.return_value = _completion(
        '{"terms": [{"term": "vintage", "variants": ["retro"]}, {"term": "lamp", "variants": ["lamp"]}]}'
    )
    return client


@pytest.fixture
def make_extractor():
    """Build a RemoteTermExtractor against test settings."""
    def _make(client=None, **overrides):
        overrides.setdefault("openai_api_key", "sk-test")
        settings = get_settings_for_testing(**overrides)
        with patch("listing_search.term_extractor.get_settings", return_value=settings):
            return RemoteTermExtractor(client=client)
    return _make


# =============================================================================
# Content Parsing
# =============================================================================

class TestParseExtractionContent:
    """Tests for parse_extraction_content."""

    def test_strict_json(self):
        terms = parse_extraction_content('{"terms": [{"term": "lamp", "variants": ["lamp", "light"]}]}')

        assert terms == [ExtractedTerm(term="lamp", variants=["lamp", "light"])]

    def test_fenced_json(self):
        content = 'Here are the terms:\n```json\n{"terms": [{"term": "mug", "variants": []}]}\n```'

        assert [t.term for t in parse_extraction_content(content)] == ["mug"]

    def test_bare_json_in_prose(self):
        content = 'Sure! {"terms": [{"term": "cozy", "variants": ["comfy"]}]} Hope that helps.'

        terms = parse_extraction_content(content)

        assert terms[0].term == "cozy"
        assert terms[0].variants == ["comfy"]

    def test_bare_string_terms_accepted(self):
        terms = parse_extraction_content('{"terms": ["lamp", "brass"]}')

        assert [(t.term, t.variants) for t in terms] == [("lamp", []), ("brass", [])]

    def test_missing_variants_default_empty(self):
        assert parse_extraction_content('{"terms": [{"term": "lamp"}]}')[0].variants == []

    def test_empty_terms_array(self):
        assert parse_extraction_content('{"terms": []}') == []

    @pytest.mark.parametrize("content", [
        "no json here",
        "```json\nnot json\n```",
        '{"foo": 1}',
        '{"terms": "lamp"}',
        '["lamp"]',
        '{"terms": [{"variants": ["lamp"]}]}',
        '{"terms": [42]}',
        '{"terms": [{"term": "lamp", "variants": true}]}',
        '{"terms": [{"term": "lamp", "variants": 5}]}',
        '{"terms": [{"term": "lamp", "variants": {"a": "b"}}]}',
    ])
    def test_bad_payload_raises(self, content):
        with pytest.raises(TermExtractionError):
            parse_extraction_content(content)


# =============================================================================
# Remote Extractor
# =============================================================================

class TestRemoteTermExtractor:
    """Tests for RemoteTermExtractor.extract with a mocked OpenAI client."""

    def test_extract_returns_raw_terms(self, make_extractor, openai_client):
        extractor = make_extractor(client=openai_client)

        terms = extractor.extract("funky retro lamp")

        assert [t.term for t in terms] == ["vintage", "lamp"]

    def test_request_shape(self, make_extractor, openai_client):
        extractor = make_extractor(client=openai_client, term_extractor_model="gpt-4o-mini")

        extractor.extract("cozy mug for myself")

        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 500
        assert len(kwargs["messages"]) == 1
        assert kwargs["messages"][0]["role"] == "user"
        assert kwargs["messages"][0]["content"].endswith("cozy mug for myself")

    def test_missing_api_key_disables(self, make_extractor):
        extractor = make_extractor(openai_api_key="")

        assert extractor.enabled is False
        with pytest.raises(TermExtractionError):
            extractor.extract("lamp")

    def test_feature_flag_off_disables(self, make_extractor, openai_client):
        extractor = make_extractor(client=openai_client, term_extractor_enabled=False)

        with pytest.raises(TermExtractionError):
            extractor.extract("lamp")
        openai_client.chat.completions.create.assert_not_called()

    def test_client_error_wrapped(self, make_extractor, openai_client):
        boom = RuntimeError("502 Bad Gateway")
        openai_client.chat.completions.create.side_effect = boom
        extractor = make_extractor(client=openai_client)

        with pytest.raises(TermExtractionError) as exc_info:
            extractor.extract("lamp")
        assert exc_info.value.__cause__ is boom

    @pytest.mark.parametrize("content", [None, ""])
    def test_empty_content_raises(self, make_extractor, openai_client, content):
        openai_client.chat.completions.create.return_value = _completion(content)
        extractor = make_extractor(client=openai_client)

        with pytest.raises(TermExtractionError):
            extractor.extract("lamp")

    def test_unparsable_content_raises(self, make_extractor, openai_client):
        openai_client.chat.completions.create.return_value = _completion("I can't help with that.")
        extractor = make_extractor(client=openai_client)

        with pytest.raises(TermExtractionError):
            extractor.extract("lamp")


class TestGetTermExtractor:
    """Tests for the singleton accessor."""

    def test_singleton(self):
        settings = get_settings_for_testing()
        with patch("listing_search.term_extractor._extractor", None), \
                patch("listing_search.term_extractor.get_settings", return_value=settings):
            first = get_term_extractor()
            second = get_term_extractor()

        assert first is second


# =============================================================================
# Extraction With Fallback
# =============================================================================

class TestExtractTermGroups:
    """Tests for extract_term_groups."""

    def test_remote_terms_normalized(self):
        extractor = MagicMock()
        extractor.extract.return_value = [
            ExtractedTerm(term="Funky", variants=["playful"]),
            ExtractedTerm(term="lamp", variants=[]),
        ]

        groups, source = extract_term_groups("funky lamp", extractor)

        assert source == TermSource.OPENAI
        assert [g.term for g in groups] == ["whimsical", "lamp"]
        assert {"whimsical", "funky", "playful"} <= set(groups[0].variants)

    def test_remote_failure_falls_back_to_local(self, failing_extractor):
        groups, source = extract_term_groups("retro lamp", failing_extractor)

        assert source == TermSource.LOCAL
        assert [g.term for g in groups] == ["vintage", "lamp"]
        assert groups[0].variants == ["vintage", "retro"]

    def test_remote_without_usable_terms_falls_back_to_local(self):
        extractor = MagicMock()
        extractor.extract.return_value = [ExtractedTerm(term="", variants=["!"])]

        groups, source = extract_term_groups("brass lamp", extractor)

        assert source == TermSource.LOCAL
        assert [g.term for g in groups] == ["brass", "lamp"]

    def test_disabled_remote_extractor_falls_back(self, make_extractor):
        groups, source = extract_term_groups("cozy mug", make_extractor(openai_api_key=""))

        assert source == TermSource.LOCAL
        assert [g.term for g in groups] == ["cozy", "mug"]

    def test_only_stop_words(self, failing_extractor):
        groups, source = extract_term_groups("the and or for", failing_extractor)

        assert groups == []
        assert source == TermSource.LOCAL

    @pytest.mark.parametrize("content", [
        '{"terms": [{"term": "lamp", "variants": true}]}',
        '{"terms": [{"term": "lamp", "variants": 5}]}',
    ])
    def test_malformed_variants_fall_back_to_local(self, make_extractor, openai_client, content):
        openai_client.chat.completions.create.return_value = _completion(content)

        groups, source = extract_term_groups("retro lamp", make_extractor(client=openai_client))

        assert source == TermSource.LOCAL
        assert [g.term for g in groups] == ["vintage", "lamp"]
