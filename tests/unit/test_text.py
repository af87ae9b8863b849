"""
Unit tests for text and tag column normalization.

Run with: PYTHONPATH=src python -m pytest tests/unit/test_text.py -v
"""

import pytest

from listing_search.text import (
    clean_tag,
    join_normalized,
    normalize_tag_column,
    normalize_term,
    normalize_text,
    tags_to_db_format,
)


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize_text("Vintage, Lamp!") == "vintage lamp"

    def test_keeps_hyphens_and_digits(self):
        assert normalize_text("Mid-Century 1960s") == "mid-century 1960s"

    def test_collapses_whitespace(self):
        assert normalize_text("  cozy \t\n  mug  ") == "cozy mug"

    def test_none_is_empty(self):
        assert normalize_text(None) == ""

    def test_non_ascii_letters_become_spaces(self):
        assert normalize_text("café table") == "caf table"

    def test_idempotent(self):
        once = normalize_text("Retro  STEREO under $100!")
        assert normalize_text(once) == once


class TestNormalizeTerm:
    """Tests for normalize_term."""

    def test_single_character_is_dropped(self):
        assert normalize_term("a") == ""
        assert normalize_term(" $x ") == ""

    def test_two_characters_kept(self):
        assert normalize_term("TV") == "tv"

    def test_empty(self):
        assert normalize_term("") == ""
        assert normalize_term("!!!") == ""


class TestJoinNormalized:
    """Tests for join_normalized."""

    def test_skips_missing_parts(self):
        assert join_normalized("Brass Lamp", None, "", "Lighting") == "brass lamp lighting"

    def test_all_missing(self):
        assert join_normalized(None, None) == ""


class TestNormalizeTagColumn:
    """Tests for normalize_tag_column across the three storage shapes."""

    @pytest.mark.parametrize("value", [
        '["Home Decor","Collectibles"]',
        "Home Decor,Collectibles",
        ["Home Decor", "Collectibles"],
    ])
    def test_all_shapes_agree(self, value):
        assert normalize_tag_column(value) == ["Home Decor", "Collectibles"]

    def test_comma_spacing_and_stray_quotes(self):
        assert normalize_tag_column('"Cozy" , [Vintage] ,') == ["Cozy", "Vintage"]

    def test_malformed_json_falls_back_to_commas(self):
        assert normalize_tag_column('["Cozy","Vintage"') == ["Cozy", "Vintage"]

    def test_none_and_empty(self):
        assert normalize_tag_column(None) == []
        assert normalize_tag_column("") == []
        assert normalize_tag_column([]) == []

    def test_unsupported_type_yields_nothing(self):
        assert normalize_tag_column(42) == []
        assert normalize_tag_column({"mood": "cozy"}) == []

    def test_list_with_none_and_blank_elements(self):
        assert normalize_tag_column(["Cozy", None, "  ", "Retro"]) == ["Cozy", "Retro"]

    def test_casing_preserved(self):
        assert normalize_tag_column(["Mid-Century"]) == ["Mid-Century"]


class TestTagsToDbFormat:
    """Tests for tags_to_db_format."""

    def test_joins_cleaned_tags(self):
        assert tags_to_db_format(['"Cozy"', "Vintage "]) == "Cozy,Vintage"

    def test_empty_is_none(self):
        assert tags_to_db_format([]) is None
        assert tags_to_db_format(None) is None

    def test_reads_back_unchanged(self):
        tags = ["Home Decor", "Collectibles"]
        assert normalize_tag_column(tags_to_db_format(tags)) == tags


class TestCleanTag:
    """Tests for clean_tag."""

    def test_tight_comma_gets_a_space(self):
        assert clean_tag("Tables,Chairs") == "Tables, Chairs"

    def test_brackets_and_quotes_removed(self):
        assert clean_tag('["Rustic"]') == "Rustic"
