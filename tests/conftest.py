"""
Pytest configuration and shared fixtures for the listing search tests.
"""
import os
import sys
from typing import List
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

@pytest.fixture
def listing_row() -> dict:
    """Sample listing row as returned by the Supabase listings query."""
    return {
        "id": "listing-001",
        "title": "Brass desk lamp",
        "description": "Solid brass lamp with a green glass shade",
        "story_text": None,
        "category": "Lighting",
        "moods": ["Cozy"],
        "styles": '["Mid-Century"]',
        "intents": "Home Decor,Practical",
        "keywords": ["brass", "desk lamp"],
        "ai_suggested_keywords": None,
        "ai_generated_title": None,
        "ai_generated_description": None,
        "status": "active",
        "price": 45.0,
        "created_at": "2024-05-01T12:00:00+00:00",
        "profiles": {"display_name": "Thrift Corner", "location_city": "Portland"},
    }


@pytest.fixture
def make_listing():
    """Factory for Listing models with only the fields a test cares about."""
    from listing_search.models import Listing

    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        fields.setdefault("id", f"listing-{counter['n']:03d}")
        fields.setdefault("status", "active")
        return Listing(**fields)

    return _make


# ============================================================================
# Fixtures: Mock Services
# ============================================================================

def set_listing_rows(mock_client: MagicMock, rows: List[dict]) -> None:
    """Make the candidate query chain on a mock Supabase client return rows."""
    (
        mock_client.table.return_value
        .select.return_value
        .eq.return_value
        .order.return_value
        .limit.return_value
        .execute.return_value
    ).data = rows


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client whose listings query returns no rows."""
    mock_client = MagicMock()
    set_listing_rows(mock_client, [])
    return mock_client


@pytest.fixture
def supabase_with_rows(mock_supabase_client):
    """Factory: the mock Supabase client, returning the given listing rows."""
    def _with_rows(rows: List[dict]) -> MagicMock:
        set_listing_rows(mock_supabase_client, rows)
        return mock_supabase_client
    return _with_rows


@pytest.fixture
def failing_extractor():
    """Remote extractor stand-in that always fails."""
    from listing_search.term_extractor import TermExtractionError

    extractor = MagicMock()
    extractor.extract.side_effect = TermExtractionError("remote extractor unavailable")
    return extractor


@pytest.fixture
def stub_fetcher():
    """Candidate fetcher stand-in; set stub_fetcher.fetch.return_value per test."""
    fetcher = MagicMock()
    fetcher.fetch.return_value = []
    return fetcher


@pytest.fixture
def search_service(failing_extractor, stub_fetcher):
    """ListingSearchService using the local extractor and stubbed candidates."""
    from listing_search.service import ListingSearchService
    return ListingSearchService(extractor=failing_extractor, fetcher=stub_fetcher)


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application."""
    from api.app import create_app
    return create_app()


@pytest.fixture
def client(app):
    """Synchronous HTTP client for testing FastAPI endpoints."""
    from fastapi.testclient import TestClient
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Markers auto-use
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "supabase: marks tests that require Supabase")
    config.addinivalue_line("markers", "openai: marks tests that call the OpenAI API")


# ============================================================================
# Skip conditions
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Auto-skip tests that need live credentials when none are configured."""
    skip_supabase = pytest.mark.skip(reason="Supabase tests require credentials")
    skip_openai = pytest.mark.skip(reason="OpenAI tests require OPENAI_API_KEY")

    supabase_url = os.getenv("SUPABASE_URL")
    openai_key = os.getenv("OPENAI_API_KEY")

    for item in items:
        if "supabase" in item.keywords and not supabase_url:
            item.add_marker(skip_supabase)
        if "openai" in item.keywords and not openai_key:
            item.add_marker(skip_openai)
