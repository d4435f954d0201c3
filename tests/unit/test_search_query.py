"""
Unit tests for the SearchQuery data model.
"""

import pytest
from pydantic import ValidationError
from ff15.models.search_query import SearchQuery


class TestSearchQuery:
    """Test cases for the SearchQuery model."""

    def test_basic_query_creation(self):
        """Test creating a basic search query."""
        query = SearchQuery(text="virmox.txt")

        assert query.text == "virmox.txt"
        assert query.term == "virmox"

    def test_text_is_kept_as_typed(self):
        """Test that the raw text keeps its case and extension."""
        query = SearchQuery(text="  Virmox.TXT ")

        assert query.text == "Virmox.TXT"
        assert query.term == "virmox"

    def test_matches_uses_loose_policy(self):
        """Test matching through the model."""
        query = SearchQuery(text="virmox.txt")

        assert query.matches("virmox_backup.txt")
        assert query.matches("VIRMOX.log")
        assert not query.matches("readme.md")

    def test_empty_query_validation(self):
        """Test that empty queries raise validation errors."""
        with pytest.raises(ValidationError):
            SearchQuery(text="")

        with pytest.raises(ValueError, match="Search query text cannot be empty"):
            SearchQuery(text="   ")

    def test_to_dict_conversion(self):
        """Test converting query to dictionary."""
        data = SearchQuery(text="Save.dat").to_dict()

        assert data == {'text': 'Save.dat', 'term': 'save'}

    def test_from_dict_creation(self):
        """Test creating query from dictionary, ignoring derived fields."""
        query = SearchQuery.from_dict({'text': 'save.dat', 'term': 'ignored'})

        assert query.text == 'save.dat'
        assert query.term == 'save'

    def test_string_representation(self):
        """Test string representation of query."""
        str_repr = str(SearchQuery(text="virmox.txt"))

        assert "virmox.txt" in str_repr
        assert "Term: 'virmox'" in str_repr
