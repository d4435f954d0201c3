"""
Search query data model for the ff15 file finder.

This module defines the structure holding a single user search term together
with the normalized form used for name matching.
"""

from typing import Any, Dict
from pydantic import BaseModel, Field, field_validator

from ..tools.matcher import normalize_query, is_match


class SearchQuery(BaseModel):
    """
    Represents one search term entered by the user.

    The raw text is kept as typed; it is what the "open file" action compares
    base names against. The normalized ``term`` (lower-cased, extension removed)
    is only used to decide which files are listed.

    Attributes:
        text: Search term exactly as entered
    """

    text: str = Field(..., min_length=1, description="Search term as entered by the user")

    @field_validator('text')
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject blank search terms and trim surrounding whitespace."""
        if not v or not v.strip():
            raise ValueError("Search query text cannot be empty")
        return v.strip()

    @property
    def term(self) -> str:
        """Normalized term used for substring matching."""
        return normalize_query(self.text)

    def matches(self, file_name: str) -> bool:
        """Check whether a file name is listed for this query."""
        return is_match(file_name, self.text)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the search query to a dictionary representation."""
        data = self.model_dump()
        data['term'] = self.term
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchQuery':
        """Create a SearchQuery instance from a dictionary."""
        return cls.model_validate({'text': data.get('text')})

    def __str__(self) -> str:
        return f"Query: '{self.text}' | Term: '{self.term}'"
