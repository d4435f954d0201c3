"""
Search result data model for the ff15 file finder.

A MatchResult holds the outcome of one walk: the matched paths in traversal
order and, when the walk was cut short, the error that stopped it.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .search_query import SearchQuery
from ..tools.matcher import is_exact_match


class MatchResult(BaseModel):
    """
    Paths found by a single walk of the directory root.

    Attributes:
        query: The query the walk was performed for
        root: Directory root that was walked
        paths: Matching file paths in traversal order (never sorted)
        error: Message of the error that aborted the walk, if any
        duration_seconds: Wall-clock time spent walking
    """

    query: SearchQuery = Field(..., description="Query the walk was performed for")
    root: str = Field(..., description="Directory root that was walked")
    paths: List[str] = Field(default_factory=list, description="Matching paths in traversal order")
    error: Optional[str] = Field(None, description="Error that aborted the walk")
    duration_seconds: float = Field(0.0, ge=0, description="Time spent walking")

    def is_empty(self) -> bool:
        """Check if no file matched."""
        return not self.paths

    def has_error(self) -> bool:
        """Check if the walk was aborted by an error."""
        return self.error is not None

    def exact_matches(self) -> List[str]:
        """
        Get the paths whose base name equals the raw query text, ignoring case.

        Only these paths can be revealed in the file manager; a file listed
        through the loose substring match is not necessarily one of them.

        Returns:
            Exactly named paths, in traversal order
        """
        return [path for path in self.paths if is_exact_match(path, self.query.text)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary representation."""
        return {
            'query': self.query.to_dict(),
            'root': self.root,
            'paths': list(self.paths),
            'error': self.error,
            'duration_seconds': self.duration_seconds,
            'total': len(self.paths),
        }

    def __len__(self) -> int:
        return len(self.paths)

    def __str__(self) -> str:
        parts = [f"Query: '{self.query.text}'", f"Matches: {len(self.paths)}"]
        if self.has_error():
            parts.append(f"Error: {self.error}")
        return " | ".join(parts)
