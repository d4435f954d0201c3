"""
Interactive session state for the ff15 file finder.

The session is the single value threaded through the interaction state
machine; each state handler reads it and returns the next state.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .search_query import SearchQuery
from .search_results import MatchResult


class SessionState(Enum):
    """States of the interaction loop."""
    AWAIT_DIRECTORY = "await_directory"
    AWAIT_QUERY = "await_query"
    AWAIT_ACTION = "await_action"
    EXIT = "exit"


class FinderSession(BaseModel):
    """
    State carried between steps of the interaction loop.

    Attributes:
        state: Current state of the loop
        root: Directory root, fixed once validated
        query: Most recent search query
        result: Result of the most recent walk
        exit_code: Process status to report once the loop reaches EXIT
    """

    state: SessionState = Field(SessionState.AWAIT_DIRECTORY, description="Current loop state")
    root: Optional[str] = Field(None, description="Validated directory root")
    query: Optional[SearchQuery] = Field(None, description="Most recent search query")
    result: Optional[MatchResult] = Field(None, description="Result of the most recent walk")
    exit_code: int = Field(0, description="Process exit status")

    def set_root(self, root: str) -> None:
        """Fix the directory root for the rest of the session."""
        if self.root is not None:
            raise ValueError(f"Directory root already set to {self.root}")
        self.root = root

    def record_search(self, query: SearchQuery, result: MatchResult) -> None:
        """Replace the previous query and result with a new search."""
        self.query = query
        self.result = result

    def is_finished(self) -> bool:
        """Check if the loop has reached its terminal state."""
        return self.state is SessionState.EXIT
