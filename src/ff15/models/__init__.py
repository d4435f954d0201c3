"""
Data models for the ff15 file finder.

This module contains all the core data structures used throughout the system.
"""

from .search_query import SearchQuery
from .search_results import MatchResult
from .session import FinderSession, SessionState

__all__ = ['SearchQuery', 'MatchResult', 'FinderSession', 'SessionState']
