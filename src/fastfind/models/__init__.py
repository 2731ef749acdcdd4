"""
Data models for fastfind.

This module contains the core data structures used throughout the system.
"""

from .search_query import SearchQuery, MatchMode, SearchType
from .search_results import ContentMatch, SearchResult
from .config import FinderConfig

__all__ = ['SearchQuery', 'MatchMode', 'SearchType', 'ContentMatch', 'SearchResult', 'FinderConfig']
