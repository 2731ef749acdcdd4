"""
fastfind - Core Package

Locates files and directories beneath a root by name and/or content, ranks
the matches by relevance and returns a bounded, ordered result list.
"""

from .models import ContentMatch, FinderConfig, MatchMode, SearchQuery, SearchResult, SearchType
from .search.cancellation import CancellationToken, install_interrupt_handler
from .search.sequential import search
from .search.parallel import search_parallel

__version__ = "0.1.0"

__all__ = [
    'search',
    'search_parallel',
    'CancellationToken',
    'install_interrupt_handler',
    'ContentMatch',
    'FinderConfig',
    'MatchMode',
    'SearchQuery',
    'SearchResult',
    'SearchType',
]
