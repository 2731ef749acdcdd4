"""
Search query data models for fastfind.

This module defines the parameters of a single search run: the root to
traverse, the filename and content patterns, the matching mode and the
result shaping options.
"""

from typing import Optional
from pathlib import Path
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator


class MatchMode(Enum):
    """Matching algorithm used for both filenames and file content."""
    FUZZY = "fuzzy"
    EXACT = "exact"


class SearchType(Enum):
    """Kind of search, derived from which patterns were supplied."""
    FILE_NAME = "filename"
    CONTENT = "content"
    HYBRID = "hybrid"

    @classmethod
    def from_patterns(cls, filename_pattern: Optional[str], content_pattern: Optional[str]) -> 'SearchType':
        """
        Derive the search type from the supplied patterns.

        Args:
            filename_pattern: Pattern matched against entry names
            content_pattern: Pattern matched against file lines

        Returns:
            HYBRID when both are present, FILE_NAME or CONTENT otherwise

        Raises:
            ValueError: If neither pattern is present
        """
        if filename_pattern and content_pattern:
            return cls.HYBRID
        if filename_pattern:
            return cls.FILE_NAME
        if content_pattern:
            return cls.CONTENT
        raise ValueError("At least one of filename_pattern or content_pattern is required")


class SearchQuery(BaseModel):
    """
    Represents one search invocation with all of its parameters.

    Attributes:
        root: Directory to search beneath
        filename_pattern: Optional pattern scored against entry names
        content_pattern: Optional pattern searched for inside text files
        include_hidden: Whether dot-entries are visited
        dirs_only: Only directories may match
        files_only: Only non-directories may match
        limit: Maximum number of results returned
        show_details: Whether size and modification time are collected
        match_mode: Fuzzy or exact matching
    """

    root: str = Field(".", min_length=1, description="Directory to search beneath")
    filename_pattern: Optional[str] = Field(None, description="Pattern matched against entry names")
    content_pattern: Optional[str] = Field(None, description="Pattern matched against file content")
    include_hidden: bool = Field(False, description="Whether hidden entries are visited")
    dirs_only: bool = Field(False, description="Only directories may match")
    files_only: bool = Field(False, description="Only files may match")
    limit: int = Field(10, ge=0, description="Maximum number of results")
    show_details: bool = Field(False, description="Collect size and modification time")
    match_mode: MatchMode = Field(MatchMode.FUZZY, description="Matching algorithm")

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Expand and resolve the search root."""
        if not v or not v.strip():
            raise ValueError("Search root cannot be empty")
        return str(Path(v).expanduser().resolve())

    @field_validator('filename_pattern', 'content_pattern')
    @classmethod
    def validate_pattern(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank patterns as absent."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator('match_mode', mode='before')
    @classmethod
    def validate_match_mode(cls, v) -> MatchMode:
        """Accept match modes given as strings."""
        if isinstance(v, str):
            try:
                return MatchMode(v.lower())
            except ValueError:
                raise ValueError(f"Invalid match mode: {v}")
        return v

    @model_validator(mode='after')
    def validate_query(self):
        """Check that the query describes a runnable search."""
        if not self.filename_pattern and not self.content_pattern:
            raise ValueError("At least one of filename_pattern or content_pattern is required")
        if self.dirs_only and self.files_only:
            raise ValueError("dirs_only and files_only are mutually exclusive")
        return self

    @property
    def search_type(self) -> SearchType:
        """The search type implied by the supplied patterns."""
        return SearchType.from_patterns(self.filename_pattern, self.content_pattern)

    def accepts_kind(self, is_dir: bool) -> bool:
        """Check the dirs_only / files_only restriction for an entry."""
        if self.dirs_only and not is_dir:
            return False
        if self.files_only and is_dir:
            return False
        return True

    def __str__(self) -> str:
        """String representation of the search query."""
        parts = [f"Root: {self.root}"]
        if self.filename_pattern:
            parts.append(f"Name: '{self.filename_pattern}'")
        if self.content_pattern:
            parts.append(f"Content: '{self.content_pattern}'")
        parts.append(f"Type: {self.search_type.value}")
        parts.append(f"Mode: {self.match_mode.value}")
        parts.append(f"Limit: {self.limit}")
        return " | ".join(parts)
