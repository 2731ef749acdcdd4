"""
Search results data models for fastfind.

This module defines the records produced by a search: the per-line content
matches found inside a file and the scored result for each matching entry.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pathlib import Path
from pydantic import BaseModel, Field, field_validator, model_validator

from .search_query import SearchType


class ContentMatch(BaseModel):
    """
    A single occurrence of the content pattern inside a file.

    Attributes:
        line_number: Line number of the occurrence (1-based)
        line_content: Full text of the line, without the line terminator
        match_start: Offset where the occurrence starts within the line
        match_end: Offset where the occurrence ends within the line
    """

    line_number: int = Field(..., ge=1, description="Line number (1-based)")
    line_content: str = Field(..., description="Full text of the matching line")
    match_start: int = Field(..., ge=0, description="Offset where the match starts")
    match_end: int = Field(..., ge=0, description="Offset where the match ends")

    @model_validator(mode='after')
    def validate_offsets(self):
        """Validate that the match span is well formed."""
        if self.match_end < self.match_start:
            raise ValueError("Invalid match position")
        return self

    def get_matched_text(self) -> str:
        """Get the text covered by the match span."""
        return self.line_content[self.match_start:self.match_end]

    def get_highlighted_content(self, highlight_start: str = "**", highlight_end: str = "**") -> str:
        """Get the line with the match wrapped in the given markers."""
        before = self.line_content[:self.match_start]
        match = self.line_content[self.match_start:self.match_end]
        after = self.line_content[self.match_end:]
        return f"{before}{highlight_start}{match}{highlight_end}{after}"


class SearchResult(BaseModel):
    """
    A filesystem entry that matched the search, with its relevance score.

    Attributes:
        path: Path of the matching entry
        score: Relevance score, higher is better
        is_dir: Whether the entry is a directory
        size: Size in bytes (files only, when details were requested)
        modified: Last modification time (when details were requested)
        content_matches: Pattern occurrences inside the file, in file order
        search_type: The search type of the run that produced this result
    """

    path: str = Field(..., min_length=1, description="Path of the matching entry")
    score: int = Field(..., ge=0, description="Relevance score")
    is_dir: bool = Field(False, description="Whether the entry is a directory")
    size: Optional[int] = Field(None, ge=0, description="Size in bytes")
    modified: Optional[datetime] = Field(None, description="Last modification time")
    content_matches: List[ContentMatch] = Field(default_factory=list, description="Content occurrences")
    search_type: SearchType = Field(..., description="Search type of the producing run")

    @field_validator('path', mode='before')
    @classmethod
    def validate_path(cls, v) -> str:
        """Accept Path objects as well as strings."""
        if isinstance(v, Path):
            return str(v)
        return v

    def get_filename(self) -> str:
        """Get just the entry name without its directory."""
        return Path(self.path).name

    def get_directory(self) -> str:
        """Get the directory containing this entry."""
        return str(Path(self.path).parent)

    def has_content_matches(self) -> bool:
        """Check if any content occurrences were recorded."""
        return len(self.content_matches) > 0

    def sort_key(self) -> tuple:
        """Ordering key: score descending, then path for stable ties."""
        return (-self.score, self.path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary representation."""
        data = self.model_dump()
        data['filename'] = self.get_filename()
        data['search_type'] = self.search_type.value
        if self.modified:
            data['modified'] = self.modified.isoformat()
        return data

    def __str__(self) -> str:
        """String representation of the result."""
        parts = [f"{self.get_filename()} (score: {self.score})"]
        parts.append(f"Type: {self.search_type.value}")
        if self.has_content_matches():
            parts.append(f"Lines: {len(self.content_matches)}")
        return " | ".join(parts)


def rank_results(results: List[SearchResult], limit: int) -> List[SearchResult]:
    """
    Sort results by descending score and keep the first ``limit`` of them.

    Equal scores are ordered by path so the output is deterministic.
    """
    ranked = sorted(results, key=SearchResult.sort_key)
    return ranked[:max(limit, 0)]
