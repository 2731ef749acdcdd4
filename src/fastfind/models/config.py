"""
Configuration data models for fastfind.

This module defines the configuration consumed read-only by the search core:
ignore lists, traversal limits, symlink and hidden-entry policies, the
content-searchable allow-list, and the default search and output options.
"""

from typing import Dict, List, Optional, Any, Union
from pathlib import Path
import os
from pydantic import BaseModel, Field, field_validator

from .search_query import MatchMode


# Extensionless files whose content is always searchable.
CONTENT_SEARCHABLE_NAMES = frozenset({"README", "Makefile", "Dockerfile", "LICENSE"})


class DefaultSearchOptions(BaseModel):
    """
    Defaults applied when the caller does not choose explicitly.

    Attributes:
        match_mode: Default matching mode
        case_sensitive: Default case sensitivity preference
    """

    match_mode: MatchMode = Field(MatchMode.FUZZY, description="Default matching mode")
    case_sensitive: bool = Field(False, description="Default case sensitivity")

    @field_validator('match_mode', mode='before')
    @classmethod
    def validate_match_mode(cls, v) -> MatchMode:
        """Validate and convert match mode to enum."""
        if isinstance(v, str):
            try:
                return MatchMode(v.lower())
            except ValueError:
                raise ValueError(f"Invalid match mode: {v}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['match_mode'] = self.match_mode.value
        return data


class OutputOptions(BaseModel):
    """
    Display preferences. Only ``show_details`` is read by the search core.

    Attributes:
        show_details: Collect size and modification time for results
        color_theme: Name of the color theme used by the display layer
        max_content_matches: Content lines shown per result
        max_line_length: Truncation length for displayed lines
    """

    show_details: bool = Field(True, description="Collect size and modification time")
    color_theme: str = Field("default", description="Color theme name")
    max_content_matches: int = Field(3, ge=0, description="Content lines shown per result")
    max_line_length: int = Field(100, gt=0, description="Truncation length for displayed lines")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FinderConfig(BaseModel):
    """
    Main configuration class for fastfind.

    Attributes:
        ignore_directories: Name fragments; any entry containing one is pruned
        ignore_file_patterns: ``*.ext`` suffix patterns or plain substrings
        max_files_per_search: Cap on candidates collected by parallel search
        max_parallel_threads: Worker count override (auto-detected if None)
        max_file_size_mb: Files larger than this are invisible to the search
        include_hidden: Visit dot-entries
        follow_symlinks: Descend through symbolic links
        content_search_extensions: Extensions whose content may be scanned
        default_search_options: Default match mode and case sensitivity
        output_options: Display preferences
    """

    ignore_directories: List[str] = Field(
        default_factory=lambda: [
            "node_modules",
            "target",
            "build",
            ".git",
            "AppData",
            "Windows",
            "System32",
            "Cache",
            "Temp",
            ".cache",
        ],
        description="Directory name fragments to prune"
    )
    ignore_file_patterns: List[str] = Field(
        default_factory=lambda: [
            "*.tmp",
            "*.log",
            "*.bak",
            "*.swp",
            "thumbs.db",
            ".DS_Store",
        ],
        description="File patterns to prune"
    )
    max_files_per_search: int = Field(50000, gt=0, description="Maximum candidates per search")
    max_parallel_threads: Optional[int] = Field(None, gt=0, description="Worker thread override")
    max_file_size_mb: int = Field(10, ge=0, description="Maximum file size in megabytes")
    include_hidden: bool = Field(False, description="Visit hidden entries")
    follow_symlinks: bool = Field(False, description="Follow symbolic links")
    content_search_extensions: List[str] = Field(
        default_factory=lambda: [
            ".rs", ".py", ".js", ".ts", ".java", ".cpp", ".c", ".h",
            ".txt", ".md", ".json", ".yaml", ".yml", ".toml", ".cfg",
        ],
        description="Extensions whose content may be searched"
    )
    default_search_options: DefaultSearchOptions = Field(
        default_factory=DefaultSearchOptions, description="Default search options"
    )
    output_options: OutputOptions = Field(default_factory=OutputOptions, description="Output preferences")

    @field_validator('ignore_directories', 'ignore_file_patterns')
    @classmethod
    def validate_ignore_lists(cls, v: List[str]) -> List[str]:
        """Drop blank entries, which would otherwise match every name."""
        return [pattern.strip() for pattern in v if pattern and pattern.strip()]

    @field_validator('content_search_extensions')
    @classmethod
    def validate_extensions(cls, v: List[str]) -> List[str]:
        """Normalize extensions to lowercase with a leading dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith('.'):
                ext = '.' + ext
            if ext not in normalized:
                normalized.append(ext)
        return normalized

    @property
    def max_file_size_bytes(self) -> int:
        """The file size ceiling in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    def should_ignore_directory(self, name: str) -> bool:
        """Check a name against the ignored directory fragments (substring test)."""
        return any(fragment in name for fragment in self.ignore_directories)

    def should_ignore_file(self, name: str) -> bool:
        """Check a name against the ignored file patterns."""
        for pattern in self.ignore_file_patterns:
            if pattern.startswith('*.'):
                if name.endswith(pattern[2:]):
                    return True
            elif pattern in name:
                return True
        return False

    def is_content_searchable(self, path: Union[str, Path]) -> bool:
        """
        Check whether a file's content may be scanned.

        Files with an extension must have it in the allow-list; extensionless
        files are searchable only for a few well-known names.
        """
        path = Path(path)
        if path.suffix:
            return path.suffix.lower() in self.content_search_extensions
        return path.name in CONTENT_SEARCHABLE_NAMES

    def get_effective_thread_count(self, threads: Optional[int] = None, max_cpu: bool = False) -> int:
        """
        Resolve the worker count for a parallel search.

        Args:
            threads: Explicit thread count from the caller
            max_cpu: Use twice the core count when nothing else is set

        Returns:
            Explicit count, else configured count, else 2x or 1x the core count

        Raises:
            ValueError: If an explicit count is not positive
        """
        if threads is not None:
            if threads < 1:
                raise ValueError(f"threads must be positive, got {threads}")
            return threads
        if self.max_parallel_threads:
            return self.max_parallel_threads
        cores = os.cpu_count() or 1
        if max_cpu:
            return cores * 2
        return cores

    def validate_configuration(self) -> List[str]:
        """
        Collect non-fatal warnings about the configuration.

        Returns:
            List of warning messages
        """
        warnings = []

        if self.max_files_per_search > 1000000:
            warnings.append("Very high max_files_per_search may cause memory issues")

        if self.max_file_size_mb > 100:
            warnings.append("Very high max_file_size_mb may slow down content search")

        if self.max_file_size_mb == 0:
            warnings.append("max_file_size_mb is 0, every non-empty file will be skipped")

        if self.follow_symlinks:
            warnings.append("Following symlinks may visit directories outside the search root")

        if not self.content_search_extensions:
            warnings.append("No content-searchable extensions configured")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        data = self.model_dump()
        data['default_search_options'] = self.default_search_options.to_dict()
        data['output_options'] = self.output_options.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FinderConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Ignored dirs: {len(self.ignore_directories)}"]
        parts.append(f"Ignored files: {len(self.ignore_file_patterns)}")
        parts.append(f"Max size: {self.max_file_size_mb} MB")
        parts.append(f"Hidden: {self.include_hidden}")
        parts.append(f"Symlinks: {self.follow_symlinks}")
        return " | ".join(parts)


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    unknown = set(config_data) - set(FinderConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    try:
        return FinderConfig.model_validate(config_data).to_dict()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")
