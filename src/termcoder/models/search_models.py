"""Models for grep and glob searches."""

from pydantic import Field

from termcoder.models.base import CamelModel


class GrepMatch(CamelModel):
    """A single matching line with its surrounding context.

    ``context_after`` is filled in place while the search output is still
    being parsed; it is only final once parsing has finished.
    """

    file_path: str  # Relative to the workspace root
    line_number: int = Field(ge=1)
    content: str
    context_before: list[str] = Field(default_factory=list)
    context_after: list[str] = Field(default_factory=list)


class ParsedGrepOutput(CamelModel):
    matches: list[GrepMatch] = Field(default_factory=list)
    files_searched: int = 0


class GrepRequest(CamelModel):
    """Input of ``grep``. Unset limits fall back to the configured defaults."""

    pattern: str = Field(description="The text pattern to search for")
    is_regex: bool = Field(
        default=False, description="Treat pattern as regex (default false)"
    )
    include_patterns: list[str] | None = Field(
        default=None, description="File patterns to include"
    )
    exclude_patterns: list[str] | None = Field(
        default=None, description="File patterns to exclude"
    )
    context_lines: int | None = Field(
        default=None, ge=0, description="Number of context lines (default 2)"
    )
    max_results: int | None = Field(
        default=None, ge=1, description="Maximum number of results (default 100)"
    )
    search_path: str | None = Field(
        default=None, description="Path to search in (default cwd)"
    )


class GrepResult(CamelModel):
    pattern: str
    is_regex: bool
    files_searched: int
    matches: list[GrepMatch] = Field(default_factory=list)
    truncated: bool


class GlobRequest(CamelModel):
    """Input of ``glob``."""

    pattern: str = Field(description="The glob pattern to match files")
    cwd: str | None = Field(
        default=None, description="The working directory for the search"
    )
    dot: bool = Field(default=False, description="Include hidden files (default false)")
    absolute: bool = Field(
        default=False, description="Return absolute paths (default false)"
    )
    only_files: bool = Field(
        default=True, description="Only match files, not directories (default true)"
    )
    max_results: int | None = Field(
        default=None, ge=1, description="Maximum number of results (default 1000)"
    )


class GlobResult(CamelModel):
    pattern: str
    matches: list[str] = Field(default_factory=list)
    count: int
    truncated: bool
    cwd: str
