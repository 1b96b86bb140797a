"""Data models for termcoder tools."""

from termcoder.models.base import CamelModel
from termcoder.models.edit_models import (
    DiffStats,
    EditRequest,
    EditResult,
    PreviewRequest,
    PreviewResult,
    Recommendation,
    Validation,
)
from termcoder.models.file_models import (
    CodeBlockInfo,
    DirectoryEntry,
    FileExistsRequest,
    FileExistsResult,
    Heading,
    Link,
    ListDirectoryRequest,
    ListDirectoryResult,
    MarkdownMetadata,
    MarkdownStructure,
    ReadFileRequest,
    ReadFileResult,
    RenderMarkdownRequest,
    RenderMarkdownResult,
    WriteFileRequest,
    WriteFileResult,
)
from termcoder.models.search_models import (
    GlobRequest,
    GlobResult,
    GrepMatch,
    GrepRequest,
    GrepResult,
    ParsedGrepOutput,
)

__all__ = [
    "CamelModel",
    "CodeBlockInfo",
    "DiffStats",
    "DirectoryEntry",
    "EditRequest",
    "EditResult",
    "FileExistsRequest",
    "FileExistsResult",
    "GlobRequest",
    "GlobResult",
    "GrepMatch",
    "GrepRequest",
    "GrepResult",
    "Heading",
    "Link",
    "ListDirectoryRequest",
    "ListDirectoryResult",
    "MarkdownMetadata",
    "MarkdownStructure",
    "ParsedGrepOutput",
    "PreviewRequest",
    "PreviewResult",
    "ReadFileRequest",
    "ReadFileResult",
    "Recommendation",
    "RenderMarkdownRequest",
    "RenderMarkdownResult",
    "Validation",
    "WriteFileRequest",
    "WriteFileResult",
]
