"""Models for file and directory tools."""

from typing import Literal

from pydantic import Field

from termcoder.models.base import CamelModel
from termcoder.models.edit_models import DiffStats


class ReadFileRequest(CamelModel):
    file_path: str = Field(description="The path to the file to read")


class ReadFileResult(CamelModel):
    file_path: str
    content: str


class WriteFileRequest(CamelModel):
    file_path: str = Field(description="The path where to write the file")
    content: str = Field(description="The content to write to the file")
    include_diff: bool = Field(
        default=True, description="Include diff details in the response (default true)"
    )


class WriteFileResult(CamelModel):
    file_path: str
    size: int
    created: bool | None = None
    diff: str | None = None
    stats: DiffStats | None = None


class FileExistsRequest(CamelModel):
    file_path: str = Field(description="The path to check for existence")


class FileExistsResult(CamelModel):
    file_path: str
    exists: bool
    type: Literal["file", "directory", "other"] | None = None


class RenderMarkdownRequest(CamelModel):
    file_path: str = Field(description="The path to the markdown file to parse")


class Heading(CamelModel):
    level: int
    text: str


class Link(CamelModel):
    href: str
    text: str


class CodeBlockInfo(CamelModel):
    language: str
    line_count: int


class MarkdownStructure(CamelModel):
    heading_count: int = 0
    link_count: int = 0
    code_block_count: int = 0


class MarkdownMetadata(CamelModel):
    headings: list[Heading] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)
    code_blocks: list[CodeBlockInfo] = Field(default_factory=list)
    word_count: int = 0
    line_count: int = 0
    structure: MarkdownStructure = Field(default_factory=MarkdownStructure)


class RenderMarkdownResult(CamelModel):
    file_path: str
    is_markdown: bool
    content: str
    plain_text: str
    metadata: MarkdownMetadata


class ListDirectoryRequest(CamelModel):
    path: str = Field(default=".", description="Directory to list (e.g., '.')")


class DirectoryEntry(CamelModel):
    name: str
    type: Literal["file", "directory"]


class ListDirectoryResult(CamelModel):
    files: list[DirectoryEntry] = Field(default_factory=list)
    count: int
