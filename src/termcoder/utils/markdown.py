"""Markdown structure extraction and plain-text rendering."""

import re

from termcoder.models.file_models import (
    CodeBlockInfo,
    Heading,
    Link,
    MarkdownMetadata,
    MarkdownStructure,
)

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn")

_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})\s*([\w+#.-]*)")
_ATX_HEADING_RE = re.compile(r"^\s{0,3}(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_SETEXT_RE = re.compile(r"^\s{0,3}(=+|-+)\s*$")
_HR_RE = re.compile(r"^\s{0,3}([-*_])(\s*\1){2,}\s*$")
_LINK_RE = re.compile(r"(?<!!)\[([^\]]*)\]\(\s*<?([^)\s>]+)>?(?:\s+[\"'][^\"']*[\"'])?\s*\)")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_INLINE_CODE_RE = re.compile(r"`+([^`]*)`+")
_EMPHASIS_RE = re.compile(r"(\*\*|__|\*|_|~~)(?=\S)(.+?)(?<=\S)\1")
_HTML_TAG_RE = re.compile(r"</?[A-Za-z][^>]*>")
_BLOCKQUOTE_RE = re.compile(r"^\s{0,3}>\s?")
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+(?:\[[ xX]\]\s+)?")


def is_markdown_file(file_path: str) -> bool:
    return file_path.lower().endswith(MARKDOWN_EXTENSIONS)


def _strip_inline(text: str) -> str:
    text = _IMAGE_RE.sub(r"\1", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _INLINE_CODE_RE.sub(r"\1", text)
    text = _HTML_TAG_RE.sub("", text)
    previous = None
    while previous != text:
        previous = text
        text = _EMPHASIS_RE.sub(r"\2", text)
    return text


def _extract_links(text: str) -> list[Link]:
    without_code = _INLINE_CODE_RE.sub("", text)
    return [
        Link(href=m.group(2), text=_strip_inline(m.group(1)))
        for m in _LINK_RE.finditer(without_code)
    ]


def parse_markdown(content: str) -> tuple[str, MarkdownMetadata]:
    """Parse markdown into plain text and structural metadata.

    Handles ATX and setext headings, fenced code blocks, inline links,
    emphasis, block quotes and list markers. Indented code blocks and
    reference-style links are treated as ordinary text.

    Returns:
        Tuple of (plain_text, metadata).
    """
    headings: list[Heading] = []
    links: list[Link] = []
    code_blocks: list[CodeBlockInfo] = []
    plain: list[str] = []

    fence: str | None = None
    fence_lang = ""
    fence_lines: list[str] = []
    previous_text: str | None = None

    for line in content.split("\n"):
        if fence is not None:
            stripped = line.strip()
            if stripped.startswith(fence[0] * len(fence)) and not stripped.strip(fence[0]):
                code_blocks.append(
                    CodeBlockInfo(
                        language=fence_lang or "text",
                        line_count=len(fence_lines) if fence_lines else 1,
                    )
                )
                plain.extend(fence_lines)
                fence = None
                fence_lines = []
            else:
                fence_lines.append(line)
            continue

        fence_match = _FENCE_RE.match(line)
        if fence_match:
            fence = fence_match.group(1)
            fence_lang = fence_match.group(2)
            previous_text = None
            continue

        heading_match = _ATX_HEADING_RE.match(line)
        if heading_match:
            text = _strip_inline(heading_match.group(2))
            headings.append(Heading(level=len(heading_match.group(1)), text=text))
            links.extend(_extract_links(heading_match.group(2)))
            plain.append(text)
            previous_text = None
            continue

        setext_match = _SETEXT_RE.match(line)
        if setext_match and previous_text:
            level = 1 if setext_match.group(1).startswith("=") else 2
            headings.append(Heading(level=level, text=_strip_inline(previous_text)))
            previous_text = None
            continue

        if _HR_RE.match(line):
            previous_text = None
            continue

        body = _LIST_MARKER_RE.sub("", _BLOCKQUOTE_RE.sub("", line))
        links.extend(_extract_links(body))
        plain.append(_strip_inline(body).rstrip())
        previous_text = body.strip() or None

    if fence is not None:
        # Unterminated fence runs to the end of the document
        code_blocks.append(
            CodeBlockInfo(language=fence_lang or "text", line_count=max(len(fence_lines), 1))
        )
        plain.extend(fence_lines)

    metadata = MarkdownMetadata(
        headings=headings,
        links=links,
        code_blocks=code_blocks,
        word_count=len(content.split()),
        line_count=len(content.split("\n")),
        structure=MarkdownStructure(
            heading_count=len(headings),
            link_count=len(links),
            code_block_count=len(code_blocks),
        ),
    )
    return "\n".join(plain).strip("\n"), metadata


def plain_metadata(content: str) -> MarkdownMetadata:
    """Metadata for a file that is not markdown: counts only."""
    return MarkdownMetadata(
        word_count=len(content.split()),
        line_count=len(content.split("\n")),
    )
