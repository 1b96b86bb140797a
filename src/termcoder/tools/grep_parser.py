"""Reconstruction of grep matches with context from ripgrep's JSON output.

ripgrep ``--json`` emits one record per line. ``match`` and ``context``
records from many files are interleaved in a single stream, so state is kept
per file: a ring of the most recent context lines (the "before" window for the
next match) and the matches still collecting trailing context.
"""

import base64
import json
import logging
import os
from collections import deque
from dataclasses import dataclass, field

from termcoder.models.search_models import GrepMatch, ParsedGrepOutput

logger = logging.getLogger(__name__)


@dataclass
class _PendingMatch:
    match: GrepMatch
    remaining_after: int


@dataclass
class GrepFileState:
    ring: deque
    pending: list[_PendingMatch] = field(default_factory=list)


def _text_of(value: dict | None) -> str:
    """Decode a ripgrep ``{"text": ...}`` or ``{"bytes": base64}`` value."""
    if not value:
        return ""
    if "text" in value:
        return value["text"]
    raw = base64.b64decode(value.get("bytes", ""))
    return raw.decode("utf-8", errors="replace")


class GrepOutputParser:
    """Incremental parser for ripgrep JSON lines.

    Matches are appended to the result list as soon as they are seen and their
    ``context_after`` lists keep filling in as later context lines arrive, so
    results are only final after the last line has been fed.
    """

    def __init__(self, cwd: str, workspace_root: str, context_lines: int) -> None:
        self.cwd = cwd
        self.workspace_root = workspace_root
        self.context_lines = max(context_lines, 0)
        self.matches: list[GrepMatch] = []
        self.files_searched = 0
        self._states: dict[str, GrepFileState] = {}

    def _state_for(self, path_text: str) -> tuple[str, GrepFileState]:
        key = os.path.relpath(
            os.path.normpath(os.path.join(self.cwd, path_text)), self.workspace_root
        )
        state = self._states.get(key)
        if state is None:
            state = GrepFileState(ring=deque(maxlen=self.context_lines))
            self._states[key] = state
        return key, state

    def _on_context(self, state: GrepFileState, line: str) -> None:
        state.ring.append(line)
        for pending in state.pending:
            pending.match.context_after.append(line)
            pending.remaining_after -= 1
        state.pending = [p for p in state.pending if p.remaining_after > 0]

    def _on_match(self, key: str, state: GrepFileState, line_number: int, content: str) -> None:
        match = GrepMatch(
            file_path=key,
            line_number=line_number,
            content=content.rstrip(),
            context_before=list(state.ring),
            context_after=[],
        )
        if self.context_lines > 0:
            state.pending.append(_PendingMatch(match=match, remaining_after=self.context_lines))
        self.matches.append(match)

    def _on_summary(self, data: dict) -> None:
        searched = data.get("searched")
        if searched is None:
            searched = data.get("stats", {}).get("searches", 0)
        self.files_searched += int(searched)

    def feed(self, line: str) -> None:
        """Consume one line of output. Blank lines are ignored.

        Raises:
            json.JSONDecodeError: If the line is not valid JSON.
        """
        if not line.strip():
            return
        record = json.loads(line)
        kind = record.get("type")
        data = record.get("data", {})

        if kind == "summary":
            self._on_summary(data)
        elif kind == "context":
            _, state = self._state_for(_text_of(data.get("path")))
            self._on_context(state, _text_of(data.get("lines")).rstrip())
        elif kind == "match":
            key, state = self._state_for(_text_of(data.get("path")))
            self._on_match(key, state, int(data["line_number"]), _text_of(data.get("lines")))
        # "begin" and "end" records carry nothing needed here

    def result(self) -> ParsedGrepOutput:
        return ParsedGrepOutput(matches=self.matches, files_searched=self.files_searched)


def parse_grep_output(
    output: str,
    cwd: str,
    context_lines: int,
    workspace_root: str,
) -> ParsedGrepOutput:
    """Fold a complete ripgrep ``--json`` output through a GrepOutputParser."""
    parser = GrepOutputParser(cwd=cwd, workspace_root=workspace_root, context_lines=context_lines)
    for line in output.splitlines():
        parser.feed(line)
    logger.debug(
        "Parsed %d matches across %d searched files",
        len(parser.matches),
        parser.files_searched,
    )
    return parser.result()
