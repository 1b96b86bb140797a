import json
import logging
from pathlib import Path

import pytest

from termcoder.logging_utils import LOGGER_NAME
from termcoder.services.path_guard import PathGuard
from termcoder.services.workspace import WorkspaceRoot
from termcoder.tools.edit_tools import EditTools
from termcoder.tools.registry import ToolRegistry


@pytest.fixture(autouse=True)
def package_logger():
    """Restore the package logger after tests that configure it."""
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


@pytest.fixture
def workspace_dir(tmp_path) -> Path:
    ws = tmp_path / "ws"
    ws.mkdir()
    return ws


@pytest.fixture
def workspace(workspace_dir):
    return WorkspaceRoot.from_path(workspace_dir)


@pytest.fixture
def path_guard(workspace):
    return PathGuard(workspace)


@pytest.fixture
def edit_tools(path_guard):
    return EditTools(path_guard)


@pytest.fixture
def registry(workspace):
    return ToolRegistry.build(workspace)


def rg_record(kind: str, path: str, line_number: int, text: str) -> str:
    """One ripgrep --json line for a match or context record."""
    return json.dumps(
        {
            "type": kind,
            "data": {
                "path": {"text": path},
                "lines": {"text": text + "\n"},
                "line_number": line_number,
                "absolute_offset": 0,
                "submatches": [],
            },
        }
    )


def rg_summary(searched: int) -> str:
    return json.dumps({"type": "summary", "data": {"searched": searched}})
