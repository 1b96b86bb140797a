"""Tests for the tool registry's dispatch and payloads."""

import pytest

from termcoder.config import AssistantConfig, EditPolicy
from termcoder.tools.registry import ToolRegistry

TOOL_NAMES = [
    "editFile",
    "fileExists",
    "glob",
    "grep",
    "listDirectories",
    "previewEdit",
    "readFile",
    "renderMarkdown",
    "writeFile",
]


def test_list_tool_names(registry):
    """All tools are registered."""
    assert registry.list_tool_names() == TOOL_NAMES


def test_get(registry):
    """Lookup returns the tool or None."""
    assert registry.get("editFile").name == "editFile"
    assert registry.get("deleteFile") is None


def test_edit_file_payload_uses_camel_case(registry, workspace_dir):
    """Results use camelCase keys."""
    (workspace_dir / "a.txt").write_text("hello world")

    payload = registry.execute(
        "editFile", {"filePath": "a.txt", "oldString": "world", "newString": "there"}
    )

    assert payload["success"] is True
    assert payload["path"] == "a.txt"
    assert payload["stats"] == {"linesAdded": 1, "linesRemoved": 1, "totalChanges": 2}
    assert payload["validation"]["isValid"] is True
    assert payload["validation"]["changeStats"]["totalChanges"] == 2
    assert "message" not in payload
    assert (workspace_dir / "a.txt").read_text() == "hello there"


def test_gated_edit_payload(workspace, workspace_dir):
    """A held-back edit reports its validation instead of failing."""
    config = AssistantConfig(edit_policy=EditPolicy(max_line_chars=10))
    registry = ToolRegistry.build(workspace, config)
    (workspace_dir / "a.txt").write_text("x")

    payload = registry.execute(
        "editFile", {"filePath": "a.txt", "oldString": "x", "newString": "y" * 20}
    )

    assert payload["success"] is False
    assert payload["message"].startswith("Large or risky change")
    assert payload["preview"] == payload["diff"]
    assert payload["validation"]["warnings"] == ["Contains very long lines (>10 chars)"]


def test_string_not_found_payload(registry, workspace_dir):
    """A missing anchor becomes a StringNotFound payload."""
    (workspace_dir / "a.txt").write_text("hello")
    payload = registry.execute(
        "editFile", {"filePath": "a.txt", "oldString": "xyz", "newString": "abc"}
    )
    assert payload["errorType"] == "StringNotFound"
    assert payload["path"] == "a.txt"
    assert payload["oldString"] == "xyz"
    assert payload["error"]


def test_access_denied_payload(registry):
    """Escaping paths become a FileAccessDenied payload."""
    payload = registry.execute("readFile", {"filePath": "../../etc/passwd"})
    assert payload["errorType"] == "FileAccessDenied"
    assert payload["path"] == "../../etc/passwd"


def test_missing_file_payload(registry):
    """OS errors are reported with the offending path."""
    payload = registry.execute("readFile", {"filePath": "missing.txt"})
    assert payload["errorType"] == "FileNotFoundError"
    assert payload["path"].endswith("missing.txt")


def test_non_utf8_file_payload(registry, workspace_dir):
    """Undecodable files report UnicodeDecodeError."""
    (workspace_dir / "bin.dat").write_bytes(b"\xff\xfe\x00")
    payload = registry.execute("readFile", {"filePath": "bin.dat"})
    assert payload["errorType"] == "UnicodeDecodeError"


def test_empty_pattern_payload(registry):
    """A blank grep pattern becomes an EmptyPattern payload."""
    payload = registry.execute("grep", {"pattern": "  "})
    assert payload["errorType"] == "EmptyPattern"


def test_unknown_tool(registry):
    """Unregistered names are reported, not raised."""
    payload = registry.execute("deleteFile", {"filePath": "a"})
    assert payload["errorType"] == "UnknownTool"
    assert payload["tool"] == "deleteFile"


@pytest.mark.parametrize(
    "name, arguments",
    [
        ("readFile", {}),
        ("readFile", None),
        ("editFile", {"filePath": "a.txt", "oldString": "same", "newString": "same"}),
        ("grep", {"pattern": "x", "maxResults": 0}),
    ],
)
def test_invalid_input(registry, name, arguments):
    """Arguments failing validation become InvalidInput payloads."""
    payload = registry.execute(name, arguments)
    assert payload["errorType"] == "InvalidInput"
    assert payload["tool"] == name


def test_snake_case_arguments_are_accepted(registry, workspace_dir):
    """Field names work as well as aliases."""
    (workspace_dir / "a.txt").write_text("x")
    payload = registry.execute("fileExists", {"file_path": "a.txt"})
    assert payload == {"filePath": "a.txt", "exists": True, "type": "file"}


def test_list_directories_payload(registry, workspace_dir):
    """listDirectories runs with no arguments."""
    (workspace_dir / "src").mkdir()
    payload = registry.execute("listDirectories", {})
    assert payload == {"files": [{"name": "src", "type": "directory"}], "count": 1}


def test_preview_edit_payload(registry, workspace_dir):
    """previewEdit reports a lowercase recommendation."""
    (workspace_dir / "a.txt").write_text("one")
    payload = registry.execute(
        "previewEdit", {"filePath": "a.txt", "oldString": "one", "newString": "two"}
    )
    assert payload["recommendation"] == "proceed"
    assert (workspace_dir / "a.txt").read_text() == "one"


def test_anthropic_tool_schemas(registry):
    """Anthropic tool definitions carry camelCase JSON schemas."""
    tools = registry.anthropic_tools()
    assert sorted(tool["name"] for tool in tools) == TOOL_NAMES
    edit_tool = next(tool for tool in tools if tool["name"] == "editFile")
    schema = edit_tool["input_schema"]
    assert schema["type"] == "object"
    assert {"filePath", "oldString", "newString"} <= set(schema["required"])
    assert "replaceAll" in schema["properties"]
    assert edit_tool["description"]


def test_openai_tool_schemas(registry):
    """OpenAI function definitions carry the same schemas."""
    tools = registry.openai_tools()
    assert all(tool["type"] == "function" for tool in tools)
    grep_tool = next(tool for tool in tools if tool["function"]["name"] == "grep")
    assert grep_tool["function"]["parameters"]["required"] == ["pattern"]
    assert "contextLines" in grep_tool["function"]["parameters"]["properties"]
